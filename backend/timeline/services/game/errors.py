class GameError(ValueError):
    """Base class for rule violations reported back to the caller."""

    status_code = 400


class CardValidationError(GameError):
    pass


class SettingsValidationError(GameError):
    pass


class SessionClosedError(GameError):
    pass


class PlacementError(GameError):
    pass


class VerdictMismatchError(GameError):
    """Client-reported correctness disagrees with the server verdict."""

    status_code = 409
