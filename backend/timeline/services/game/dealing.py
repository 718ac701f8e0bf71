import random
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence, Tuple, TypeVar

from .errors import SettingsValidationError

MIN_DIFFICULTY_LEVEL = 1
MAX_DIFFICULTY_LEVEL = 5
MAX_PLAYER_NAME_LENGTH = 100

T = TypeVar('T')


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class GameSettings:
    """Per-session options chosen by the player."""

    difficulty_level: int = 1
    card_count: int = 5
    categories: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any], max_card_count: int = 50) -> 'GameSettings':
        difficulty_level = data.get('difficulty_level')
        card_count = data.get('card_count')
        if difficulty_level is None or card_count is None:
            raise SettingsValidationError(
                'Missing required fields: player_name, difficulty_level, card_count'
            )
        if not _is_int(difficulty_level) or not (
            MIN_DIFFICULTY_LEVEL <= difficulty_level <= MAX_DIFFICULTY_LEVEL
        ):
            raise SettingsValidationError('Difficulty level must be between 1 and 5')
        if not _is_int(card_count) or not 1 <= card_count <= max_card_count:
            raise SettingsValidationError(f"Card count must be between 1 and {max_card_count}")

        categories = data.get('categories') or []
        if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
            raise SettingsValidationError('Categories must be a list of strings')

        return cls(
            difficulty_level=difficulty_level,
            card_count=card_count,
            categories=tuple(c.strip() for c in categories if c.strip()),
        )


def validate_player_name(name: Any) -> str:
    if name is None:
        raise SettingsValidationError(
            'Missing required fields: player_name, difficulty_level, card_count'
        )
    if not isinstance(name, str):
        raise SettingsValidationError('Player name must be a string')
    trimmed = name.strip()
    if not trimmed or len(trimmed) > MAX_PLAYER_NAME_LENGTH:
        raise SettingsValidationError('Player name must be between 1 and 100 characters')
    return trimmed


def select_eligible(cards: Sequence[T], settings: GameSettings) -> List[T]:
    """Cards no harder than the session level, limited to the chosen categories if any."""
    wanted = {c.lower() for c in settings.categories}
    return [
        card
        for card in cards
        if card.difficulty <= settings.difficulty_level
        and (not wanted or card.category.lower() in wanted)
    ]


def deal(cards: Sequence[T], card_count: int, rng: random.Random) -> Tuple[T, List[T]]:
    """Shuffle and split into a seed card for the timeline plus the player's hand."""
    needed = card_count + 1
    if len(cards) < needed:
        raise SettingsValidationError(
            f"Requested {card_count} cards but only {max(0, len(cards) - 1)} available"
        )
    shuffled = list(cards)
    rng.shuffle(shuffled)
    chosen = shuffled[:needed]
    return chosen[0], chosen[1:]
