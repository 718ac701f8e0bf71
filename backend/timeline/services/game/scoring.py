import math

BASE_POINTS = 100
MAX_TIME_BONUS = 50
TIME_BONUS_DECAY_PER_SEC = 10
ATTEMPT_PENALTY = 25
MIN_CORRECT_POINTS = 10


def calculate_score(
    is_correct: bool,
    time_to_place_seconds: float = 0,
    attempts: int = 1,
    difficulty: int = 1,
) -> int:
    """Points for one placement.

    100 per difficulty level, plus up to 50 for speed (losing 10 per second),
    minus 25 per extra attempt. A correct placement never earns less than 10;
    an incorrect one earns nothing. Inputs are not clamped.
    """
    if not is_correct:
        return 0

    base = BASE_POINTS * difficulty
    time_bonus = max(0, MAX_TIME_BONUS - time_to_place_seconds * TIME_BONUS_DECAY_PER_SEC)
    attempt_penalty = (attempts - 1) * ATTEMPT_PENALTY
    raw = base + time_bonus - attempt_penalty
    # half-up, not banker's rounding
    return max(MIN_CORRECT_POINTS, int(math.floor(raw + 0.5)))
