import random

from flask import current_app


def game_rng() -> random.Random:
    """Random source for dealing and feedback, seeded when GAME_RANDOM_SEED is set."""
    seed = current_app.config.get('GAME_RANDOM_SEED')
    return random.Random(seed) if seed not in (None, '') else random.Random()


def is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
