from functools import cmp_to_key
from typing import List, Sequence

from .cards import EventCard


def compare_cards(a: EventCard, b: EventCard) -> int:
    """Return -1, 0 or 1 as ``a`` occurred before, with, or after ``b``."""
    if a.date_occurred < b.date_occurred:
        return -1
    if a.date_occurred > b.date_occurred:
        return 1
    return 0


def sort_timeline(timeline: Sequence[EventCard]) -> List[EventCard]:
    """Return a new list sorted oldest first. Equal dates keep their input order."""
    return sorted(timeline, key=cmp_to_key(compare_cards))


def is_chronological(timeline: Sequence[EventCard]) -> bool:
    for prev, curr in zip(timeline, timeline[1:]):
        if compare_cards(prev, curr) > 0:
            return False
    return True
