import random
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from .cards import EventCard
from .chronology import compare_cards, is_chronological, sort_timeline
from .feedback import generate_feedback


@dataclass(frozen=True)
class PlacementVerdict:
    is_correct: bool
    correct_position: int
    feedback: str
    date_occurred: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            'is_correct': self.is_correct,
            'correct_position': self.correct_position,
            'feedback': self.feedback,
            'date_occurred': self.date_occurred.isoformat() if self.date_occurred else None,
        }


def find_correct_position(card: EventCard, sorted_timeline: Sequence[EventCard]) -> int:
    """Index of the first entry occurring on or after ``card``.

    A card dated the same as an existing entry belongs before that entry.
    """
    for index, entry in enumerate(sorted_timeline):
        if compare_cards(card, entry) <= 0:
            return index
    return len(sorted_timeline)


def validate_placement(
    card: EventCard,
    timeline: Sequence[EventCard],
    proposed_index: int,
    rng: Optional[random.Random] = None,
) -> PlacementVerdict:
    """Judge inserting ``card`` into ``timeline`` at ``proposed_index``.

    The timeline is re-sorted before judging, so callers may pass it in any
    order. Correctness is decided by whether the resulting sequence is still
    chronological; the canonical position is reported separately.
    """
    sorted_timeline = sort_timeline(timeline)
    correct_position = find_correct_position(card, sorted_timeline)

    index = min(max(proposed_index, 0), len(sorted_timeline))
    candidate = list(sorted_timeline)
    candidate.insert(index, card)
    is_correct = is_chronological(candidate)

    feedback = generate_feedback(card, timeline, index, correct_position, is_correct, rng=rng)
    return PlacementVerdict(
        is_correct=is_correct,
        correct_position=correct_position,
        feedback=feedback,
        date_occurred=card.date_occurred,
    )
