import random
from typing import Optional, Sequence

from .cards import EventCard

CORRECT_TEMPLATES = (
    'Perfect! {title} ({year}) is correctly placed!',
    'Excellent placement! {title} ({year}) is correctly placed!',
    'Spot on! {title} ({year}) is correctly placed!',
    'Great historical knowledge! {title} ({year}) is correctly placed!',
    'Nailed it! {title} ({year}) is correctly placed!',
)

EMPTY_TIMELINE_TEMPLATE = 'Close! {title} occurred in {year}. Try a different position.'

CORRECTIVE_TEMPLATES = (
    '{title} ({year}) happened {direction} in history. Try again!',
    'Not quite! {title} occurred in {year}, {direction} than where you placed it. '
    'Think about the historical context.',
    'Good try! {title} ({year}) needs to be placed {direction} on the timeline.',
)


def generate_feedback(
    card: EventCard,
    timeline: Sequence[EventCard],
    placed_position: int,
    correct_position: int,
    is_correct: bool,
    rng: Optional[random.Random] = None,
) -> str:
    rng = rng or random.Random()
    year = card.year

    if is_correct:
        return rng.choice(CORRECT_TEMPLATES).format(title=card.title, year=year)

    if not timeline:
        return EMPTY_TIMELINE_TEMPLATE.format(title=card.title, year=year)

    direction = 'later' if placed_position < correct_position else 'earlier'
    return rng.choice(CORRECTIVE_TEMPLATES).format(
        title=card.title, year=year, direction=direction
    )


def generate_hint(card: EventCard, timeline: Sequence[EventCard]) -> str:
    """Point the player at the right region of the timeline without revealing the slot."""
    year = card.year
    if not timeline:
        decade = (year // 10) * 10
        return f"This event happened in the {decade}s!"

    years = [entry.year for entry in timeline]
    hint = f"This event occurred in {year}. "
    if year < min(years):
        hint += 'It happened before all events currently on the timeline.'
    elif year > max(years):
        hint += 'It happened after all events currently on the timeline.'
    else:
        hint += 'It fits somewhere in the middle of your current timeline.'
    return hint
