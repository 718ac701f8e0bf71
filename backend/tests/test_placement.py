import random
from datetime import date, timedelta

import pytest

from timeline.services.game.feedback import CORRECTIVE_TEMPLATES
from timeline.services.game.placement import find_correct_position, validate_placement


def _random_timeline(make_card, rng, size, distinct=True):
    start = date(1000, 1, 1)
    if distinct:
        offsets = rng.sample(range(0, 365 * 1000), size)
    else:
        offsets = [rng.randrange(0, 20) for _ in range(size)]
    return [make_card(start + timedelta(days=o)) for o in offsets]


def test_scenario_a_card_after_single_entry(make_card):
    timeline = [make_card('1939-09-01')]
    card = make_card('1989-11-09', title='Berlin Wall falls')
    verdict = validate_placement(card, timeline, 1)
    assert verdict.is_correct is True
    assert verdict.correct_position == 1


def test_scenario_b_too_early_says_later(make_card):
    timeline = [make_card('1939-09-01'), make_card('1969-07-20')]
    card = make_card('1989-11-09', title='Berlin Wall falls')
    verdict = validate_placement(card, timeline, 0, rng=random.Random(0))
    assert verdict.is_correct is False
    assert verdict.correct_position == 2
    assert 'later' in verdict.feedback
    assert 'Berlin Wall falls' in verdict.feedback


def test_too_late_says_earlier(make_card):
    timeline = [make_card('1939-09-01'), make_card('1969-07-20')]
    card = make_card('1912-04-15', title='Titanic sinks')
    verdict = validate_placement(card, timeline, 2, rng=random.Random(0))
    assert verdict.is_correct is False
    assert verdict.correct_position == 0
    assert 'earlier' in verdict.feedback


def test_scenario_c_empty_timeline(make_card):
    verdict = validate_placement(make_card('1066-10-14'), [], 0)
    assert verdict.is_correct is True
    assert verdict.correct_position == 0


def test_equal_date_goes_before_existing_entry(make_card):
    existing = make_card('1989-11-09', title='Berlin Wall falls')
    same_day = make_card('1989-11-09', title='Same day event')
    assert find_correct_position(same_day, [existing]) == 0
    # either side of an equal date is still chronological
    assert validate_placement(same_day, [existing], 0).is_correct
    assert validate_placement(same_day, [existing], 1).is_correct
    assert validate_placement(same_day, [existing], 1).correct_position == 0


def test_equal_dates_between_duplicates(make_card):
    timeline = [make_card('1900-01-01'), make_card('1950-01-01'), make_card('1950-01-01'), make_card('2000-01-01')]
    card = make_card('1950-01-01')
    verdict = validate_placement(card, timeline, 3)
    assert verdict.correct_position == 1
    assert verdict.is_correct
    assert not validate_placement(card, timeline, 0).is_correct
    assert not validate_placement(card, timeline, 4).is_correct


@pytest.mark.parametrize('seed', range(20))
def test_correct_position_is_always_accepted(make_card, seed):
    rng = random.Random(seed)
    timeline = _random_timeline(make_card, rng, rng.randrange(0, 12), distinct=seed % 2 == 0)
    card = _random_timeline(make_card, rng, 1, distinct=seed % 2 == 0)[0]
    verdict = validate_placement(card, timeline, 0)
    assert validate_placement(card, timeline, verdict.correct_position).is_correct


@pytest.mark.parametrize('seed', range(10))
def test_only_the_correct_position_is_accepted_for_distinct_dates(make_card, seed):
    rng = random.Random(seed)
    dated = _random_timeline(make_card, rng, 9, distinct=True)
    card, timeline = dated[0], dated[1:]
    correct = validate_placement(card, timeline, 0).correct_position
    for index in range(len(timeline) + 1):
        verdict = validate_placement(card, timeline, index)
        assert verdict.is_correct is (index == correct)
        assert verdict.correct_position == correct


@pytest.mark.parametrize('seed', range(10))
def test_input_order_does_not_matter(make_card, seed):
    rng = random.Random(seed)
    dated = _random_timeline(make_card, rng, 8, distinct=True)
    card, timeline = dated[0], dated[1:]
    shuffled = list(timeline)
    rng.shuffle(shuffled)
    ordered = sorted(timeline, key=lambda c: c.date_occurred)
    for index in range(len(timeline) + 1):
        a = validate_placement(card, shuffled, index)
        b = validate_placement(card, ordered, index)
        assert (a.is_correct, a.correct_position) == (b.is_correct, b.correct_position)


def test_timeline_argument_is_not_modified(make_card):
    timeline = [make_card('1969-07-20'), make_card('1939-09-01')]
    before = list(timeline)
    validate_placement(make_card('1950-01-01'), timeline, 1)
    assert timeline == before


def test_out_of_range_index_is_clamped(make_card):
    timeline = [make_card('1939-09-01'), make_card('1969-07-20')]
    late = make_card('2007-06-29')
    early = make_card('1440-01-01')
    assert validate_placement(late, timeline, 99).is_correct
    assert validate_placement(early, timeline, -5).is_correct


def test_verdict_carries_feedback_and_date(make_card):
    timeline = [make_card('1939-09-01')]
    card = make_card('1912-04-15', title='Titanic sinks')
    verdict = validate_placement(card, timeline, 1, rng=random.Random(1))
    expected = {
        t.format(title='Titanic sinks', year=1912, direction='earlier') for t in CORRECTIVE_TEMPLATES
    }
    assert verdict.feedback in expected
    assert verdict.date_occurred == card.date_occurred
    assert verdict.to_dict()['correct_position'] == 0
