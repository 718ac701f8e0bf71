from datetime import date, datetime

import pytest

from timeline.services.game.cards import EventCard, to_instant
from timeline.services.game.errors import CardValidationError


def test_from_mapping_accepts_camel_case():
    card = EventCard.from_mapping({
        'id': 3,
        'title': ' Berlin Wall falls ',
        'dateOccurred': '1989-11-09',
        'category': 'History',
        'difficulty': 1,
    })
    assert card.title == 'Berlin Wall falls'
    assert card.date_occurred == datetime(1989, 11, 9)
    assert card.year == 1989
    assert card.to_dict()['dateOccurred'] == '1989-11-09'


def test_from_mapping_accepts_snake_case_and_string_ids():
    card = EventCard.from_mapping({
        'id': 'moon',
        'title': 'First Moon Landing',
        'date_occurred': '1969-07-20T20:17:00Z',
        'category': 'Space',
    })
    assert card.id == 'moon'
    assert card.difficulty == 1
    assert card.date_occurred == datetime(1969, 7, 20, 20, 17)


@pytest.mark.parametrize('changes', [
    {'id': None},
    {'title': ''},
    {'title': '   '},
    {'category': None},
    {'dateOccurred': 'not a date'},
    {'dateOccurred': None},
    {'difficulty': 0},
    {'difficulty': 6},
    {'difficulty': '3'},
    {'description': 12},
])
def test_from_mapping_rejects_bad_fields(changes):
    data = {
        'id': 1,
        'title': 'Titanic sinks',
        'dateOccurred': '1912-04-15',
        'category': 'History',
        'difficulty': 2,
    }
    data.update(changes)
    with pytest.raises(CardValidationError):
        EventCard.from_mapping(data)


def test_from_mapping_rejects_non_mapping():
    with pytest.raises(CardValidationError):
        EventCard.from_mapping(['Titanic sinks'])


def test_to_instant_normalises_inputs():
    assert to_instant(date(476, 9, 4)) == datetime(476, 9, 4)
    assert to_instant('0476-09-04') == datetime(476, 9, 4)
    assert to_instant('1969-07-20T22:17:00+02:00') == datetime(1969, 7, 20, 20, 17)
    with pytest.raises(CardValidationError):
        to_instant(1969)


def test_cards_are_immutable():
    card = EventCard(id=1, title='x', date_occurred=datetime(2000, 1, 1), category='c')
    with pytest.raises(AttributeError):
        card.title = 'y'
