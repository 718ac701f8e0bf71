import os
import sys
from datetime import date

import pytest

# Ensure the backend root (containing the `timeline` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from timeline import create_app, db, socketio
from timeline.services.game.cards import EventCard, to_instant


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = 'DEBUG'
    DEFAULT_CARD_COUNT = 5
    MAX_CARD_COUNT = 50
    STRICT_VERDICTS = False
    GAME_RANDOM_SEED = None


class StrictConfig(TestConfig):
    STRICT_VERDICTS = True


# Distinct dates, all difficulty <= 2 so a level-2 session can deal every card
CARD_ROWS = [
    ("Printing Press invented", date(1440, 1, 1), "Technology", 2),
    ("American Civil War ends", date(1865, 4, 9), "History", 2),
    ("Titanic sinks", date(1912, 4, 15), "History", 2),
    ("World War II begins", date(1939, 9, 1), "History", 1),
    ("First Moon Landing", date(1969, 7, 20), "Space", 2),
    ("Berlin Wall falls", date(1989, 11, 9), "History", 1),
    ("iPhone is released", date(2007, 6, 29), "Technology", 1),
]


def _build_app(config_class):
    application = create_app(config_class)
    with application.app_context():
        # Ensure models are imported so tables are created
        import timeline.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def flask_app():
    yield from _build_app(TestConfig)


@pytest.fixture()
def strict_app():
    yield from _build_app(StrictConfig)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def strict_client(strict_app):
    return strict_app.test_client()


def _insert_cards():
    from timeline.models import Card
    rows = []
    for title, occurred, category, difficulty in CARD_ROWS:
        card = Card(title=title, date_occurred=occurred, category=category, difficulty=difficulty)
        db.session.add(card)
        rows.append(card)
    db.session.commit()
    return [c.id for c in rows]


@pytest.fixture()
def seeded_cards(flask_app):
    return _insert_cards()


@pytest.fixture()
def strict_seeded_cards(strict_app):
    return _insert_cards()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def make_card():
    counter = {'next': 1}

    def _make(occurred, title=None, difficulty=1, category='History', card_id=None):
        if card_id is None:
            card_id = counter['next']
            counter['next'] += 1
        return EventCard(
            id=card_id,
            title=title or f'Event {card_id}',
            date_occurred=to_instant(occurred),
            category=category,
            difficulty=difficulty,
        )

    return _make
