from timeline import db
from timeline.services.game.cards import EventCard, to_instant
from datetime import datetime, timezone
import json
import uuid

SESSION_ACTIVE = 'active'
SESSION_COMPLETED = 'completed'
SESSION_ABANDONED = 'abandoned'


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _new_uuid():
    return str(uuid.uuid4())


def _load_ids(raw):
    try:
        return json.loads(raw) if raw else []
    except ValueError:
        return []


def _iso(value):
    return value.isoformat() if value else None


class Card(db.Model):
    __tablename__ = 'cards'
    __table_args__ = (
        db.UniqueConstraint('title', 'date_occurred', name='uq_cards_title_date'),
        db.CheckConstraint('difficulty >= 1 AND difficulty <= 5', name='ck_cards_difficulty'),
    )
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    date_occurred = db.Column(db.Date, nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    difficulty = db.Column(db.Integer, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_event_card(self):
        return EventCard(
            id=self.id,
            title=self.title,
            date_occurred=to_instant(self.date_occurred),
            category=self.category,
            difficulty=self.difficulty,
            description=self.description,
        )

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'dateOccurred': self.date_occurred.isoformat(),
            'category': self.category,
            'difficulty': self.difficulty,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }


def cards_by_ids(ids):
    """Fetch cards keeping the order of ``ids``; unknown ids are skipped."""
    if not ids:
        return []
    found = {c.id: c for c in Card.query.filter(Card.id.in_(ids)).all()}
    return [found[i] for i in ids if i in found]


class GameSession(db.Model):
    __tablename__ = 'game_sessions'
    id = db.Column(db.String(36), primary_key=True, default=_new_uuid)
    player_name = db.Column(db.String(100), nullable=False, index=True)
    difficulty_level = db.Column(db.Integer, nullable=False)
    card_count = db.Column(db.Integer, nullable=False)
    categories = db.Column(db.Text, nullable=True)  # JSON-encoded list of category names
    status = db.Column(db.String(20), nullable=False, default=SESSION_ACTIVE, index=True) # active, completed, abandoned
    score = db.Column(db.Integer, nullable=False, default=0)
    total_moves = db.Column(db.Integer, nullable=False, default=0)
    correct_moves = db.Column(db.Integer, nullable=False, default=0)
    incorrect_moves = db.Column(db.Integer, nullable=False, default=0)
    hints_used = db.Column(db.Integer, nullable=False, default=0)
    # JSON-encoded lists of card ids; the timeline is kept in chronological order
    timeline_card_ids = db.Column(db.Text, nullable=True)
    hand_card_ids = db.Column(db.Text, nullable=True)
    discarded_card_ids = db.Column(db.Text, nullable=True)
    start_time = db.Column(db.DateTime, default=utcnow, index=True)
    end_time = db.Column(db.DateTime, nullable=True)
    duration_seconds = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
    moves = db.relationship(
        'GameMove', back_populates='session', order_by='GameMove.move_number',
        cascade='all, delete-orphan', lazy='dynamic',
    )

    @property
    def category_list(self):
        return _load_ids(self.categories)

    @property
    def timeline_ids(self):
        return _load_ids(self.timeline_card_ids)

    @timeline_ids.setter
    def timeline_ids(self, ids):
        self.timeline_card_ids = json.dumps(list(ids))

    @property
    def hand_ids(self):
        return _load_ids(self.hand_card_ids)

    @hand_ids.setter
    def hand_ids(self, ids):
        self.hand_card_ids = json.dumps(list(ids))

    @property
    def discarded_ids(self):
        return _load_ids(self.discarded_card_ids)

    @discarded_ids.setter
    def discarded_ids(self, ids):
        self.discarded_card_ids = json.dumps(list(ids))

    @property
    def is_active(self):
        return self.status == SESSION_ACTIVE

    def close(self, status):
        self.status = status
        self.end_time = utcnow()
        if self.start_time:
            self.duration_seconds = int((self.end_time - self.start_time).total_seconds())

    def to_dict(self, include_cards=False):
        data = {
            'id': self.id,
            'player_name': self.player_name,
            'difficulty_level': self.difficulty_level,
            'card_count': self.card_count,
            'categories': self.category_list,
            'status': self.status,
            'score': self.score or 0,
            'total_moves': self.total_moves or 0,
            'correct_moves': self.correct_moves or 0,
            'incorrect_moves': self.incorrect_moves or 0,
            'hints_used': self.hints_used or 0,
            'hand_size': len(self.hand_ids),
            'start_time': _iso(self.start_time),
            'end_time': _iso(self.end_time),
            'duration_seconds': self.duration_seconds,
        }
        if include_cards:
            timeline = sorted(cards_by_ids(self.timeline_ids), key=lambda c: c.date_occurred)
            data['timeline'] = [c.to_dict() for c in timeline]
            data['hand'] = [c.to_dict() for c in cards_by_ids(self.hand_ids)]
        return data


class GameMove(db.Model):
    __tablename__ = 'game_moves'
    id = db.Column(db.String(36), primary_key=True, default=_new_uuid)
    session_id = db.Column(db.String(36), db.ForeignKey('game_sessions.id', ondelete='CASCADE'), nullable=False, index=True)
    card_id = db.Column(db.Integer, db.ForeignKey('cards.id', ondelete='CASCADE'), nullable=False, index=True)
    move_number = db.Column(db.Integer, nullable=False)
    proposed_position = db.Column(db.Integer, nullable=False)
    correct_position = db.Column(db.Integer, nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False)
    # What the client claimed; null when it did not say
    client_is_correct = db.Column(db.Boolean, nullable=True)
    verdict_mismatch = db.Column(db.Boolean, nullable=False, default=False)
    attempt_number = db.Column(db.Integer, nullable=False, default=1)
    points = db.Column(db.Integer, nullable=False, default=0)
    time_taken_seconds = db.Column(db.Float, nullable=True)
    feedback = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    session = db.relationship('GameSession', back_populates='moves')
    card = db.relationship('Card')

    def to_dict(self):
        return {
            'id': self.id,
            'session_id': self.session_id,
            'card_id': self.card_id,
            'move_number': self.move_number,
            'proposed_position': self.proposed_position,
            'correct_position': self.correct_position,
            'is_correct': self.is_correct,
            'client_is_correct': self.client_is_correct,
            'verdict_mismatch': self.verdict_mismatch,
            'attempt_number': self.attempt_number,
            'points': self.points,
            'time_taken_seconds': self.time_taken_seconds,
            'feedback': self.feedback,
            'created_at': _iso(self.created_at),
        }
