from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import IntegrityError
from timeline import db
from timeline.api import game_rng, is_int
from timeline.models import Card
from timeline.services.game.cards import MAX_DIFFICULTY, MIN_DIFFICULTY, to_instant
from timeline.services.game.errors import CardValidationError

cards = Blueprint('cards', __name__)


def _parse_card_fields(data, partial=False):
    """Validate card fields from a request body, returning column values."""
    fields = {}
    required = ('title', 'dateOccurred', 'category', 'difficulty')
    if not partial:
        missing = [name for name in required if data.get(name) in (None, '')]
        if missing:
            raise CardValidationError('Missing required fields: title, dateOccurred, category, difficulty')

    for name in ('title', 'category'):
        if name in data:
            value = data.get(name)
            if not isinstance(value, str) or not value.strip():
                raise CardValidationError(f"{name} must be a non-empty string")
            fields[name] = value.strip()

    if 'dateOccurred' in data:
        fields['date_occurred'] = to_instant(data['dateOccurred']).date()

    if 'difficulty' in data:
        difficulty = data['difficulty']
        if not is_int(difficulty) or not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
            raise CardValidationError('Difficulty must be between 1 and 5')
        fields['difficulty'] = difficulty

    if 'description' in data:
        description = data['description']
        if description is not None and not isinstance(description, str):
            raise CardValidationError('description must be a string')
        fields['description'] = description or None
    return fields


def _duplicate_exists(title, date_occurred, exclude_id=None):
    query = Card.query.filter_by(title=title, date_occurred=date_occurred)
    if exclude_id is not None:
        query = query.filter(Card.id != exclude_id)
    return query.first() is not None


@cards.route('/cards', methods=['GET'])
def list_cards():
    """
    Lists cards, optionally filtered by category and difficulty.
    """
    query = Card.query
    category = request.args.get('category')
    if category:
        query = query.filter(db.func.lower(Card.category) == category.lower())
    difficulty = request.args.get('difficulty', type=int)
    if difficulty is not None:
        if not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
            return jsonify({'error': 'Difficulty level must be between 1 and 5'}), 400
        query = query.filter(Card.difficulty == difficulty)
    results = [c.to_dict() for c in query.order_by(Card.date_occurred, Card.id).all()]
    return jsonify({'count': len(results), 'data': results}), 200


@cards.route('/cards/random/<int:count>', methods=['GET'])
def random_cards(count):
    """
    Returns ``count`` distinct cards in random order.
    """
    available = Card.query.order_by(Card.id).all()
    if count < 1:
        return jsonify({'error': 'Count must be at least 1'}), 400
    if count > len(available):
        return jsonify({'error': f'Requested {count} events but only {len(available)} available'}), 400
    selected = game_rng().sample(available, count)
    return jsonify({'count': len(selected), 'data': [c.to_dict() for c in selected]}), 200


@cards.route('/cards/<int:card_id>', methods=['GET'])
def get_card(card_id):
    card = db.get_or_404(Card, card_id)
    return jsonify(card.to_dict()), 200


@cards.route('/categories', methods=['GET'])
def list_categories():
    rows = db.session.query(Card.category).distinct().order_by(Card.category).all()
    categories = [row[0] for row in rows]
    return jsonify({'count': len(categories), 'data': categories}), 200


@cards.route('/cards', methods=['POST'])
def create_card():
    """
    Adds a historical event card. Title and date together must be unique.
    """
    data = request.get_json(silent=True) or {}
    try:
        fields = _parse_card_fields(data)
    except CardValidationError as exc:
        return jsonify({'error': str(exc)}), 400

    if _duplicate_exists(fields['title'], fields['date_occurred']):
        return jsonify({'error': 'Card with this title and date already exists'}), 409

    card = Card(**fields)
    db.session.add(card)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'error': 'Card with this title and date already exists'}), 409

    current_app.logger.info(f"[card-create] card={card.id} title={card.title!r}")
    return jsonify(card.to_dict()), 201


@cards.route('/cards/<int:card_id>', methods=['PUT'])
def update_card(card_id):
    card = db.get_or_404(Card, card_id)
    data = request.get_json(silent=True) or {}
    try:
        fields = _parse_card_fields(data, partial=True)
    except CardValidationError as exc:
        return jsonify({'error': str(exc)}), 400

    title = fields.get('title', card.title)
    date_occurred = fields.get('date_occurred', card.date_occurred)
    if _duplicate_exists(title, date_occurred, exclude_id=card.id):
        return jsonify({'error': 'Card with this title and date already exists'}), 409

    for name, value in fields.items():
        setattr(card, name, value)
    db.session.commit()
    current_app.logger.info(f"[card-update] card={card.id}")
    return jsonify(card.to_dict()), 200


@cards.route('/cards/<int:card_id>', methods=['DELETE'])
def delete_card(card_id):
    card = db.get_or_404(Card, card_id)
    db.session.delete(card)
    db.session.commit()
    current_app.logger.info(f"[card-delete] card={card_id}")
    return jsonify({'message': 'Card deleted', 'id': card_id}), 200
