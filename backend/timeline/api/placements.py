from flask import Blueprint, jsonify, request
from timeline.api import game_rng, is_int
from timeline.services.game.cards import EventCard
from timeline.services.game.errors import CardValidationError
from timeline.services.game.placement import validate_placement
from timeline.services.game.scoring import calculate_score

placements = Blueprint('placements', __name__)


@placements.route('/validate', methods=['POST'])
def validate():
    """
    Judges a placement for a client-held timeline without touching any session.
    """
    data = request.get_json(silent=True) or {}
    try:
        card = EventCard.from_mapping(data.get('card'))
        raw_timeline = data.get('timeline') or []
        if not isinstance(raw_timeline, list):
            raise CardValidationError('timeline must be a list of cards')
        timeline = [EventCard.from_mapping(entry) for entry in raw_timeline]
    except CardValidationError as exc:
        return jsonify({'error': str(exc)}), 400

    position = data.get('position')
    if not is_int(position) or not 0 <= position <= len(timeline):
        return jsonify({'error': f'position must be an integer between 0 and {len(timeline)}'}), 400

    time_taken = data.get('time_taken_seconds', 0)
    attempts = data.get('attempts', 1)
    if isinstance(time_taken, bool) or not isinstance(time_taken, (int, float)) or time_taken < 0:
        return jsonify({'error': 'time_taken_seconds must be a non-negative number'}), 400
    if not is_int(attempts) or attempts < 1:
        return jsonify({'error': 'attempts must be a positive integer'}), 400

    verdict = validate_placement(card, timeline, position, rng=game_rng())
    points = calculate_score(verdict.is_correct, time_taken, attempts, card.difficulty)
    response = verdict.to_dict()
    response['points'] = points
    response['card'] = card.to_dict()
    return jsonify(response), 200
