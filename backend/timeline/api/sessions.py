from flask import Blueprint, current_app, jsonify, request
from timeline import db
from timeline.api import game_rng, is_int
from timeline.models import GameSession
from timeline.services.game import sessions as session_service
from timeline.services.game.dealing import GameSettings, validate_player_name
from timeline.services.game.errors import GameError
from timeline.socketio_events import broadcast_move, broadcast_session

game_sessions = Blueprint('game_sessions', __name__)


def _error(exc: GameError):
    return jsonify({'error': str(exc)}), exc.status_code


@game_sessions.route('', methods=['POST'])
def create_session():
    """
    Starts a session: deals one seed card onto the timeline and the rest into the hand.
    """
    data = request.get_json(silent=True) or {}
    payload = dict(data)
    payload.setdefault('card_count', current_app.config.get('DEFAULT_CARD_COUNT', 5))
    try:
        player_name = validate_player_name(data.get('player_name'))
        settings = GameSettings.from_payload(payload, current_app.config.get('MAX_CARD_COUNT', 50))
        game_session = session_service.start_session(player_name, settings, game_rng())
    except GameError as exc:
        return _error(exc)
    return jsonify(game_session.to_dict(include_cards=True)), 201


@game_sessions.route('/player/<string:player_name>', methods=['GET'])
def player_sessions(player_name):
    limit = request.args.get('limit', 10, type=int)
    if limit < 1 or limit > 50:
        return jsonify({'error': 'Limit must be between 1 and 50'}), 400
    rows = (
        GameSession.query.filter_by(player_name=player_name)
        .order_by(GameSession.start_time.desc())
        .limit(limit)
        .all()
    )
    return jsonify({
        'count': len(rows),
        'player_name': player_name,
        'data': [s.to_dict() for s in rows],
    }), 200


@game_sessions.route('/<string:session_id>', methods=['GET'])
def get_session(session_id):
    game_session = db.get_or_404(GameSession, session_id)
    return jsonify(game_session.to_dict(include_cards=True)), 200


@game_sessions.route('/<string:session_id>/moves', methods=['POST'])
def submit_move(session_id):
    """
    Records a placement. The verdict is recomputed here; a client ``is_correct``
    that disagrees is flagged, or refused when STRICT_VERDICTS is on.
    """
    game_session = db.get_or_404(GameSession, session_id)
    data = request.get_json(silent=True) or {}

    card_id = data.get('card_id')
    position = data.get('position')
    if card_id is None or position is None:
        return jsonify({'error': 'Missing required fields: card_id, position'}), 400
    if not is_int(card_id) or card_id < 1:
        return jsonify({'error': 'card_id must be a positive integer'}), 400
    if not is_int(position) or position < 0:
        return jsonify({'error': 'position must be a non-negative integer'}), 400

    time_taken = data.get('time_taken_seconds')
    if time_taken is not None and (
        isinstance(time_taken, bool) or not isinstance(time_taken, (int, float)) or time_taken < 0
    ):
        return jsonify({'error': 'time_taken_seconds must be a non-negative number'}), 400

    client_is_correct = data.get('is_correct')
    if client_is_correct is not None and not isinstance(client_is_correct, bool):
        return jsonify({'error': 'is_correct must be a boolean value'}), 400

    try:
        outcome = session_service.record_move(
            game_session,
            card_id,
            position,
            time_taken_seconds=time_taken,
            client_is_correct=client_is_correct,
            strict=current_app.config.get('STRICT_VERDICTS', False),
            rng=game_rng(),
        )
    except GameError as exc:
        return _error(exc)

    response = outcome.move.to_dict()
    response.update({
        'feedback': outcome.verdict.feedback,
        'won_game': outcome.won_game,
        'replacement_card_id': outcome.replacement_card_id,
        'session': game_session.to_dict(include_cards=True),
    })
    broadcast_move(game_session.id, response)
    if outcome.won_game:
        broadcast_session(game_session.to_dict())
    return jsonify(response), 201


@game_sessions.route('/<string:session_id>/moves', methods=['GET'])
def list_moves(session_id):
    game_session = db.get_or_404(GameSession, session_id)
    moves = [m.to_dict() for m in game_session.moves.all()]
    return jsonify({'count': len(moves), 'data': moves}), 200


@game_sessions.route('/<string:session_id>/hint', methods=['POST'])
def hint(session_id):
    game_session = db.get_or_404(GameSession, session_id)
    data = request.get_json(silent=True) or {}
    card_id = data.get('card_id')
    if not is_int(card_id) or card_id < 1:
        return jsonify({'error': 'card_id must be a positive integer'}), 400
    try:
        text = session_service.request_hint(game_session, card_id)
    except GameError as exc:
        return _error(exc)
    return jsonify({'hint': text, 'hints_used': game_session.hints_used}), 200


@game_sessions.route('/<string:session_id>/complete', methods=['PUT'])
def complete(session_id):
    game_session = db.get_or_404(GameSession, session_id)
    data = request.get_json(silent=True) or {}
    score = data.get('score')
    if score is not None and (not is_int(score) or score < 0):
        return jsonify({'error': 'Score must be a non-negative integer'}), 400
    try:
        score_mismatch = session_service.complete_session(game_session, client_score=score)
    except GameError as exc:
        return _error(exc)
    response = game_session.to_dict()
    response['score_mismatch'] = score_mismatch
    broadcast_session(game_session.to_dict())
    return jsonify(response), 200


@game_sessions.route('/<string:session_id>/abandon', methods=['PUT'])
def abandon(session_id):
    game_session = db.get_or_404(GameSession, session_id)
    try:
        session_service.abandon_session(game_session)
    except GameError as exc:
        return _error(exc)
    broadcast_session(game_session.to_dict())
    return jsonify(game_session.to_dict()), 200


@game_sessions.route('/<string:session_id>/stats', methods=['GET'])
def stats(session_id):
    game_session = db.get_or_404(GameSession, session_id)
    return jsonify(session_service.session_stats(game_session)), 200
