"""Authoritative game session rules applied to persisted sessions.

Every move is re-judged here with the same placement engine the client uses;
the server never takes a client's ``is_correct`` on trust.
"""

import json
import random
from dataclasses import dataclass
from typing import Optional

from flask import current_app

from timeline import db
from timeline.models import (
    Card,
    GameMove,
    GameSession,
    SESSION_ABANDONED,
    SESSION_COMPLETED,
    cards_by_ids,
)
from .chronology import sort_timeline
from .dealing import GameSettings, deal, select_eligible
from .errors import PlacementError, SessionClosedError, VerdictMismatchError
from .feedback import generate_hint
from .placement import PlacementVerdict, validate_placement
from .progress import SessionProgress, check_win_condition, fold_verdict
from .scoring import calculate_score


@dataclass
class MoveOutcome:
    move: GameMove
    verdict: PlacementVerdict
    points: int
    won_game: bool
    replacement_card_id: Optional[int] = None


def start_session(player_name: str, settings: GameSettings, rng: random.Random) -> GameSession:
    eligible = select_eligible(Card.query.order_by(Card.id).all(), settings)
    seed_card, hand = deal(eligible, settings.card_count, rng)

    game_session = GameSession(
        player_name=player_name,
        difficulty_level=settings.difficulty_level,
        card_count=settings.card_count,
        status='active',
    )
    game_session.categories = json.dumps(list(settings.categories))
    game_session.timeline_ids = [seed_card.id]
    game_session.hand_ids = [c.id for c in hand]
    game_session.discarded_ids = []
    db.session.add(game_session)
    db.session.commit()

    current_app.logger.info(
        f"[session-start] session={game_session.id} player={player_name} "
        f"difficulty={settings.difficulty_level} cards={settings.card_count}"
    )
    return game_session


def _ensure_active(game_session: GameSession) -> None:
    if not game_session.is_active:
        raise SessionClosedError('Session is already completed or abandoned')


def _load_hand_card(game_session: GameSession, card_id: int) -> Card:
    """Fetch a hand card, dropping it from the hand if it was deleted meanwhile."""
    card = db.session.get(Card, card_id)
    if card is not None:
        return card

    hand_ids = [i for i in game_session.hand_ids if i != card_id]
    game_session.hand_ids = hand_ids
    if check_win_condition(hand_ids):
        game_session.close(SESSION_COMPLETED)
    db.session.commit()
    current_app.logger.warning(
        f"[hand-prune] session={game_session.id} card={card_id} status={game_session.status}"
    )
    raise PlacementError('Card no longer exists')


def _draw_replacement(game_session: GameSession, rng: random.Random) -> Optional[Card]:
    settings = GameSettings(
        difficulty_level=game_session.difficulty_level,
        card_count=game_session.card_count,
        categories=tuple(game_session.category_list),
    )
    dealt = set(game_session.timeline_ids) | set(game_session.hand_ids) | set(game_session.discarded_ids)
    pool = [c for c in select_eligible(Card.query.order_by(Card.id).all(), settings) if c.id not in dealt]
    if not pool:
        return None
    return rng.choice(pool)


def record_move(
    game_session: GameSession,
    card_id: int,
    proposed_index: int,
    time_taken_seconds: Optional[float] = None,
    client_is_correct: Optional[bool] = None,
    strict: bool = False,
    rng: Optional[random.Random] = None,
) -> MoveOutcome:
    """Judge, score and persist one placement for ``game_session``.

    A correct card joins the timeline at its canonical position. An incorrect
    card is swapped for an undealt card when the pool allows, otherwise it
    stays in the hand for another try.
    """
    rng = rng or random.Random()
    _ensure_active(game_session)

    hand_ids = game_session.hand_ids
    if card_id not in hand_ids:
        raise PlacementError('Card is not in the player hand')

    timeline_cards = cards_by_ids(game_session.timeline_ids)
    if not 0 <= proposed_index <= len(timeline_cards):
        raise PlacementError(f"position must be between 0 and {len(timeline_cards)}")

    card = _load_hand_card(game_session, card_id)

    timeline = [c.to_event_card() for c in timeline_cards]
    verdict = validate_placement(card.to_event_card(), timeline, proposed_index, rng=rng)

    mismatch = client_is_correct is not None and client_is_correct != verdict.is_correct
    if mismatch:
        current_app.logger.warning(
            f"[verdict-mismatch] session={game_session.id} card={card_id} "
            f"client={client_is_correct} server={verdict.is_correct}"
        )
        if strict:
            raise VerdictMismatchError('Submitted is_correct does not match the server verdict')

    attempt_number = game_session.moves.filter_by(card_id=card_id).count() + 1
    points = calculate_score(
        verdict.is_correct,
        time_to_place_seconds=time_taken_seconds or 0,
        attempts=attempt_number,
        difficulty=card.difficulty,
    )

    replacement = None
    if verdict.is_correct:
        ordered_ids = [c.id for c in sort_timeline(timeline)]
        ordered_ids.insert(verdict.correct_position, card_id)
        game_session.timeline_ids = ordered_ids
        hand_ids.remove(card_id)
    else:
        replacement = _draw_replacement(game_session, rng)
        if replacement is not None:
            hand_ids[hand_ids.index(card_id)] = replacement.id
            game_session.discarded_ids = game_session.discarded_ids + [card_id]
    game_session.hand_ids = hand_ids

    update = fold_verdict(
        SessionProgress(
            total_moves=game_session.total_moves or 0,
            correct_moves=game_session.correct_moves or 0,
            incorrect_moves=game_session.incorrect_moves or 0,
        ),
        verdict,
        hand_size_after=len(hand_ids),
    )
    game_session.total_moves = update.progress.total_moves
    game_session.correct_moves = update.progress.correct_moves
    game_session.incorrect_moves = update.progress.incorrect_moves
    game_session.score = (game_session.score or 0) + points

    move = GameMove(
        session_id=game_session.id,
        card_id=card_id,
        move_number=update.progress.total_moves,
        proposed_position=proposed_index,
        correct_position=verdict.correct_position,
        is_correct=verdict.is_correct,
        client_is_correct=client_is_correct,
        verdict_mismatch=mismatch,
        attempt_number=attempt_number,
        points=points,
        time_taken_seconds=time_taken_seconds,
        feedback=verdict.feedback,
    )
    db.session.add(move)

    if update.won_game:
        game_session.close(SESSION_COMPLETED)

    db.session.add(game_session)
    db.session.commit()

    current_app.logger.info(
        f"[move] session={game_session.id} move={move.move_number} card={card_id} "
        f"proposed={proposed_index} correct={verdict.correct_position} ok={verdict.is_correct} points={points}"
    )
    if update.won_game:
        current_app.logger.info(
            f"[session-complete] session={game_session.id} score={game_session.score} won=True"
        )

    return MoveOutcome(
        move=move,
        verdict=verdict,
        points=points,
        won_game=update.won_game,
        replacement_card_id=replacement.id if replacement is not None else None,
    )


def request_hint(game_session: GameSession, card_id: int) -> str:
    _ensure_active(game_session)
    if card_id not in game_session.hand_ids:
        raise PlacementError('Card is not in the player hand')
    card = _load_hand_card(game_session, card_id)
    timeline = [c.to_event_card() for c in cards_by_ids(game_session.timeline_ids)]
    hint = generate_hint(card.to_event_card(), timeline)
    game_session.hints_used = (game_session.hints_used or 0) + 1
    db.session.commit()
    return hint


def complete_session(game_session: GameSession, client_score: Optional[int] = None) -> bool:
    """Close the session as completed. Returns True when ``client_score`` disagreed."""
    _ensure_active(game_session)
    score_mismatch = client_score is not None and client_score != (game_session.score or 0)
    if score_mismatch:
        current_app.logger.warning(
            f"[score-mismatch] session={game_session.id} client={client_score} server={game_session.score}"
        )
    game_session.close(SESSION_COMPLETED)
    db.session.commit()
    current_app.logger.info(f"[session-complete] session={game_session.id} score={game_session.score}")
    return score_mismatch


def abandon_session(game_session: GameSession) -> None:
    _ensure_active(game_session)
    game_session.close(SESSION_ABANDONED)
    db.session.commit()
    current_app.logger.info(f"[session-abandon] session={game_session.id}")


def session_stats(game_session: GameSession) -> dict:
    moves = game_session.moves.all()
    times = [m.time_taken_seconds for m in moves if m.time_taken_seconds is not None]
    progress = SessionProgress(
        total_moves=game_session.total_moves or 0,
        correct_moves=game_session.correct_moves or 0,
        incorrect_moves=game_session.incorrect_moves or 0,
    )
    stats = game_session.to_dict()
    stats.update({
        'total_moves_recorded': len(moves),
        'accuracy': progress.accuracy,
        'avg_move_time': round(sum(times) / len(times), 2) if times else 0,
        'fastest_move': min(times) if times else 0,
        'slowest_move': max(times) if times else 0,
        'verdict_mismatches': sum(1 for m in moves if m.verdict_mismatch),
    })
    return stats
