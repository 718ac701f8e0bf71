from types import SimpleNamespace

import pytest

from timeline.services.game.progress import (
    SessionProgress,
    check_win_condition,
    fold_verdict,
)


def test_scenario_f_last_correct_card_wins():
    update = fold_verdict(
        SessionProgress(total_moves=4, correct_moves=4, incorrect_moves=0),
        SimpleNamespace(is_correct=True),
        hand_size_after=0,
    )
    assert update.won_game is True
    assert update.progress == SessionProgress(total_moves=5, correct_moves=5, incorrect_moves=0)


def test_incorrect_move_counts():
    update = fold_verdict(SessionProgress(), SimpleNamespace(is_correct=False), hand_size_after=3)
    assert update.won_game is False
    assert update.progress == SessionProgress(total_moves=1, correct_moves=0, incorrect_moves=1)


@pytest.mark.parametrize('is_correct', [True, False])
@pytest.mark.parametrize('hand_size_after', [0, 1, 4])
def test_won_only_when_correct_and_hand_empty(is_correct, hand_size_after):
    update = fold_verdict(SessionProgress(2, 1, 1), SimpleNamespace(is_correct=is_correct), hand_size_after)
    assert update.won_game is (is_correct and hand_size_after == 0)
    assert update.progress.total_moves == 3


def test_input_progress_is_untouched():
    progress = SessionProgress(1, 1, 0)
    fold_verdict(progress, SimpleNamespace(is_correct=True), 2)
    assert progress == SessionProgress(1, 1, 0)


def test_accuracy():
    assert SessionProgress().accuracy == 0.0
    assert SessionProgress(3, 2, 1).accuracy == 66.67


def test_check_win_condition():
    assert check_win_condition([])
    assert not check_win_condition(['card'])
