from dataclasses import dataclass, replace
from typing import Sized


@dataclass(frozen=True)
class SessionProgress:
    total_moves: int = 0
    correct_moves: int = 0
    incorrect_moves: int = 0

    @property
    def accuracy(self) -> float:
        if not self.total_moves:
            return 0.0
        return round(self.correct_moves / self.total_moves * 100, 2)


@dataclass(frozen=True)
class ProgressUpdate:
    progress: SessionProgress
    won_game: bool


def check_win_condition(hand: Sized) -> bool:
    return len(hand) == 0


def fold_verdict(progress: SessionProgress, verdict, hand_size_after: int) -> ProgressUpdate:
    """Fold one placement verdict into the running totals.

    ``verdict`` only needs an ``is_correct`` attribute. The game is won when
    the placement was correct and it emptied the hand.
    """
    if verdict.is_correct:
        updated = replace(
            progress,
            total_moves=progress.total_moves + 1,
            correct_moves=progress.correct_moves + 1,
        )
    else:
        updated = replace(
            progress,
            total_moves=progress.total_moves + 1,
            incorrect_moves=progress.incorrect_moves + 1,
        )
    won_game = bool(verdict.is_correct) and hand_size_after == 0
    return ProgressUpdate(progress=updated, won_game=won_game)
