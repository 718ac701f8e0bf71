"""Timeline game domain services: placement, feedback, scoring and progress.

The modules in this package other than ``sessions`` are pure: they operate
only on the values passed in and hold no module-level mutable state, so HTTP
routes, socket handlers and tests can share them freely. ``sessions`` applies
the same rules to persisted game sessions.
"""

from .cards import EventCard
from .chronology import compare_cards, is_chronological, sort_timeline
from .dealing import GameSettings, deal, select_eligible
from .errors import (
    CardValidationError,
    GameError,
    PlacementError,
    SessionClosedError,
    SettingsValidationError,
    VerdictMismatchError,
)
from .feedback import generate_feedback, generate_hint
from .placement import PlacementVerdict, find_correct_position, validate_placement
from .progress import ProgressUpdate, SessionProgress, check_win_condition, fold_verdict
from .scoring import calculate_score

__all__ = [
    'EventCard',
    'compare_cards',
    'is_chronological',
    'sort_timeline',
    'GameSettings',
    'deal',
    'select_eligible',
    'CardValidationError',
    'GameError',
    'PlacementError',
    'SessionClosedError',
    'SettingsValidationError',
    'VerdictMismatchError',
    'generate_feedback',
    'generate_hint',
    'PlacementVerdict',
    'find_correct_position',
    'validate_placement',
    'ProgressUpdate',
    'SessionProgress',
    'check_win_condition',
    'fold_verdict',
    'calculate_score',
]
