from .game import TARGET_MAX, TARGET_MIN, GameState, GuessResult
from .hint import FALLBACK_PREFIX, NO_HINT_FOUND, HintFailure, HintResult, HintSuccess, text_or_fallback

__all__ = [
    "GameState",
    "GuessResult",
    "TARGET_MIN",
    "TARGET_MAX",
    "HintResult",
    "HintSuccess",
    "HintFailure",
    "FALLBACK_PREFIX",
    "NO_HINT_FOUND",
    "text_or_fallback",
]
