from .evaluator import evaluate
from .hints import GeminiHintProvider
from .store import GameNotFoundError, SessionStore

__all__ = ["SessionStore", "GameNotFoundError", "GeminiHintProvider", "evaluate"]
