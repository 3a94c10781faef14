from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

TARGET_MIN = 1
TARGET_MAX = 100


class GuessResult(str, Enum):
    TOO_LOW = "too low"
    TOO_HIGH = "too high"
    CORRECT = "correct"


@dataclass
class GameState:
    id: str                                # uuid4 string
    target: int                            # 1..100, fixed for the session lifetime
    guesses: list[int] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
