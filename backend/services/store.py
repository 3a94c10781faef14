"""In-memory game session store. Keyed by game ID, owned by the running app."""

from __future__ import annotations

import logging
import random
import threading
import uuid
from dataclasses import replace

from models.game import TARGET_MAX, TARGET_MIN, GameState

logger = logging.getLogger(__name__)


class GameNotFoundError(KeyError):
    """Raised when a game ID is unknown or malformed."""

    def __init__(self, game_id: object) -> None:
        super().__init__(game_id)
        self.game_id = game_id


class SessionStore:
    """
    Thread-safe mapping of game ID -> GameState.

    Two levels of locking:
      - one store-wide lock guarding the key set (insert / lookup)
      - one lock per game guarding its guess list

    Callers only ever receive snapshots, so a returned GameState is never
    mutated behind their back.
    """

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self._rng = rng or random.SystemRandom()
        self._lock = threading.Lock()
        self._games: dict[str, GameState] = {}
        self._game_locks: dict[str, threading.Lock] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)

    def __contains__(self, game_id: object) -> bool:
        if not isinstance(game_id, str):
            return False
        with self._lock:
            return game_id in self._games

    def create(self, *, target: int | None = None) -> str:
        """Start a new game and return its ID."""
        if target is None:
            target = self._rng.randint(TARGET_MIN, TARGET_MAX)
        elif not TARGET_MIN <= target <= TARGET_MAX:
            raise ValueError(f"target must be in [{TARGET_MIN}, {TARGET_MAX}], got {target}")

        game_id = str(uuid.uuid4())
        state = GameState(id=game_id, target=target)
        with self._lock:
            self._games[game_id] = state
            self._game_locks[game_id] = threading.Lock()
            active = len(self._games)
        logger.info("[store] Game created: game_id=%s (active games: %d)", game_id, active)
        logger.debug("[store] game_id=%s target=%d", game_id, target)
        return game_id

    def get(self, game_id: str) -> GameState:
        state, game_lock = self._lookup(game_id)
        with game_lock:
            return _snapshot(state)

    def record_guess(self, game_id: str, guess: int) -> GameState:
        """Append a guess and return the updated game."""
        state, game_lock = self._lookup(game_id)
        with game_lock:
            state.guesses.append(guess)
            return _snapshot(state)

    def clear(self) -> None:
        with self._lock:
            self._games.clear()
            self._game_locks.clear()

    def _lookup(self, game_id: str) -> tuple[GameState, threading.Lock]:
        if not isinstance(game_id, str):
            raise GameNotFoundError(game_id)
        with self._lock:
            state = self._games.get(game_id)
            if state is None:
                raise GameNotFoundError(game_id)
            return state, self._game_locks[game_id]


def _snapshot(state: GameState) -> GameState:
    return replace(state, guesses=list(state.guesses))
