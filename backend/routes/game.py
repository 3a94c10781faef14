"""Game REST API. Mounted under /api by app.main.create_app()."""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from models.game import GuessResult
from services.evaluator import evaluate
from services.hints import GeminiHintProvider
from services.store import GameNotFoundError, SessionStore

router = APIRouter(prefix="/game", tags=["game"])
logger = logging.getLogger(__name__)

INVALID_GAME_ID = "Invalid gameId"


class StartGameResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_id: str = Field(alias="gameId")


class GuessRequest(BaseModel):
    game_id: str = Field(alias="gameId")
    guess: int = Field(strict=True)


class GuessResponse(BaseModel):
    result: GuessResult
    hint: str
    guesses: list[int]


class GameReadResponse(BaseModel):
    """Guess history for polling. The target is never exposed."""

    model_config = ConfigDict(populate_by_name=True)

    game_id: str = Field(alias="gameId")
    guesses: list[int]
    created_at: datetime = Field(alias="createdAt")


class ErrorResponse(BaseModel):
    error: str


def get_store(request: Request) -> SessionStore:
    return request.app.state.store


def get_hint_provider(request: Request) -> GeminiHintProvider:
    return request.app.state.hint_provider


@router.post(
    "/start",
    response_model=StartGameResponse,
    status_code=200,
)
def start_game(store: SessionStore = Depends(get_store)) -> StartGameResponse:
    """Start a new game with a random target in [1, 100]."""
    game_id = store.create()
    logger.info("[game] POST /api/game/start -> game_id=%s", game_id)
    return StartGameResponse(game_id=game_id)


@router.post(
    "/guess",
    response_model=GuessResponse | ErrorResponse,
    status_code=200,
)
def make_guess(
    body: GuessRequest,
    store: SessionStore = Depends(get_store),
    hints: GeminiHintProvider = Depends(get_hint_provider),
) -> GuessResponse | ErrorResponse:
    """
    Record a guess and report how it compares to the target.

    Unknown game IDs get a 200 with an error payload, not an HTTP error.
    A correct guess does not end the game; further guesses are still recorded.
    """
    try:
        state = store.record_guess(body.game_id, body.guess)
    except GameNotFoundError:
        logger.warning("[game] POST /api/game/guess for unknown game_id=%r", body.game_id)
        return ErrorResponse(error=INVALID_GAME_ID)

    result = evaluate(state.target, body.guess)
    hint = hints.fetch_hint(state.target)
    logger.info(
        "[game] Guess recorded: game_id=%s (started %s) guess=%d result=%s total_guesses=%d",
        state.id,
        state.created_at.isoformat(),
        body.guess,
        result.value,
        len(state.guesses),
    )
    return GuessResponse(result=result, hint=hint, guesses=state.guesses)


@router.get(
    "/{game_id}",
    response_model=GameReadResponse | ErrorResponse,
    status_code=200,
)
def read_game(game_id: str, store: SessionStore = Depends(get_store)) -> GameReadResponse | ErrorResponse:
    try:
        state = store.get(game_id)
    except GameNotFoundError:
        logger.warning("[game] GET /api/game/%s: unknown game", game_id)
        return ErrorResponse(error=INVALID_GAME_ID)
    return GameReadResponse(game_id=state.id, guesses=state.guesses, created_at=state.created_at)
