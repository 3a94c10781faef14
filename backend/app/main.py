import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings
from routes.game import router as game_router
from services.hints import GeminiHintProvider
from services.store import SessionStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    store: SessionStore | None = None,
    hint_provider: GeminiHintProvider | None = None,
) -> FastAPI:
    """
    Build the API with one session store and one hint provider.

    Both are created here (or passed in) and handed to the routes through
    app.state, so every request of this app shares the same instances.
    """
    if settings is None:
        settings = Settings.from_env()
    if store is None:
        store = SessionStore()
    if hint_provider is None:
        hint_provider = GeminiHintProvider(
            api_url=settings.gemini_api_url,
            api_key=settings.gemini_api_key,
            timeout=settings.hint_timeout_seconds,
        )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("[main] Guessing game API starting (hint timeout %.1fs)", settings.hint_timeout_seconds)
        try:
            yield
        finally:
            hint_provider.close()
            logger.info("[main] Guessing game API stopped; %d games were active.", len(store))

    app = FastAPI(title="Number Guess API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.store = store
    app.state.hint_provider = hint_provider

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(game_router, prefix="/api")
    return app


_settings = Settings.from_env()
logging.basicConfig(level=_settings.log_level)
app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
