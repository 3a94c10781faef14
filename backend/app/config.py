"""Environment-driven settings for the guessing game API."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
)
DEFAULT_HINT_TIMEOUT_SECONDS = 10.0
ENV_FILE = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env")


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using %s.", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive, got %s; using %s.", name, value, default)
        return default
    return value


def _log_level(raw: str) -> str:
    level = raw.upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("LOG_LEVEL=%r is not a logging level; using INFO.", raw)
        return "INFO"
    return level


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_api_url: str = DEFAULT_GEMINI_API_URL
    hint_timeout_seconds: float = DEFAULT_HINT_TIMEOUT_SECONDS
    log_level: str = "INFO"
    cors_allow_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, *, env_file: str | None = ENV_FILE) -> Settings:
        """Read settings from the process environment (and backend/.env if present)."""
        if env_file:
            load_dotenv(env_file)
        origins = [o.strip() for o in _env("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
        settings = cls(
            gemini_api_key=_env("GEMINI_API_KEY"),
            gemini_api_url=_env("GEMINI_API_URL", DEFAULT_GEMINI_API_URL),
            hint_timeout_seconds=_env_float("HINT_TIMEOUT_SECONDS", DEFAULT_HINT_TIMEOUT_SECONDS),
            log_level=_log_level(_env("LOG_LEVEL", "INFO")),
            cors_allow_origins=origins or ["*"],
        )
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY not set; every hint will be a fallback message.")
        return settings
