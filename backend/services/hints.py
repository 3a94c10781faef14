"""Gemini-backed hint generation for the secret target number."""

from __future__ import annotations

import logging
import threading
from typing import Any

import httpx

from models.hint import NO_HINT_FOUND, HintFailure, HintResult, HintSuccess, text_or_fallback

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
_ERROR_BODY_PREVIEW = 200


def build_prompt(number: int) -> str:
    return (
        f"Give me an interesting fact or property about the number {number}. "
        "Do NOT mention the number itself in your response. "
        "Keep it concise and make it less obvious, what the number is."
    )


def first_text_field(payload: Any) -> str | None:
    """
    Return the first string stored under a "text" key, in document order.

    For a generateContent response this is
    candidates[0].content.parts[0].text.
    """
    if isinstance(payload, dict):
        for key, value in payload.items():
            if key == "text" and isinstance(value, str):
                return value
            found = first_text_field(value)
            if found is not None:
                return found
    elif isinstance(payload, list):
        for item in payload:
            found = first_text_field(item)
            if found is not None:
                return found
    return None


class GeminiHintProvider:
    """
    Ask Gemini for a hint about a number without revealing it.

    fetch_hint() never raises: every failure (missing key, transport error,
    timeout, non-2xx status, unparsable body) becomes a HintFailure and is
    rendered as a fallback string. No retries and no caching; each call is a
    fresh request.
    """

    def __init__(
        self,
        *,
        api_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._owns_client = client is None
        self._client = client
        self._client_lock = threading.Lock()

    def fetch_hint(self, number: int) -> str:
        return text_or_fallback(self.request_hint(number))

    def request_hint(self, number: int) -> HintResult:
        try:
            result = self.call_api(build_prompt(number))
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "[hints] Gemini request FAILED type=%s: %s",
                type(exc).__name__,
                exc,
                exc_info=True,
            )
            return HintFailure(str(exc) or type(exc).__name__)
        if isinstance(result, HintFailure):
            logger.warning("[hints] Gemini returned no usable hint: %s", result.reason)
        return result

    def call_api(self, prompt: str) -> HintResult:
        """POST the prompt to generateContent. Transport errors propagate."""
        if not self._api_key:
            return HintFailure("GEMINI_API_KEY is not configured")

        response = self._http_client().post(
            self._api_url,
            params={"key": self._api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )
        if not response.is_success:
            return HintFailure(
                f"Gemini API error: {response.status_code} - {response.text[:_ERROR_BODY_PREVIEW]}"
            )

        text = first_text_field(response.json())
        if not text or not text.strip():
            logger.info("[hints] Gemini response had no text field.")
            return HintSuccess(NO_HINT_FOUND)
        return HintSuccess(text.strip())

    def _http_client(self) -> httpx.Client:
        if not self._owns_client:
            return self._client  # type: ignore[return-value]
        with self._client_lock:
            # Owned clients are rebuilt after close().
            if self._client is None:
                self._client = httpx.Client(timeout=self._timeout, transport=self._transport)
            return self._client

    def close(self) -> None:
        if not self._owns_client:
            return
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None
