"""
Gemini generateContent client.

Talks to the generativelanguage REST API with an API key:

    POST {endpoint}/models/{model}:generateContent?key={api_key}

Experimental models get exactly one retry against the stable fallback model;
everything else fails fast with a typed GeminiError.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Any

import httpx

from releasenotes.config import (
    GEMINI_API_ENDPOINT,
    GEMINI_API_KEY,
    GEMINI_MODEL_CONFIG,
    GEMINI_TIMEOUT_SECONDS,
    LLM_MAX_OUTPUT_TOKENS,
    LLM_TEMPERATURE,
    LLM_TOP_K,
    LLM_TOP_P,
)
from releasenotes.llm.errors import (
    GeminiEmptyResponseError,
    GeminiError,
    GeminiNetworkError,
    GeminiNotConfiguredError,
    GeminiTimeoutError,
    error_for_status,
)
from releasenotes.llm.models import GeminiModelConfig
from releasenotes.observability.logging import get_logger
from releasenotes.observability.telemetry import counter, time_block

logger = get_logger(__name__)


def build_request_body(prompt: str) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": LLM_TEMPERATURE,
            "topP": LLM_TOP_P,
            "topK": LLM_TOP_K,
            "maxOutputTokens": LLM_MAX_OUTPUT_TOKENS,
        },
    }


def extract_text(payload: dict[str, Any]) -> str:
    """Return candidates[0].content.parts[0].text, or "" when any level is missing."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts:
        return ""
    return parts[0].get("text") or ""


def _error_message(response: httpx.Response) -> str:
    try:
        error = response.json().get("error") or {}
        message = error.get("message")
    except ValueError:
        message = None
    return message or f"Gemini API returned HTTP {response.status_code}"


class GeminiClient:
    """Async client for one configured Gemini model (plus its fallback)."""

    def __init__(
        self,
        api_key: str | None,
        model_config: GeminiModelConfig,
        endpoint: str = GEMINI_API_ENDPOINT,
        timeout: float = GEMINI_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model_config = model_config
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate_content(self, prompt: str) -> str:
        """Generate text for prompt, falling back once for experimental models.

        Raises:
            GeminiNotConfiguredError: No API key.
            GeminiError: Any other failure, after the fallback attempt if one applies.
        """
        if not self.is_configured:
            raise GeminiNotConfiguredError("Gemini API key is not configured")

        try:
            return await self._generate(prompt, self.model_config.name)
        except GeminiError as e:
            if not self.model_config.can_fall_back:
                raise
            logger.warning(
                "Experimental model %s failed (%s: %s); retrying once with %s",
                self.model_config.name,
                e.category,
                e,
                self.model_config.fallback,
            )
            counter("llm.gemini.fallback")
            return await self._generate(prompt, self.model_config.fallback)

    async def _generate(self, prompt: str, model: str) -> str:
        url = f"{self.endpoint}/models/{model}:generateContent"
        logger.info("Sending generateContent request: model=%s prompt_chars=%d", model, len(prompt))

        with time_block("llm.gemini.latency"):
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                try:
                    # httpx timeouts are per phase; this bounds the whole exchange
                    async with asyncio.timeout(self.timeout):
                        response = await client.post(
                            url, params={"key": self.api_key}, json=build_request_body(prompt)
                        )
                except (httpx.TimeoutException, TimeoutError) as e:
                    counter("llm.gemini.timeout")
                    raise GeminiTimeoutError(
                        f"Gemini request timed out after {self.timeout:g}s", model=model
                    ) from e
                except httpx.RequestError as e:
                    counter("llm.gemini.network_error")
                    raise GeminiNetworkError(
                        f"Network error calling Gemini: {type(e).__name__}", model=model
                    ) from e

        if not response.is_success:
            counter(f"llm.gemini.http_{response.status_code}")
            error = error_for_status(response.status_code, _error_message(response), model)
            logger.error(
                "Gemini API error: model=%s status=%d category=%s message=%s",
                model,
                response.status_code,
                error.category,
                error,
            )
            raise error

        try:
            payload = response.json()
        except ValueError as e:
            raise GeminiError("Gemini returned a non-JSON response", model=model) from e

        text = extract_text(payload)
        if not text:
            counter("llm.gemini.empty_response")
            raise GeminiEmptyResponseError("No text generated from Gemini API", model=model)

        counter("llm.gemini.success")
        logger.info("Received Gemini response: model=%s chars=%d", model, len(text))
        return text


@lru_cache(maxsize=1)
def get_gemini_client() -> GeminiClient:
    """Shared client built from process configuration."""
    return GeminiClient(api_key=GEMINI_API_KEY, model_config=GEMINI_MODEL_CONFIG)


def clear_client_cache() -> None:
    get_gemini_client.cache_clear()
