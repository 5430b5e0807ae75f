"""Centralized configuration for the release notes backend.

Re-exports everything from releasenotes.infrastructure.settings, then adds
typed constants for the LLM, rate limiting and API, and resolves the Gemini
model once.  Environment variable overrides use safe defaults so the app
starts without extra env configuration.
"""

from __future__ import annotations

from releasenotes.infrastructure.settings import *  # noqa: F401, F403 - re-export
from releasenotes.infrastructure.settings import (
    ALLOWED_ORIGINS,
    BIGQUERY_DATASET,
    BIGQUERY_TABLE,
    ENV,
    GEMINI_API_KEY,
    GEMINI_MODEL,
    GOOGLE_CLOUD_PROJECT,
)
from releasenotes.llm.models import GeminiModelConfig, ModelKind, resolve_gemini_model
from releasenotes.observability.logging import get_logger

logger = get_logger(__name__)

# --- App ---
APP_VERSION: str = "1.0.0"
SERVICE_NAME: str = "Release Notes Dashboard API"

# --- LLM ---
LLM_TEMPERATURE: float = 0.2
LLM_TOP_P: float = 0.8
LLM_TOP_K: int = 40
LLM_MAX_OUTPUT_TOKENS: int = 2048

# --- Rate Limiting ---
RATE_LIMIT_MAX_IPS: int = 10000

GEMINI_MODEL_CONFIG: GeminiModelConfig = resolve_gemini_model(GEMINI_MODEL)


def mask_secret(value: str | None) -> str:
    """Show only that a secret is present, plus its last four characters."""
    if not value:
        return "not set"
    if len(value) <= 8:
        return "set (masked)"
    return f"set (...{value[-4:]})"


def log_startup_configuration(model_config: GeminiModelConfig = GEMINI_MODEL_CONFIG) -> None:
    """Log the resolved configuration once at startup."""
    logger.info(
        "Configuration: env=%s project=%s table=%s.%s origins=%s",
        ENV,
        GOOGLE_CLOUD_PROJECT or "not set",
        BIGQUERY_DATASET,
        BIGQUERY_TABLE,
        ALLOWED_ORIGINS,
    )
    logger.info("Gemini API key: %s", mask_secret(GEMINI_API_KEY))

    if not GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; summary generation is disabled")

    if model_config.kind is ModelKind.DEFAULT:
        logger.warning("GEMINI_MODEL not set; using default model %s", model_config.name)
    elif model_config.kind is ModelKind.UNVALIDATED:
        logger.warning(
            "Gemini model %r is not a known model; the API may reject it", model_config.name
        )
    elif model_config.kind is ModelKind.EXPERIMENTAL:
        logger.info(
            "Gemini model %s is experimental; failed calls fall back to %s",
            model_config.name,
            model_config.fallback,
        )
    else:
        logger.info("Using Gemini model %s", model_config.name)
