"""Health check endpoint for the release notes API.

Liveness probe for Cloud Run. Reports configuration presence only; no
upstream calls are made.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from releasenotes.config import (
    APP_VERSION,
    ENV,
    GEMINI_API_KEY,
    GEMINI_MODEL_CONFIG,
    GOOGLE_CLOUD_PROJECT,
)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    return {
        "status": "ok",
        "version": APP_VERSION,
        "environment": ENV,
        "timestamp": datetime.now(UTC).isoformat(),
        "llm": {
            "configured": bool(GEMINI_API_KEY),
            "model": GEMINI_MODEL_CONFIG.name,
            "model_kind": GEMINI_MODEL_CONFIG.kind.value,
        },
        "google_cloud_project": bool(GOOGLE_CLOUD_PROJECT),
    }
