"""Gemini model selection.

The configured model name is resolved once into a GeminiModelConfig so the
rest of the code branches on ModelKind instead of re-checking strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

FALLBACK_MODEL = "gemini-1.5-pro"

KNOWN_MODELS: frozenset[str] = frozenset(
    {
        "gemini-1.5-pro",
        "gemini-1.5-flash",
        "gemini-1.0-pro",
        "gemini-pro",
        "gemini-pro-vision",
        "gemini-2.5-pro-exp-03-25",
        "gemini-2.0-flash",
    }
)


class ModelKind(str, Enum):
    """How a configured model name was classified."""

    KNOWN = "known"  # In the allow-list
    EXPERIMENTAL = "experimental"  # Preview/experimental naming; falls back on failure
    UNVALIDATED = "unvalidated"  # Unknown name, passed through as-is
    DEFAULT = "default"  # Nothing configured, fallback model used


def is_experimental_model(name: str) -> bool:
    return name.startswith("gemini-2.") or "-exp-" in name or "-preview-" in name


@dataclass(frozen=True)
class GeminiModelConfig:
    name: str
    kind: ModelKind
    fallback: str = FALLBACK_MODEL

    @property
    def is_experimental(self) -> bool:
        return self.kind is ModelKind.EXPERIMENTAL

    @property
    def can_fall_back(self) -> bool:
        """True when a failed call may be retried once against the fallback model."""
        return self.is_experimental and self.name != self.fallback


def resolve_gemini_model(name: str | None) -> GeminiModelConfig:
    """Classify a configured model name.

    Experimental naming wins over allow-list membership, so "gemini-2.0-flash"
    is EXPERIMENTAL even though it is listed.
    """
    name = (name or "").strip()
    if not name:
        return GeminiModelConfig(name=FALLBACK_MODEL, kind=ModelKind.DEFAULT)
    if is_experimental_model(name):
        return GeminiModelConfig(name=name, kind=ModelKind.EXPERIMENTAL)
    if name in KNOWN_MODELS:
        return GeminiModelConfig(name=name, kind=ModelKind.KNOWN)
    return GeminiModelConfig(name=name, kind=ModelKind.UNVALIDATED)
