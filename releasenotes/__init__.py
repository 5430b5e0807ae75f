"""Release Notes Dashboard - filter cloud release notes and summarize them with Gemini"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so `import releasenotes` does not pull in the Google Cloud SDKs
def __getattr__(name: str):
    if name in ("ReleaseNote", "Timeframe"):
        from releasenotes.notes import models

        return getattr(models, name)

    if name == "SummaryResult":
        from releasenotes.summary.models import SummaryResult

        return SummaryResult

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ReleaseNote",
    "SummaryResult",
    "Timeframe",
]
