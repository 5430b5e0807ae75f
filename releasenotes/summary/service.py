"""Summary generation: release notes -> prompt -> Gemini -> SummaryResult."""

from __future__ import annotations

from collections.abc import Sequence

from releasenotes.llm.errors import GeminiError, GeminiNotConfiguredError
from releasenotes.llm.gemini import GeminiClient, get_gemini_client
from releasenotes.llm.prompts import get_summary_prompt
from releasenotes.notes.models import ReleaseNote
from releasenotes.observability.logging import get_logger
from releasenotes.observability.telemetry import counter, log_event
from releasenotes.summary.models import SummaryError, SummaryResult
from releasenotes.summary.parser import extract_industry_use_cases, extract_key_features
from releasenotes.utils.error_sanitizer import client_error_message

logger = get_logger(__name__)

_ERROR_DETAILS = {
    "not_configured": "AI summaries are not configured on this server.",
    "auth": "The Gemini API rejected the request. Please check the API key and its permissions.",
    "model_not_found": "The configured Gemini model was not found. Please check GEMINI_MODEL.",
    "network": "Could not reach the Gemini API. Please try again later.",
    "timeout": "The Gemini API did not respond in time. Please try again later.",
}
_GENERIC_DETAILS = (
    "There was an issue connecting to Gemini API. Please check your API key and configuration."
)


def format_release_notes(notes: Sequence[ReleaseNote]) -> str:
    blocks = [
        f"### {note.product_name} - {note.release_note_type}\n{note.description}"
        for note in notes
    ]
    return "\n\n".join(blocks)


def build_summary_prompt(notes: Sequence[ReleaseNote]) -> str:
    # dict.fromkeys keeps first-seen order
    products = list(dict.fromkeys(note.product_name for note in notes))
    return get_summary_prompt(
        products=", ".join(products),
        release_notes=format_release_notes(notes),
    )


def parse_summary(markdown: str) -> SummaryResult:
    return SummaryResult(
        markdown=markdown,
        key_features=extract_key_features(markdown),
        industry_use_cases=extract_industry_use_cases(markdown),
    )


def summary_error_for(error: Exception, verbose: bool | None = None) -> SummaryError:
    """Client-facing SummaryError for a failed generation."""
    if isinstance(error, GeminiNotConfiguredError):
        return SummaryError(
            message="AI summary is not configured", details=_ERROR_DETAILS["not_configured"]
        )
    category = getattr(error, "category", "generic")
    return SummaryError(
        message=(
            "Failed to generate summary using Gemini: "
            + client_error_message(error, 500, verbose=verbose)
        ),
        details=_ERROR_DETAILS.get(category, _GENERIC_DETAILS),
    )


class SummaryService:
    """Builds Gemini summaries for batches of release notes."""

    def __init__(self, client: GeminiClient | None = None) -> None:
        self.client = client or get_gemini_client()

    async def generate_summary(self, notes: Sequence[ReleaseNote]) -> SummaryResult | None:
        """
        Summarize notes with Gemini.

        Returns:
            SummaryResult, or None when there are no notes (no API call is made).

        Raises:
            GeminiError: Generation failed, including after any model fallback.
        """
        if not notes:
            logger.info("Not generating summary - no release notes found")
            return None

        prompt = build_summary_prompt(notes)
        try:
            markdown = await self.client.generate_content(prompt)
        except GeminiError as e:
            counter(f"summary.error.{e.category}")
            logger.error("Summary generation failed (%s): %s", e.category, e)
            raise

        result = parse_summary(markdown)
        counter("summary.generated")
        log_event(
            "summary.generated",
            notes=len(notes),
            key_features=len(result.key_features),
            industry_use_cases=len(result.industry_use_cases),
        )
        return result


_service: SummaryService | None = None


def get_summary_service() -> SummaryService:
    global _service
    if _service is None:
        _service = SummaryService()
    return _service
