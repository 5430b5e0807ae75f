"""Pydantic request/response models for the release notes API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from releasenotes.notes.models import ReleaseNote, ReleaseNoteFilters
from releasenotes.summary.models import SummaryError, SummaryResult


def split_csv(value: str | None) -> list[str]:
    """'A, B,,C' -> ['A', 'B', 'C']; None or blank -> []."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class ReleaseNotesResponse(BaseModel):
    """Notes for the requested filters, plus an optional summary."""

    model_config = ConfigDict(populate_by_name=True)

    notes: list[ReleaseNote]
    filters: ReleaseNoteFilters
    summary: SummaryResult | None = None
    summary_error: SummaryError | None = Field(default=None, alias="summaryError")


class ProductsResponse(BaseModel):
    products: list[str]


class TypesResponse(BaseModel):
    types: list[str]


class CounterResponse(BaseModel):
    count: int


class ErrorResponse(BaseModel):
    """Standard error body."""

    error: str
    message: str
