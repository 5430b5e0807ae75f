"""
Release note domain models.

Release notes are read-only rows from the BigQuery release notes table; this
service never creates or edits them.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Timeframe(str, Enum):
    """Relative date window, counted back from today."""

    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"

    @property
    def days(self) -> int:
        return int(self.value.rstrip("d"))


class ReleaseNote(BaseModel):
    """A single dated release note for one product."""

    model_config = ConfigDict(frozen=True)

    product_name: str = Field(..., description="Product the note belongs to, e.g. 'BigQuery'")
    release_note_type: str = Field(
        ..., description="FEATURE, SERVICE_ANNOUNCEMENT, FIX, ..."
    )
    description: str = Field(default="", description="Note body; may contain markdown links")
    published_at: date = Field(..., description="Publication date (no time component)")

    @field_validator("published_at", mode="before")
    @classmethod
    def _truncate_to_date(cls, value: Any) -> Any:
        # BigQuery returns DATE columns as date, but TIMESTAMP leaks through as datetime
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class DateRange(BaseModel):
    """Inclusive calendar-day window."""

    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date


class ReleaseNoteFilters(BaseModel):
    """Filter state echoed back to the client alongside results."""

    timeframe: Timeframe = Timeframe.LAST_7_DAYS
    types: list[str] = Field(default_factory=list)
    products: list[str] = Field(default_factory=list)
