"""Summary result models. JSON field names are camelCase for the frontend."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SummaryResult(BaseModel):
    """Gemini markdown plus the lists scraped out of it."""

    model_config = ConfigDict(populate_by_name=True)

    markdown: str
    key_features: list[str] = Field(default_factory=list, alias="keyFeatures")
    industry_use_cases: list[str] = Field(default_factory=list, alias="industryUseCases")


class SummaryError(BaseModel):
    """Non-fatal summary failure reported next to the notes."""

    message: str
    details: str
