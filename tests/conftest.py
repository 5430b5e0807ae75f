"""
Pytest configuration for release notes tests

Provides fixtures shared across unit and integration tests
"""

from __future__ import annotations

from datetime import date

import pytest

from releasenotes.notes.models import ReleaseNote
from releasenotes.observability import telemetry


@pytest.fixture(autouse=True)
def reset_telemetry():
    """Start every test with empty counters and latencies"""
    telemetry.reset()
    yield
    telemetry.reset()


@pytest.fixture
def sample_notes() -> list[ReleaseNote]:
    """Three notes across two products, newest first"""
    return [
        ReleaseNote(
            product_name="BigQuery",
            release_note_type="FEATURE",
            description="Vector search is now [generally available](https://cloud.google.com/bigquery).",
            published_at=date(2025, 3, 14),
        ),
        ReleaseNote(
            product_name="Looker",
            release_note_type="SERVICE_ANNOUNCEMENT",
            description="Gemini in Looker is available in preview.",
            published_at=date(2025, 3, 12),
        ),
        ReleaseNote(
            product_name="BigQuery",
            release_note_type="FIX",
            description="Fixed an issue with partitioned table exports.",
            published_at=date(2025, 3, 10),
        ),
    ]


@pytest.fixture
def summary_markdown() -> str:
    """Gemini output in the shape the summary prompt asks for"""
    return (
        "## Executive Summary\n"
        "BigQuery and Looker shipped AI features this week.\n"
        "\n"
        "## Key Features and Announcements\n"
        "| Feature | Product | Description |\n"
        "|---------|---------|-------------|\n"
        "| Vector search GA | BigQuery | Similarity search over embeddings |\n"
        "| Gemini in Looker | Looker | Natural language exploration |\n"
        "\n"
        "## Industry Use Cases\n"
        "| Industry | Use Case | Benefits / ROI | Product Feature |\n"
        "|----------|----------|----------------|-----------------|\n"
        "| Retail | Personalized recommendations | 10% conversion uplift | Vector search |\n"
        "| Healthcare | Clinical note triage | Faster review | Gemini in Looker |\n"
        "\n"
        "## Recommendations\n"
        "Pilot vector search on the product catalog.\n"
    )
