"""Unit tests for the BigQuery release notes repository (client mocked)"""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from releasenotes.notes.models import Timeframe
from releasenotes.notes.repository import ReleaseNotesRepository, WarehouseQueryError
from releasenotes.observability.telemetry import get_counters


@pytest.fixture
def bigquery_client():
    return MagicMock()


@pytest.fixture
def repository(bigquery_client):
    return ReleaseNotesRepository(
        client=bigquery_client, dataset="ds", table="notes", location="US"
    )


def test_release_notes_rows_become_models(repository, bigquery_client):
    bigquery_client.query.return_value.result.return_value = [
        {
            "product_name": "BigQuery",
            "release_note_type": "FEATURE",
            "description": "New feature",
            "published_at": date(2025, 3, 14),
        },
        {
            "product_name": "Looker",
            "release_note_type": "FIX",
            "description": None,
            "published_at": datetime(2025, 3, 12, 8, 0),
        },
    ]

    notes = repository.get_release_notes(
        Timeframe.LAST_7_DAYS, ["FEATURE", "FIX"], ["BigQuery"], now=datetime(2025, 3, 15)
    )

    assert [note.product_name for note in notes] == ["BigQuery", "Looker"]
    assert notes[1].description == ""
    assert notes[1].published_at == date(2025, 3, 12)


def test_rows_with_null_required_fields_are_skipped(repository, bigquery_client):
    bigquery_client.query.return_value.result.return_value = [
        {
            "product_name": "BigQuery",
            "release_note_type": "FEATURE",
            "description": "New feature",
            "published_at": date(2025, 3, 14),
        },
        {
            "product_name": "Looker",
            "release_note_type": None,
            "description": "Orphaned note",
            "published_at": date(2025, 3, 13),
        },
        {
            "product_name": None,
            "release_note_type": "FIX",
            "description": "No product",
            "published_at": date(2025, 3, 12),
        },
    ]

    notes = repository.get_release_notes("7d", now=datetime(2025, 3, 15))

    assert [note.product_name for note in notes] == ["BigQuery"]
    assert get_counters()["bigquery.release_notes.skipped_row"] == 2


def test_query_is_parameterized_and_pinned_to_location(repository, bigquery_client):
    bigquery_client.query.return_value.result.return_value = []

    repository.get_release_notes("30d", [], ["BigQuery"], now=datetime(2025, 3, 15))

    args, kwargs = bigquery_client.query.call_args
    sql = args[0]
    assert "FROM `ds.notes`" in sql
    assert "product_name IN UNNEST(@products)" in sql
    assert "UNNEST(@types)" not in sql
    assert kwargs["location"] == "US"

    params = {param.name: param for param in kwargs["job_config"].query_parameters}
    assert params["start_date"].value == date(2025, 2, 13)
    assert params["end_date"].value == date(2025, 3, 15)
    assert params["products"].values == ["BigQuery"]


def test_distinct_values_skip_nulls(repository, bigquery_client):
    bigquery_client.query.return_value.result.return_value = [
        {"product_name": "BigQuery"},
        {"product_name": None},
        {"product_name": "Looker"},
    ]

    assert repository.get_distinct_products() == ["BigQuery", "Looker"]
    assert "SELECT DISTINCT product_name" in bigquery_client.query.call_args[0][0]


def test_distinct_types(repository, bigquery_client):
    bigquery_client.query.return_value.result.return_value = [
        {"release_note_type": "FEATURE"},
        {"release_note_type": "FIX"},
    ]

    assert repository.get_distinct_types() == ["FEATURE", "FIX"]


def test_query_errors_are_wrapped(repository, bigquery_client):
    bigquery_client.query.side_effect = RuntimeError("Access Denied: Table ds.notes")

    with pytest.raises(WarehouseQueryError, match="Access Denied"):
        repository.get_release_notes(Timeframe.LAST_7_DAYS)


def test_invalid_table_name_is_rejected():
    with pytest.raises(ValueError):
        ReleaseNotesRepository(client=MagicMock(), dataset="ds", table="notes; DROP")
