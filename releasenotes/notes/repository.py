"""
BigQuery access for release notes.

Calls are blocking; async routes run them through the threadpool. Warehouse
errors are logged with the query context and re-raised as
WarehouseQueryError. Nothing is retried.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from google.cloud import bigquery
from pydantic import ValidationError

from releasenotes.config import (
    BIGQUERY_DATASET,
    BIGQUERY_LOCATION,
    BIGQUERY_TABLE,
    GOOGLE_CLOUD_PROJECT,
)
from releasenotes.notes.models import ReleaseNote, Timeframe
from releasenotes.notes.query import (
    ParameterizedQuery,
    build_distinct_query,
    build_release_notes_query,
    date_range_for,
    table_reference,
)
from releasenotes.observability.logging import get_logger
from releasenotes.observability.telemetry import counter, time_block

logger = get_logger(__name__)


class WarehouseQueryError(RuntimeError):
    """A BigQuery query failed."""


class ReleaseNotesRepository:
    """Read-only queries against the release notes table."""

    def __init__(
        self,
        client: bigquery.Client | None = None,
        project: str | None = GOOGLE_CLOUD_PROJECT,
        dataset: str = BIGQUERY_DATASET,
        table: str = BIGQUERY_TABLE,
        location: str = BIGQUERY_LOCATION,
    ) -> None:
        self.project = project
        self.location = location
        self.table = table_reference(dataset, table)
        self._client = client

    @property
    def client(self) -> bigquery.Client:
        """Lazy-load the BigQuery client"""
        if self._client is None:
            self._client = bigquery.Client(project=self.project)
        return self._client

    def _run(self, query: ParameterizedQuery, operation: str) -> Iterable[Mapping[str, Any]]:
        job_config = bigquery.QueryJobConfig(query_parameters=query.parameters)
        try:
            with time_block(f"bigquery.{operation}.latency"):
                job = self.client.query(query.sql, job_config=job_config, location=self.location)
                return list(job.result())
        except Exception as e:
            counter(f"bigquery.{operation}.error")
            logger.error("BigQuery %s failed on %s: %s", operation, self.table, e)
            raise WarehouseQueryError(str(e)) from e

    def get_release_notes(
        self,
        timeframe: Timeframe | str,
        types: list[str] | None = None,
        products: list[str] | None = None,
        now: datetime | None = None,
    ) -> list[ReleaseNote]:
        date_range = date_range_for(timeframe, now=now)
        query = build_release_notes_query(self.table, date_range, types, products)

        logger.info(
            "Fetching release notes: %s..%s types=%s products=%s",
            date_range.start_date,
            date_range.end_date,
            types or "all",
            products or "all",
        )
        notes: list[ReleaseNote] = []
        for row in self._run(query, "release_notes"):
            try:
                notes.append(
                    ReleaseNote(
                        product_name=row["product_name"],
                        release_note_type=row["release_note_type"],
                        description=row["description"],
                        published_at=row["published_at"],
                    )
                )
            except ValidationError as e:
                counter("bigquery.release_notes.skipped_row")
                logger.warning(
                    "Skipping malformed release note row (product=%r type=%r): %d field error(s)",
                    row["product_name"],
                    row["release_note_type"],
                    e.error_count(),
                )
        logger.info("Found %d release notes", len(notes))
        return notes

    def _distinct(self, column: str) -> list[str]:
        rows = self._run(build_distinct_query(self.table, column), f"distinct_{column}")
        return [row[column] for row in rows if row[column] is not None]

    def get_distinct_products(self) -> list[str]:
        return self._distinct("product_name")

    def get_distinct_types(self) -> list[str]:
        return self._distinct("release_note_type")


_repository: ReleaseNotesRepository | None = None


def get_release_notes_repository() -> ReleaseNotesRepository:
    """Get global repository instance"""
    global _repository
    if _repository is None:
        _repository = ReleaseNotesRepository()
    return _repository
