"""
Filter-to-query translation for the release notes table.

Everything here is pure: it turns filter state into a date window and a
parameterized BigQuery statement. Filter values only ever travel as query
parameters, never as SQL text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from google.cloud import bigquery

from releasenotes.notes.models import DateRange, Timeframe

# Columns the filter UI may ask distinct values for
DISTINCT_COLUMNS = ("product_name", "release_note_type")

_IDENTIFIER = re.compile(r"^[A-Za-z0-9_\-]+$")


@dataclass(frozen=True)
class ParameterizedQuery:
    sql: str
    parameters: list[bigquery.ScalarQueryParameter | bigquery.ArrayQueryParameter] = field(
        default_factory=list
    )


def date_range_for(timeframe: Timeframe | str, now: datetime | None = None) -> DateRange:
    """Calendar-day window ending today and starting N days earlier.

    Dates are taken in local time, matching the DATE() comparison done
    in the warehouse.
    """
    timeframe = Timeframe(timeframe)
    now = now or datetime.now()
    return DateRange(
        start_date=(now - timedelta(days=timeframe.days)).date(),
        end_date=now.date(),
    )


def table_reference(dataset: str, table: str, project: str | None = None) -> str:
    """Backtick-quoted table path; rejects names that are not plain identifiers."""
    parts = [project, dataset, table] if project else [dataset, table]
    for part in parts:
        if not part or not _IDENTIFIER.match(part):
            raise ValueError(f"Invalid BigQuery identifier: {part!r}")
    return "`" + ".".join(parts) + "`"


def build_release_notes_query(
    table: str,
    date_range: DateRange,
    types: list[str] | None = None,
    products: list[str] | None = None,
) -> ParameterizedQuery:
    """SELECT notes published inside date_range, optionally narrowed by type and product."""
    conditions = ["DATE(published_at) BETWEEN @start_date AND @end_date"]
    parameters: list[bigquery.ScalarQueryParameter | bigquery.ArrayQueryParameter] = [
        bigquery.ScalarQueryParameter("start_date", "DATE", date_range.start_date),
        bigquery.ScalarQueryParameter("end_date", "DATE", date_range.end_date),
    ]

    if types:
        conditions.append("release_note_type IN UNNEST(@types)")
        parameters.append(bigquery.ArrayQueryParameter("types", "STRING", list(types)))

    if products:
        conditions.append("product_name IN UNNEST(@products)")
        parameters.append(bigquery.ArrayQueryParameter("products", "STRING", list(products)))

    sql = (
        "SELECT\n"
        "  product_name,\n"
        "  release_note_type,\n"
        "  description,\n"
        "  DATE(published_at) AS published_at\n"
        f"FROM {table}\n"
        "WHERE " + "\n  AND ".join(conditions) + "\n"
        "ORDER BY published_at DESC"
    )
    return ParameterizedQuery(sql=sql, parameters=parameters)


def build_distinct_query(table: str, column: str) -> ParameterizedQuery:
    """SELECT DISTINCT values of one filter column, sorted ascending."""
    if column not in DISTINCT_COLUMNS:
        raise ValueError(f"Unsupported distinct column: {column}")
    sql = f"SELECT DISTINCT {column}\nFROM {table}\nORDER BY {column}"
    return ParameterizedQuery(sql=sql)
