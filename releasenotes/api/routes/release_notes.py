"""
Release notes API endpoints.

Provides endpoints for:
- Filtered release notes with an optional Gemini summary
- Distinct products and note types for the filter UI
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.concurrency import run_in_threadpool

from releasenotes.api.models import (
    ErrorResponse,
    ProductsResponse,
    ReleaseNotesResponse,
    TypesResponse,
    split_csv,
)
from releasenotes.notes.models import ReleaseNoteFilters, Timeframe
from releasenotes.notes.repository import (
    ReleaseNotesRepository,
    WarehouseQueryError,
    get_release_notes_repository,
)
from releasenotes.observability.logging import get_logger
from releasenotes.summary.service import SummaryService, get_summary_service, summary_error_for
from releasenotes.utils.error_sanitizer import client_error_message

router = APIRouter(
    prefix="/api",
    tags=["release-notes"],
    responses={500: {"model": ErrorResponse}},
)
logger = get_logger(__name__)


@router.get(
    "/release-notes",
    response_model=ReleaseNotesResponse,
    response_model_exclude_none=True,
)
async def get_release_notes(
    timeframe: Timeframe = Query(Timeframe.LAST_7_DAYS, description="7d, 30d or 90d"),
    types: str | None = Query(None, description="Comma-separated note types"),
    products: str | None = Query(None, description="Comma-separated product names"),
    summarize: bool = Query(False, description="Also generate a Gemini summary"),
    repository: ReleaseNotesRepository = Depends(get_release_notes_repository),
    summary_service: SummaryService = Depends(get_summary_service),
) -> ReleaseNotesResponse:
    """
    List release notes for the selected window, types and products.

    A failed summary never fails the request: the error is reported in
    summaryError next to the notes.
    """
    filters = ReleaseNoteFilters(
        timeframe=timeframe, types=split_csv(types), products=split_csv(products)
    )
    logger.info(
        "Fetching release notes: timeframe=%s types=%s products=%s summarize=%s",
        filters.timeframe.value,
        filters.types,
        filters.products,
        summarize,
    )

    try:
        notes = await run_in_threadpool(
            repository.get_release_notes, filters.timeframe, filters.types, filters.products
        )
    except WarehouseQueryError as e:
        raise HTTPException(status_code=500, detail=client_error_message(e)) from None

    response = ReleaseNotesResponse(notes=notes, filters=filters)

    if not summarize:
        return response

    try:
        response.summary = await summary_service.generate_summary(notes)
    except Exception as e:
        logger.error("Error generating summary: %s", e)
        response.summary_error = summary_error_for(e)

    return response


@router.get("/meta/products", response_model=ProductsResponse)
async def get_distinct_products(
    repository: ReleaseNotesRepository = Depends(get_release_notes_repository),
) -> ProductsResponse:
    """Distinct product names, sorted, for the product filter."""
    try:
        products = await run_in_threadpool(repository.get_distinct_products)
    except WarehouseQueryError as e:
        raise HTTPException(status_code=500, detail=client_error_message(e)) from None
    return ProductsResponse(products=products)


@router.get("/meta/types", response_model=TypesResponse)
async def get_distinct_types(
    repository: ReleaseNotesRepository = Depends(get_release_notes_repository),
) -> TypesResponse:
    """Distinct note types, sorted, for the type filter."""
    try:
        types = await run_in_threadpool(repository.get_distinct_types)
    except WarehouseQueryError as e:
        raise HTTPException(status_code=500, detail=client_error_message(e)) from None
    return TypesResponse(types=types)
