"""Visitor counter endpoints.

The frontend increments once per browser session; the server does not
enforce that.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from releasenotes.api.models import CounterResponse, ErrorResponse
from releasenotes.storage.visitor_counter import (
    VisitorCounterError,
    VisitorCounterStore,
    get_visitor_counter_store,
)
from releasenotes.utils.error_sanitizer import client_error_message

router = APIRouter(
    prefix="/api/visitor-counter",
    tags=["visitor-counter"],
    responses={500: {"model": ErrorResponse}},
)


@router.post("/increment", response_model=CounterResponse)
async def increment_counter(
    store: VisitorCounterStore = Depends(get_visitor_counter_store),
) -> CounterResponse:
    try:
        count = await store.increment()
    except VisitorCounterError as e:
        raise HTTPException(status_code=500, detail=client_error_message(e)) from None
    return CounterResponse(count=count)


@router.get("", response_model=CounterResponse)
async def get_counter(
    store: VisitorCounterStore = Depends(get_visitor_counter_store),
) -> CounterResponse:
    try:
        count = await store.get()
    except VisitorCounterError as e:
        raise HTTPException(status_code=500, detail=client_error_message(e)) from None
    return CounterResponse(count=count)
