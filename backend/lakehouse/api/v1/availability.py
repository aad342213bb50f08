"""Availability router — date-picker checks and blocked-night listings."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lakehouse.api.deps import get_store, raise_http_error
from lakehouse.booking.availability import get_blocked_nights
from lakehouse.booking.errors import BookingEngineError
from lakehouse.schemas.booking import AvailabilityResponse, BlockedDatesResponse
from lakehouse.store import BookingStore

router = APIRouter(prefix="/api/v1/availability", tags=["availability"])

MAX_WINDOW_DAYS = 400


@router.get(
    "",
    response_model=AvailabilityResponse,
    summary="Check whether a date range can be booked",
)
async def check_dates(
    check_in: date = Query(..., description="First night of the stay"),
    check_out: date = Query(..., description="Departure day (not a night of the stay)"),
    store: BookingStore = Depends(get_store),
) -> AvailabilityResponse:
    """Report availability plus the specific nights that are taken.

    Returns 503 when the store cannot be read rather than guessing.
    """
    if check_out <= check_in:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="check_out must be after check_in",
        )
    try:
        blocked = await get_blocked_nights(store, check_in, check_out)
    except BookingEngineError as e:
        raise_http_error(e)

    return AvailabilityResponse(
        check_in=check_in,
        check_out=check_out,
        available=not blocked,
        blocked_nights=blocked,
    )


@router.get(
    "/blocked",
    response_model=BlockedDatesResponse,
    summary="List blocked nights in a window",
)
async def list_blocked(
    start: date = Query(..., description="Window start (inclusive)"),
    end: date = Query(..., description="Window end (inclusive)"),
    store: BookingStore = Depends(get_store),
) -> BlockedDatesResponse:
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end must not be before start",
        )
    if (end - start).days > MAX_WINDOW_DAYS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Window may span at most {MAX_WINDOW_DAYS} days",
        )
    try:
        dates = await store.get_blocked_dates(start, end)
    except BookingEngineError as e:
        raise_http_error(e)

    return BlockedDatesResponse(start=start, end=end, dates=dates)
