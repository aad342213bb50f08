"""Quote and booking router.

The wizard calls ``POST /quotes`` on every change of dates, party size, or
add-ons, then ``POST /bookings`` once the guest confirms. The confirmation
and reservation pages look bookings up by confirmation code.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from lakehouse.api.deps import get_store, raise_http_error
from lakehouse.booking.errors import BookingEngineError
from lakehouse.models.booking import Booking
from lakehouse.schemas.booking import (
    BookingRequest,
    BookingResponse,
    NightlyRateResponse,
    QuoteAddonResponse,
    QuoteRequest,
    QuoteResponse,
)
from lakehouse.services import booking_service
from lakehouse.store import BookingStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["bookings"])


@router.post(
    "/quotes",
    response_model=QuoteResponse,
    summary="Price a stay",
)
async def create_quote(
    body: QuoteRequest,
    store: BookingStore = Depends(get_store),
) -> QuoteResponse:
    """Return the itemised price for a stay without reserving anything.

    ``sequence`` is echoed back unchanged; clients should ignore any response
    whose sequence is older than the latest request they sent.
    """
    try:
        quote = await booking_service.quote_stay(store, body)
    except BookingEngineError as e:
        raise_http_error(e)

    breakdown = quote.breakdown
    return QuoteResponse(
        check_in=breakdown.check_in,
        check_out=breakdown.check_out,
        num_nights=breakdown.num_nights,
        subtotal=breakdown.subtotal,
        cleaning_fee=breakdown.cleaning_fee,
        addon_total=breakdown.addon_total,
        discount_amount=breakdown.discount_amount,
        before_tax=breakdown.before_tax,
        tax_amount=breakdown.tax_amount,
        total_amount=breakdown.total_amount,
        nightly_rates=[
            NightlyRateResponse(night=n.night, rate=n.rate, season=n.season) for n in breakdown.nightly_rates
        ],
        addons=[QuoteAddonResponse(addon_id=a.addon_id, quantity=a.quantity, price=a.price) for a in quote.addons],
        min_nights=quote.min_nights,
        available=quote.available,
        sequence=body.sequence,
    )


@router.post(
    "/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a stay",
)
async def create_booking(
    body: BookingRequest,
    store: BookingStore = Depends(get_store),
) -> Booking:
    """Create a pending booking and block its nights.

    Responds 409 when any night is already taken, including when another
    guest wins a race for the same dates between the check and the write.
    """
    try:
        return await booking_service.book_stay(store, body)
    except BookingEngineError as e:
        raise_http_error(e)


@router.get(
    "/bookings/{confirmation_code}",
    response_model=BookingResponse,
    summary="Look up a booking by confirmation code",
)
async def get_booking(
    confirmation_code: str,
    store: BookingStore = Depends(get_store),
) -> Booking:
    try:
        return await booking_service.get_booking(store, confirmation_code)
    except BookingEngineError as e:
        raise_http_error(e)


@router.post(
    "/bookings/{confirmation_code}/confirm",
    response_model=BookingResponse,
    summary="Mark a booking confirmed from the confirmation page",
)
async def confirm_booking(
    confirmation_code: str,
    store: BookingStore = Depends(get_store),
) -> Booking:
    try:
        return await booking_service.confirm_booking(store, confirmation_code)
    except BookingEngineError as e:
        raise_http_error(e)


@router.post(
    "/bookings/{confirmation_code}/agreement",
    response_model=BookingResponse,
    summary="Sign the rental agreement",
)
async def sign_agreement(
    confirmation_code: str,
    store: BookingStore = Depends(get_store),
) -> Booking:
    try:
        return await booking_service.sign_agreement(store, confirmation_code)
    except BookingEngineError as e:
        raise_http_error(e)
