"""Booking service — wizard validation, quotes, bookings, and lifecycle changes.

Sits between the HTTP routers and the booking engine: it loads the property
settings and add-on catalog, validates the guest's stay, and calls the
engine with everything resolved. All functions take the store explicitly.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from lakehouse.booking.availability import get_blocked_nights
from lakehouse.booking.calendar import days_between
from lakehouse.booking.errors import (
    BookingNotFoundError,
    BookingStateError,
    BookingValidationError,
    DatesUnavailableError,
    PropertyNotConfiguredError,
)
from lakehouse.booking.orchestrator import AddonLine, GuestInfo, create_booking
from lakehouse.booking.pricing import ZERO, PriceBreakdown, calculate_price, to_money
from lakehouse.config import settings as app_settings
from lakehouse.models.addon import Addon
from lakehouse.models.booking import Booking
from lakehouse.models.property_settings import PropertySettings
from lakehouse.schemas.booking import AddonSelection, BookingRequest, StayRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quote:
    breakdown: PriceBreakdown
    addons: list[AddonLine] = field(default_factory=list)
    min_nights: int = 1
    blocked_nights: list[date] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return not self.blocked_nights


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def load_settings(store) -> PropertySettings:
    settings = await store.get_property_settings()
    if settings is None:
        raise PropertyNotConfiguredError("Property settings have not been configured")
    return settings


async def effective_min_nights(store, settings: PropertySettings, check_in: date) -> int:
    """Minimum stay: the check-in night's seasonal override, else the property default."""
    season = await store.get_active_seasonal_rate(check_in)
    if season is not None and season.min_nights:
        return season.min_nights
    return settings.min_nights or 1


def validate_stay(
    settings: PropertySettings,
    check_in: date,
    check_out: date,
    num_guests: int,
    today: date,
    min_nights: int = 1,
) -> None:
    """Reject stays the wizard must not submit.

    Raises ``BookingValidationError`` with a guest-facing message.
    """
    if check_out <= check_in:
        raise BookingValidationError("Check-out must be after check-in")
    if check_in < today:
        raise BookingValidationError("Check-in cannot be in the past")
    if num_guests < 1:
        raise BookingValidationError("At least one guest is required")
    if num_guests > settings.sleeps:
        raise BookingValidationError(f"The house sleeps at most {settings.sleeps} guests")
    nights = days_between(check_in, check_out)
    if nights < min_nights:
        raise BookingValidationError(f"Minimum stay for these dates is {min_nights} nights")


def price_addons(
    catalog: Sequence[Addon],
    selections: Sequence[AddonSelection],
    num_nights: int,
) -> tuple[list[AddonLine], Decimal]:
    """Resolve selected add-ons against the active catalog.

    Returns the lines to snapshot on the booking and the add-on total.
    Per-night add-ons are charged once per night of the stay.
    """
    by_id = {addon.id: addon for addon in catalog}
    lines: list[AddonLine] = []
    total = ZERO
    for selection in selections:
        addon = by_id.get(selection.addon_id)
        if addon is None:
            raise BookingValidationError(f"Add-on {selection.addon_id} is not available")
        unit_price = to_money(addon.price)
        multiplier = num_nights if addon.per_night else 1
        total += unit_price * selection.quantity * multiplier
        lines.append(AddonLine(addon_id=addon.id, quantity=selection.quantity, price=unit_price))
    return lines, total


# ---------------------------------------------------------------------------
# Quotes and bookings
# ---------------------------------------------------------------------------


async def quote_stay(
    store,
    stay: StayRequest,
    discount_amount=ZERO,
    today: date | None = None,
) -> Quote:
    """Validate a stay and price it without writing anything."""
    today = today or date.today()
    settings = await load_settings(store)
    min_nights = await effective_min_nights(store, settings, stay.check_in)
    validate_stay(settings, stay.check_in, stay.check_out, stay.num_guests, today, min_nights)

    blocked = await get_blocked_nights(store, stay.check_in, stay.check_out)

    num_nights = days_between(stay.check_in, stay.check_out)
    catalog = await store.list_active_addons()
    lines, addon_total = price_addons(catalog, stay.addons, num_nights)

    breakdown = await calculate_price(
        store,
        stay.check_in,
        stay.check_out,
        settings,
        addon_total=addon_total,
        discount_amount=discount_amount,
    )
    return Quote(breakdown=breakdown, addons=lines, min_nights=min_nights, blocked_nights=blocked)


async def book_stay(
    store,
    request: BookingRequest,
    discount_amount=ZERO,
    today: date | None = None,
    code_attempts: int | None = None,
) -> Booking:
    """Validate, re-check availability, reprice on the server, and persist.

    Client-side prices are never trusted; the breakdown saved on the booking
    is computed here from the store's current rates.
    """
    quote = await quote_stay(store, request, discount_amount=discount_amount, today=today)
    if not quote.available:
        logger.info(
            "Rejected booking for %s..%s: %s blocked night(s)",
            request.check_in,
            request.check_out,
            len(quote.blocked_nights),
        )
        raise DatesUnavailableError(nights=quote.blocked_nights)

    guest = GuestInfo(
        name=request.guest_name,
        email=str(request.guest_email),
        phone=request.guest_phone,
        num_guests=request.num_guests,
        special_requests=request.special_requests,
    )
    return await create_booking(
        store,
        guest,
        request.check_in,
        request.check_out,
        quote.breakdown,
        quote.addons,
        code_attempts=code_attempts or app_settings.confirmation_code_attempts,
    )


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


async def get_booking(store, confirmation_code: str) -> Booking:
    booking = await store.get_booking_by_confirmation_code(confirmation_code)
    if booking is None:
        raise BookingNotFoundError(f"No booking found for confirmation code {confirmation_code}")
    return booking


async def confirm_booking(store, confirmation_code: str) -> Booking:
    """Move a pending booking to confirmed when its confirmation page is viewed.

    Bookings in any other status are returned unchanged, so reloading the
    page is harmless.
    """
    booking = await get_booking(store, confirmation_code)
    if booking.status != "pending":
        return booking

    booking = await store.update_booking_status(booking.id, "confirmed")
    await store.commit()
    logger.info("Booking %s confirmed", booking.confirmation_code)
    return booking


async def sign_agreement(store, confirmation_code: str, now: datetime | None = None) -> Booking:
    """Record the guest's rental-agreement signature once."""
    booking = await get_booking(store, confirmation_code)
    if booking.status == "cancelled":
        raise BookingStateError("A cancelled booking cannot be signed")
    if booking.agreement_signed:
        return booking

    signed_at = now or datetime.now(timezone.utc).replace(tzinfo=None)
    booking = await store.update_booking_agreement(booking.id, True, signed_at)
    await store.commit()
    logger.info("Agreement signed for booking %s", booking.confirmation_code)
    return booking
