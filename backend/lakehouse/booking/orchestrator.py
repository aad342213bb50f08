"""Booking write path.

A booking is three kinds of rows: the booking itself, its add-on lines, and
one blocked date per night. They are written in that order inside a single
store transaction and committed together; any failure rolls the whole unit
back so a booking never exists without the nights it holds.
"""

import logging
import secrets
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from lakehouse.booking.calendar import iter_nights
from lakehouse.booking.errors import (
    BookingPersistenceError,
    BookingValidationError,
    DatesUnavailableError,
    StoreUnavailableError,
)
from lakehouse.booking.pricing import PriceBreakdown, to_money

logger = logging.getLogger(__name__)

CONFIRMATION_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CONFIRMATION_CODE_LENGTH = 8
BLOCK_REASON_BOOKED = "booked"


@dataclass(frozen=True)
class GuestInfo:
    name: str
    email: str
    phone: str
    num_guests: int
    special_requests: str | None = None


@dataclass(frozen=True)
class AddonLine:
    """A selected add-on with the unit price charged at booking time."""

    addon_id: uuid.UUID
    quantity: int
    price: Decimal


def generate_confirmation_code() -> str:
    """Return a random 8-character code without look-alike glyphs (no I, O, 0, 1)."""
    return "".join(secrets.choice(CONFIRMATION_CODE_ALPHABET) for _ in range(CONFIRMATION_CODE_LENGTH))


async def create_booking(
    store,
    guest: GuestInfo,
    check_in: date,
    check_out: date,
    breakdown: PriceBreakdown,
    addons: Sequence[AddonLine] = (),
    code_attempts: int = 5,
    code_factory: Callable[[], str] = generate_confirmation_code,
):
    """Persist a pending booking, its add-ons, and its blocked nights atomically.

    Raises:
        BookingValidationError: the breakdown was computed for other dates.
        DatesUnavailableError: another booking claimed one of the nights first.
        BookingPersistenceError: any other write failure, after rollback.
    """
    if (breakdown.check_in, breakdown.check_out) != (check_in, check_out):
        raise BookingValidationError("Price breakdown does not match the requested dates")
    nights = list(iter_nights(check_in, check_out))
    if not nights:
        raise BookingValidationError("check_out must be after check_in")

    fields = {
        "guest_name": guest.name,
        "guest_email": guest.email,
        "guest_phone": guest.phone,
        "check_in": check_in,
        "check_out": check_out,
        "num_guests": guest.num_guests,
        "num_nights": breakdown.num_nights,
        "subtotal": breakdown.subtotal,
        "cleaning_fee": breakdown.cleaning_fee,
        "addon_total": breakdown.addon_total,
        "tax_amount": breakdown.tax_amount,
        "discount_amount": breakdown.discount_amount,
        "total_amount": breakdown.total_amount,
        "special_requests": guest.special_requests or None,
        "status": "pending",
    }
    booking = await _insert_with_unique_code(store, fields, code_attempts, code_factory)

    try:
        if addons:
            await store.insert_booking_addons(
                [
                    {
                        "booking_id": booking.id,
                        "addon_id": line.addon_id,
                        "quantity": line.quantity,
                        "price": to_money(line.price),
                    }
                    for line in addons
                ]
            )
    except Exception as e:
        await _rollback(store)
        logger.exception("Failed to attach add-ons to booking %s", booking.confirmation_code)
        raise BookingPersistenceError("Unable to save the booking") from e

    try:
        await store.insert_blocked_dates(
            [{"date": night, "reason": BLOCK_REASON_BOOKED, "booking_id": booking.id} for night in nights]
        )
    except IntegrityError as e:
        await _rollback(store)
        logger.warning(
            "Lost race for %s..%s; booking %s rolled back",
            check_in,
            check_out,
            booking.confirmation_code,
        )
        raise DatesUnavailableError() from e
    except Exception as e:
        await _rollback(store)
        logger.exception("Failed to block nights for booking %s", booking.confirmation_code)
        raise BookingPersistenceError("Unable to save the booking") from e

    try:
        await store.commit()
    except Exception as e:
        await _rollback(store)
        logger.exception("Commit failed for booking %s", booking.confirmation_code)
        raise BookingPersistenceError("Unable to save the booking") from e

    logger.info(
        "Created booking %s for %s..%s (%s nights, total %s)",
        booking.confirmation_code,
        check_in,
        check_out,
        breakdown.num_nights,
        breakdown.total_amount,
    )

    try:
        saved = await store.get_booking_by_confirmation_code(booking.confirmation_code)
    except StoreUnavailableError:
        logger.warning("Booking %s saved but could not be reloaded", booking.confirmation_code)
        return booking
    return saved or booking


async def _insert_with_unique_code(store, fields: dict, attempts: int, code_factory: Callable[[], str]):
    """Insert the booking row, drawing a fresh code on each uniqueness violation."""
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        code = code_factory()
        try:
            return await store.insert_booking({**fields, "confirmation_code": code})
        except IntegrityError as e:
            await _rollback(store)
            logger.warning("Confirmation code %s already taken (attempt %s/%s)", code, attempt, attempts)
            last_error = e
        except Exception as e:
            await _rollback(store)
            logger.exception("Failed to insert booking for %s", fields["guest_email"])
            raise BookingPersistenceError("Unable to save the booking") from e

    raise BookingPersistenceError("Could not allocate a unique confirmation code") from last_error


async def _rollback(store) -> None:
    try:
        await store.rollback()
    except Exception:
        logger.exception("Rollback failed")
