"""Booking pricing and availability engine."""

from lakehouse.booking.availability import check_availability, get_blocked_nights
from lakehouse.booking.calendar import days_between, format_date, iter_nights, parse_date
from lakehouse.booking.orchestrator import (
    CONFIRMATION_CODE_ALPHABET,
    AddonLine,
    GuestInfo,
    create_booking,
    generate_confirmation_code,
)
from lakehouse.booking.pricing import PriceBreakdown, calculate_price, resolve_nightly_rate

__all__ = [
    "CONFIRMATION_CODE_ALPHABET",
    "AddonLine",
    "GuestInfo",
    "PriceBreakdown",
    "calculate_price",
    "check_availability",
    "create_booking",
    "days_between",
    "format_date",
    "generate_confirmation_code",
    "get_blocked_nights",
    "iter_nights",
    "parse_date",
    "resolve_nightly_rate",
]
