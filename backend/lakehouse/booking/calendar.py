"""Calendar helpers.

Stays are handled as calendar dates, never timestamps, so comparisons are
stable regardless of the server's time zone. ``YYYY-MM-DD`` strings are the
canonical key wherever dates are compared or stored as text.
"""

import math
import re
from collections.abc import Iterator
from datetime import date, datetime, timedelta

_SECONDS_PER_DAY = 24 * 60 * 60
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Return the absolute number of days between two points, rounded up.

    Used as the night count: a check-out one day after check-in is one night.
    Datetimes with a partial-day difference count the partial day in full.
    """
    delta = end - start
    return math.ceil(abs(delta.total_seconds()) / _SECONDS_PER_DAY)


def format_date(value: date | datetime) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date.

    Raises ``ValueError`` for anything else, including full timestamps and
    ISO week dates.
    """
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    return date.fromisoformat(value)


def iter_nights(check_in: date, check_out: date) -> Iterator[date]:
    """Yield every night of a stay, check-in inclusive, check-out exclusive."""
    night = check_in
    while night < check_out:
        yield night
        night += timedelta(days=1)
