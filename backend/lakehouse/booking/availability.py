"""Availability checks against the blocked-dates table."""

import logging
from datetime import date

from lakehouse.booking.calendar import format_date, iter_nights

logger = logging.getLogger(__name__)


async def get_blocked_nights(store, check_in: date, check_out: date) -> list[date]:
    """Return the nights of the stay that are already blocked, in order.

    The store query is inclusive on both ends; only nights strictly before
    check-out are considered. Store failures propagate as
    ``StoreUnavailableError`` so an outage is never read as "available".
    """
    if check_out <= check_in:
        return []

    blocked = {format_date(d) for d in await store.get_blocked_dates(check_in, check_out)}
    return [night for night in iter_nights(check_in, check_out) if format_date(night) in blocked]


async def check_availability(store, check_in: date, check_out: date) -> bool:
    """Return True when no night in [check_in, check_out) is blocked.

    A zero or negative range has no nights and reports available; callers
    validate the range itself.
    """
    blocked = await get_blocked_nights(store, check_in, check_out)
    if blocked:
        logger.debug("%s..%s has %s blocked night(s), first %s", check_in, check_out, len(blocked), blocked[0])
    return not blocked
