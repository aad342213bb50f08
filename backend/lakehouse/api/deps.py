"""Shared API dependencies — single import point for all routers.

Re-exports the database session dependency and provides the per-request
store client plus the mapping from engine errors to HTTP responses::

    from lakehouse.api.deps import get_store, raise_http_error
"""

from typing import NoReturn

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from lakehouse.booking.errors import (
    BookingEngineError,
    BookingNotFoundError,
    BookingPersistenceError,
    BookingStateError,
    BookingValidationError,
    DatesUnavailableError,
    PropertyNotConfiguredError,
    StoreUnavailableError,
)
from lakehouse.database import get_db
from lakehouse.store import BookingStore

_STATUS_BY_ERROR: dict[type[BookingEngineError], int] = {
    BookingValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DatesUnavailableError: status.HTTP_409_CONFLICT,
    BookingStateError: status.HTTP_409_CONFLICT,
    BookingNotFoundError: status.HTTP_404_NOT_FOUND,
    PropertyNotConfiguredError: status.HTTP_404_NOT_FOUND,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    BookingPersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def get_store(db: AsyncSession = Depends(get_db)) -> BookingStore:
    """Build the store client for this request's session."""
    return BookingStore(db)


def raise_http_error(exc: BookingEngineError) -> NoReturn:
    """Translate an engine error into the matching ``HTTPException``."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    detail = str(exc)
    if isinstance(exc, StoreUnavailableError):
        detail = f"{detail}. Please try again in a moment."
    raise HTTPException(status_code=status_code, detail=detail) from exc


__all__ = ["get_db", "get_store", "raise_http_error"]
