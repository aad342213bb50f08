"""Thin async client over the relational store.

Every booking-engine read and write goes through ``BookingStore``. It is
constructed per request around an ``AsyncSession`` and passed explicitly to
the engine functions, which lets tests substitute an in-memory double.

Reads run under a timeout and are retried a bounded number of times on
connection-level failures; exhausting the retries raises
``StoreUnavailableError``. Writes run under the same timeout but are never
retried here; the caller decides how to recover.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable, Sequence
from datetime import date, datetime
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lakehouse.booking.errors import BookingNotFoundError, StoreUnavailableError
from lakehouse.config import settings as app_settings
from lakehouse.models.addon import Addon
from lakehouse.models.blocked_date import BlockedDate
from lakehouse.models.booking import Booking, BookingAddon
from lakehouse.models.contact_submission import ContactSubmission
from lakehouse.models.gallery_image import GalleryImage
from lakehouse.models.property_settings import PropertySettings
from lakehouse.models.review import Review
from lakehouse.models.seasonal_rate import SeasonalRate

logger = logging.getLogger(__name__)

T = TypeVar("T")


def pick_seasonal_rate(candidates: Sequence[SeasonalRate]) -> SeasonalRate | None:
    """Choose one rate when several active seasons cover the same night.

    The narrowest range wins; ties go to the later start date, then to the
    most recently created row.
    """
    if not candidates:
        return None
    return min(
        candidates,
        key=lambda r: (
            r.span_days,
            -r.start_date.toordinal(),
            -(r.created_at.timestamp() if r.created_at else 0.0),
        ),
    )


class BookingStore:
    """Store operations used by the booking engine and the content pages."""

    def __init__(
        self,
        session: AsyncSession,
        timeout: float | None = None,
        read_retries: int | None = None,
    ) -> None:
        self._session = session
        self._timeout = timeout if timeout is not None else app_settings.store_timeout_seconds
        self._read_retries = read_retries if read_retries is not None else app_settings.store_read_retries

    @property
    def session(self) -> AsyncSession:
        return self._session

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _read(self, operation: str, query: Callable[[], Awaitable[T]]) -> T:
        attempts = self._read_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await asyncio.wait_for(query(), timeout=self._timeout)
            except (asyncio.TimeoutError, OperationalError, InterfaceError) as e:
                logger.warning("Store read %s failed (attempt %s/%s): %s", operation, attempt, attempts, e)
                if attempt == attempts:
                    raise StoreUnavailableError(f"Unable to {operation}") from e
                await self._reset()
            except SQLAlchemyError as e:
                logger.exception("Store read %s failed", operation)
                raise StoreUnavailableError(f"Unable to {operation}") from e
        raise AssertionError("unreachable")

    async def _write(self, operation: str, statement: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(statement(), timeout=self._timeout)
        except IntegrityError:
            raise
        except asyncio.TimeoutError as e:
            raise StoreUnavailableError(f"Timed out trying to {operation}") from e
        except (OperationalError, InterfaceError) as e:
            raise StoreUnavailableError(f"Unable to {operation}") from e

    async def _reset(self) -> None:
        try:
            await self._session.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback after failed read also failed")

    async def commit(self) -> None:
        await self._write("commit", self._session.commit)

    async def rollback(self) -> None:
        await self._session.rollback()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_blocked_dates(self, start: date, end: date) -> list[date]:
        """Return blocked nights between ``start`` and ``end``, both inclusive."""

        async def query() -> list[date]:
            result = await self._session.execute(
                select(BlockedDate.date)
                .where(BlockedDate.date >= start, BlockedDate.date <= end)
                .order_by(BlockedDate.date)
            )
            return list(result.scalars().all())

        return await self._read("fetch blocked dates", query)

    async def get_active_seasonal_rate(self, night: date) -> SeasonalRate | None:
        async def query() -> SeasonalRate | None:
            result = await self._session.execute(
                select(SeasonalRate).where(
                    SeasonalRate.active.is_(True),
                    SeasonalRate.start_date <= night,
                    SeasonalRate.end_date >= night,
                )
            )
            candidates = list(result.scalars().all())
            if len(candidates) > 1:
                logger.warning(
                    "%s active seasonal rates overlap on %s: %s",
                    len(candidates),
                    night,
                    ", ".join(r.name for r in candidates),
                )
            return pick_seasonal_rate(candidates)

        return await self._read("fetch seasonal rate", query)

    async def get_property_settings(self) -> PropertySettings | None:
        async def query() -> PropertySettings | None:
            result = await self._session.execute(select(PropertySettings).limit(1))
            return result.scalar_one_or_none()

        return await self._read("fetch property settings", query)

    async def get_booking_by_confirmation_code(self, code: str) -> Booking | None:
        async def query() -> Booking | None:
            result = await self._session.execute(
                select(Booking)
                .where(Booking.confirmation_code == code.upper())
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()

        return await self._read("fetch booking", query)

    async def list_active_addons(self) -> list[Addon]:
        async def query() -> list[Addon]:
            result = await self._session.execute(
                select(Addon).where(Addon.active.is_(True)).order_by(Addon.sort_order, Addon.name)
            )
            return list(result.scalars().all())

        return await self._read("fetch add-ons", query)

    async def list_approved_reviews(self, limit: int | None = None) -> list[Review]:
        async def query() -> list[Review]:
            stmt = select(Review).where(Review.approved.is_(True)).order_by(Review.created_at.desc())
            if limit is not None:
                stmt = stmt.limit(limit)
            result = await self._session.execute(stmt)
            return list(result.scalars().all())

        return await self._read("fetch reviews", query)

    async def list_gallery_images(self, category: str | None = None) -> list[GalleryImage]:
        async def query() -> list[GalleryImage]:
            stmt = select(GalleryImage).order_by(GalleryImage.sort_order)
            if category is not None:
                stmt = stmt.where(GalleryImage.category == category)
            result = await self._session.execute(stmt)
            return list(result.scalars().all())

        return await self._read("fetch gallery images", query)

    # ------------------------------------------------------------------
    # Writes (flushed, not committed)
    # ------------------------------------------------------------------

    async def insert_booking(self, fields: dict[str, Any]) -> Booking:
        booking = Booking(**fields, addons=[])

        async def statement() -> Booking:
            self._session.add(booking)
            await self._session.flush()
            await self._session.refresh(booking)
            return booking

        return await self._write("insert booking", statement)

    async def insert_booking_addons(self, rows: Sequence[dict[str, Any]]) -> list[BookingAddon]:
        lines = [BookingAddon(**row) for row in rows]

        async def statement() -> list[BookingAddon]:
            self._session.add_all(lines)
            await self._session.flush()
            return lines

        return await self._write("insert booking add-ons", statement)

    async def insert_blocked_dates(self, rows: Sequence[dict[str, Any]]) -> list[BlockedDate]:
        blocks = [BlockedDate(**row) for row in rows]

        async def statement() -> list[BlockedDate]:
            self._session.add_all(blocks)
            await self._session.flush()
            return blocks

        return await self._write("insert blocked dates", statement)

    async def update_booking_status(self, booking_id: uuid.UUID, status: str) -> Booking:
        async def statement() -> Booking:
            booking = await self._session.get(Booking, booking_id)
            if booking is None:
                raise BookingNotFoundError(f"Booking {booking_id} does not exist")
            booking.status = status
            await self._session.flush()
            await self._session.refresh(booking)
            return booking

        return await self._write("update booking status", statement)

    async def update_booking_agreement(
        self, booking_id: uuid.UUID, signed: bool, signed_at: datetime | None
    ) -> Booking:
        async def statement() -> Booking:
            booking = await self._session.get(Booking, booking_id)
            if booking is None:
                raise BookingNotFoundError(f"Booking {booking_id} does not exist")
            booking.agreement_signed = signed
            booking.agreement_signed_at = signed_at
            await self._session.flush()
            await self._session.refresh(booking)
            return booking

        return await self._write("update booking agreement", statement)

    async def insert_contact_submission(self, fields: dict[str, Any]) -> ContactSubmission:
        submission = ContactSubmission(**fields)

        async def statement() -> ContactSubmission:
            self._session.add(submission)
            await self._session.flush()
            await self._session.refresh(submission)
            return submission

        return await self._write("save contact submission", statement)
