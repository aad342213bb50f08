"""Blocked date model — one row per unavailable night."""

import uuid
import datetime

from sqlalchemy import Date, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from lakehouse.database import Base, UUIDPrimaryKeyMixin


class BlockedDate(UUIDPrimaryKeyMixin, Base):
    """A night that cannot be booked.

    The unique constraint on ``date`` is what stops two concurrent bookings
    from claiming the same night: the second insert fails atomically.
    """

    __tablename__ = "blocked_dates"

    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    reason: Mapped[str] = mapped_column(String(50), default="booked")
    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime.datetime] = mapped_column(server_default=func.now())

    __table_args__ = (UniqueConstraint("date", name="uq_blocked_dates_date"),)

    def __repr__(self) -> str:
        return f"<BlockedDate(date={self.date}, reason={self.reason!r}, booking_id={self.booking_id})>"
