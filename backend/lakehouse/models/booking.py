"""Booking models — a guest's reservation and its snapshotted add-ons."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lakehouse.database import Base, TimestampMixin, UUIDPrimaryKeyMixin

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed")


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A direct reservation of the house for a date range."""

    __tablename__ = "bookings"

    confirmation_code: Mapped[str] = mapped_column(String(8), nullable=False)
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    guest_phone: Mapped[str] = mapped_column(String(50), nullable=False)
    check_in: Mapped[date] = mapped_column(Date, nullable=False)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)
    num_guests: Mapped[int] = mapped_column(Integer, default=1)
    num_nights: Mapped[int] = mapped_column(Integer, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    cleaning_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    addon_total: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"))
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"))
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(50),
        default="pending",
        index=True,
    )  # pending, confirmed, cancelled, completed
    payment_intent_id: Mapped[str | None] = mapped_column(String(255), nullable=True)  # payments are stubbed
    agreement_signed: Mapped[bool] = mapped_column(Boolean, default=False)
    agreement_signed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    addons: Mapped[list["BookingAddon"]] = relationship(
        back_populates="booking", lazy="selectin", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("confirmation_code", name="uq_bookings_confirmation_code"),
        CheckConstraint("check_out > check_in", name="ck_bookings_dates"),
        Index("ix_bookings_check_in", "check_in"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(code={self.confirmation_code}, check_in={self.check_in}, "
            f"check_out={self.check_out}, status={self.status})>"
        )


class BookingAddon(UUIDPrimaryKeyMixin, Base):
    """An add-on attached to a booking with the unit price it was sold at."""

    __tablename__ = "booking_addons"

    booking_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    addon_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("addons.id", ondelete="RESTRICT"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    booking: Mapped["Booking"] = relationship(back_populates="addons")

    def __repr__(self) -> str:
        return f"<BookingAddon(booking_id={self.booking_id}, addon_id={self.addon_id}, qty={self.quantity})>"
