"""Property settings model — the single row describing the house."""

from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lakehouse.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class PropertySettings(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Capacity, pricing defaults, and policies for the house.

    The booking engine only reads this row; it is edited through the
    database directly or by the seed script.
    """

    __tablename__ = "property_settings"

    property_name: Mapped[str] = mapped_column(String(255), nullable=False)
    sleeps: Mapped[int] = mapped_column(Integer, nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[Decimal] = mapped_column(Numeric(3, 1), nullable=False)
    square_feet: Mapped[int | None] = mapped_column(Integer, default=None)
    parking_spaces: Mapped[int | None] = mapped_column(Integer, default=None)
    pets_allowed: Mapped[bool] = mapped_column(Boolean, default=False)
    base_nightly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    cleaning_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"))
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(6, 4), default=Decimal("0.0000"))  # fraction, e.g. 0.0600
    min_nights: Mapped[int] = mapped_column(Integer, default=1)
    damage_deposit: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0.00"))
    check_in_time: Mapped[str] = mapped_column(String(20), default="4:00 PM")
    check_out_time: Mapped[str] = mapped_column(String(20), default="10:00 AM")
    cancellation_policy: Mapped[str | None] = mapped_column(Text, default=None)
    house_rules: Mapped[str | None] = mapped_column(Text, default=None)

    def __repr__(self) -> str:
        return f"<PropertySettings(name={self.property_name!r}, base_rate={self.base_nightly_rate})>"
