"""Seasonal rate model — date-range overrides of the nightly rate."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from lakehouse.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class SeasonalRate(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A peak or off-peak rate covering start_date..end_date, both inclusive."""

    __tablename__ = "seasonal_rates"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    nightly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    min_nights: Mapped[int | None] = mapped_column(Integer, default=None)
    active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    __table_args__ = (Index("ix_seasonal_rates_range", "start_date", "end_date"),)

    @property
    def span_days(self) -> int:
        return (self.end_date - self.start_date).days

    def covers(self, night: date) -> bool:
        return self.start_date <= night <= self.end_date

    def __repr__(self) -> str:
        return (
            f"<SeasonalRate(name={self.name!r}, {self.start_date}..{self.end_date}, "
            f"rate={self.nightly_rate}, active={self.active})>"
        )
