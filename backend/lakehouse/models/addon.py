"""Add-on catalog model — optional paid extras offered in the wizard."""

from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lakehouse.database import Base, UUIDPrimaryKeyMixin


class Addon(UUIDPrimaryKeyMixin, Base):
    """An extra such as early check-in or a kayak rental."""

    __tablename__ = "addons"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    per_night: Mapped[bool] = mapped_column(Boolean, default=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<Addon(name={self.name!r}, price={self.price}, per_night={self.per_night})>"
