"""Gallery image model."""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from lakehouse.database import Base, UUIDPrimaryKeyMixin

GALLERY_CATEGORIES = ("exterior", "dock", "living", "kitchen", "bedroom", "bathroom", "workspace")


class GalleryImage(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "gallery_images"

    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String(1024), default=None)
    caption: Mapped[str | None] = mapped_column(String(255), default=None)
    alt_text: Mapped[str] = mapped_column(String(255), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
