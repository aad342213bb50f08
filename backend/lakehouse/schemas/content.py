"""Pydantic v2 schemas for reviews, the gallery, and the contact form."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------


class ReviewResponse(BaseModel):
    id: uuid.UUID
    guest_name: str
    rating: int
    title: str
    comment: str
    stay_date: date | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RatingBucket(BaseModel):
    rating: int
    count: int
    percentage: int


class ReviewListResponse(BaseModel):
    """Approved reviews plus the headline average and per-star breakdown."""

    items: list[ReviewResponse]
    total: int
    average_rating: float
    breakdown: list[RatingBucket]


# ---------------------------------------------------------------------------
# Gallery
# ---------------------------------------------------------------------------


class GalleryImageResponse(BaseModel):
    id: uuid.UUID
    category: str
    url: str
    thumbnail_url: str | None = None
    caption: str | None = None
    alt_text: str
    sort_order: int
    featured: bool

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Contact form
# ---------------------------------------------------------------------------


class ContactCreate(BaseModel):
    """Schema for the about page's contact form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    message: str = Field(..., min_length=1, max_length=5000)


class ContactResponse(BaseModel):
    id: uuid.UUID
    message: str = "Thanks for reaching out. We'll get back to you within 24 hours."
