"""Content service — reviews, gallery, and contact form."""

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from lakehouse.booking.errors import BookingValidationError
from lakehouse.models.contact_submission import ContactSubmission
from lakehouse.models.gallery_image import GALLERY_CATEGORIES, GalleryImage
from lakehouse.models.review import Review

logger = logging.getLogger(__name__)

DEFAULT_AVERAGE_RATING = 5.0


def summarize_reviews(reviews: Sequence[Review]) -> dict:
    """Average rating (one decimal) and a 5-to-1 star breakdown.

    With no reviews the headline falls back to 5.0 and every bucket is 0%.
    """
    total = len(reviews)
    if total == 0:
        average = DEFAULT_AVERAGE_RATING
    else:
        raw = Decimal(sum(r.rating for r in reviews)) / Decimal(total)
        average = float(raw.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    breakdown = []
    for rating in (5, 4, 3, 2, 1):
        count = sum(1 for r in reviews if r.rating == rating)
        percentage = 0
        if total:
            percentage = int((Decimal(count) * 100 / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        breakdown.append({"rating": rating, "count": count, "percentage": percentage})

    return {"average_rating": average, "breakdown": breakdown}


async def list_reviews(store, limit: int | None = None) -> dict:
    reviews = await store.list_approved_reviews(limit=limit)
    return {"items": reviews, "total": len(reviews), **summarize_reviews(reviews)}


async def list_gallery(store, category: str | None = None) -> list[GalleryImage]:
    """Gallery images in display order; ``None`` or ``"all"`` returns every category."""
    if category in (None, "all"):
        return await store.list_gallery_images()
    if category not in GALLERY_CATEGORIES:
        raise BookingValidationError(
            f"Unknown gallery category '{category}'. Must be one of: all, {', '.join(GALLERY_CATEGORIES)}"
        )
    return await store.list_gallery_images(category)


async def submit_contact(store, name: str, email: str, phone: str | None, message: str) -> ContactSubmission:
    submission = await store.insert_contact_submission(
        {"name": name, "email": email, "phone": phone or None, "message": message}
    )
    await store.commit()
    logger.info("Contact submission %s received from %s", submission.id, email)
    return submission
