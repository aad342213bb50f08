"""SQLAlchemy models for the lake house booking backend.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from lakehouse.models.addon import Addon
from lakehouse.models.blocked_date import BlockedDate
from lakehouse.models.booking import Booking, BookingAddon
from lakehouse.models.contact_submission import ContactSubmission
from lakehouse.models.gallery_image import GalleryImage
from lakehouse.models.property_settings import PropertySettings
from lakehouse.models.review import Review
from lakehouse.models.seasonal_rate import SeasonalRate

__all__ = [
    "Addon",
    "BlockedDate",
    "Booking",
    "BookingAddon",
    "ContactSubmission",
    "GalleryImage",
    "PropertySettings",
    "Review",
    "SeasonalRate",
]
