"""Seed the database with the lake house's settings, rates, and site content.

Run from the ``backend`` directory after applying migrations:
    alembic upgrade head
    python -m scripts.seed_data

Existing catalog and content rows are replaced. Bookings and their blocked
nights are left untouched.
"""

import asyncio
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

import lakehouse.models  # noqa: F401
from lakehouse.database import async_session_factory, engine
from lakehouse.models.addon import Addon
from lakehouse.models.gallery_image import GalleryImage
from lakehouse.models.property_settings import PropertySettings
from lakehouse.models.review import Review
from lakehouse.models.seasonal_rate import SeasonalRate

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

PROPERTY = {
    "property_name": "Serenity Lake House",
    "sleeps": 8,
    "bedrooms": 3,
    "bathrooms": Decimal("2.5"),
    "square_feet": 2400,
    "parking_spaces": 3,
    "pets_allowed": True,
    "base_nightly_rate": Decimal("275.00"),
    "cleaning_fee": Decimal("150.00"),
    "tax_rate": Decimal("0.0600"),
    "min_nights": 2,
    "damage_deposit": Decimal("500.00"),
    "check_in_time": "4:00 PM",
    "check_out_time": "10:00 AM",
    "cancellation_policy": (
        "Full refund for cancellations made 30 days or more before check-in. "
        "50% refund for cancellations made 14 to 29 days before check-in. "
        "No refund for cancellations made less than 14 days before check-in."
    ),
    "house_rules": (
        "No smoking anywhere on the property. Quiet hours from 10 PM to 8 AM. "
        "No parties or events. Maximum occupancy of 8 guests."
    ),
}

ADDONS = [
    {
        "name": "Early Check-in",
        "description": "Arrive at 12:00 PM instead of 4:00 PM, subject to availability.",
        "price": Decimal("75.00"),
        "per_night": False,
        "sort_order": 1,
    },
    {
        "name": "Late Check-out",
        "description": "Stay until 2:00 PM on your departure day.",
        "price": Decimal("75.00"),
        "per_night": False,
        "sort_order": 2,
    },
    {
        "name": "Pet Fee",
        "description": "Up to two well-behaved dogs.",
        "price": Decimal("25.00"),
        "per_night": True,
        "sort_order": 3,
    },
    {
        "name": "Firewood Bundle",
        "description": "Seasoned hardwood for the fire pit and fireplace.",
        "price": Decimal("30.00"),
        "per_night": False,
        "sort_order": 4,
    },
]

REVIEWS = [
    {
        "guest_name": "Megan R.",
        "rating": 5,
        "title": "Perfect family getaway",
        "comment": "The dock at sunset was the highlight of our trip. Spotless house and thoughtful hosts.",
    },
    {
        "guest_name": "Daniel K.",
        "rating": 5,
        "title": "Quiet, beautiful, and well equipped",
        "comment": "Great kitchen, comfortable beds, and the kayaks were a hit with the kids.",
    },
    {
        "guest_name": "Priya S.",
        "rating": 4,
        "title": "Lovely lake views",
        "comment": "Wonderful stay. The drive in is a little bumpy but the house more than makes up for it.",
    },
]

GALLERY = [
    ("exterior", "https://images.pexels.com/photos/1732414/pexels-photo-1732414.jpeg",
     "Front view of Serenity Lake House", "Welcome to your lakefront retreat", True),
    ("dock", "https://images.pexels.com/photos/2119713/pexels-photo-2119713.jpeg",
     "Private dock at sunset", "Your private dock with stunning sunset views", True),
    ("living", "https://images.pexels.com/photos/1396122/pexels-photo-1396122.jpeg",
     "Modern living room", "Spacious living area with lake views", False),
    ("kitchen", "https://images.pexels.com/photos/1457842/pexels-photo-1457842.jpeg",
     "Fully equipped kitchen", "Gourmet kitchen with modern appliances", False),
    ("bedroom", "https://images.pexels.com/photos/164595/pexels-photo-164595.jpeg",
     "Master bedroom", "Master bedroom with plush bedding", False),
    ("bathroom", "https://images.pexels.com/photos/1457847/pexels-photo-1457847.jpeg",
     "Modern bathroom", "Spa-like bathroom with premium fixtures", False),
    ("exterior", "https://images.pexels.com/photos/1438832/pexels-photo-1438832.jpeg",
     "Outdoor deck area", "Deck perfect for morning coffee", False),
    ("dock", "https://images.pexels.com/photos/2440952/pexels-photo-2440952.jpeg",
     "Kayaks at the dock", "Complimentary kayaks for your adventure", False),
]


def build_seasons(year: int) -> list[dict]:
    """Summer peak, fall foliage, and holiday seasons for a calendar year."""
    return [
        {
            "name": f"Summer Peak {year}",
            "start_date": date(year, 6, 15),
            "end_date": date(year, 8, 31),
            "nightly_rate": Decimal("395.00"),
            "min_nights": 4,
        },
        {
            "name": f"Fall Foliage {year}",
            "start_date": date(year, 9, 25),
            "end_date": date(year, 10, 20),
            "nightly_rate": Decimal("325.00"),
            "min_nights": 3,
        },
        {
            "name": f"Holidays {year}",
            "start_date": date(year, 12, 20),
            "end_date": date(year + 1, 1, 2),
            "nightly_rate": Decimal("425.00"),
            "min_nights": 3,
        },
    ]


async def seed_catalog(session: AsyncSession, today: date) -> dict[str, int]:
    """Replace settings, seasons, add-ons, reviews, and gallery rows.

    Returns the number of rows written per table.
    """
    for model in (PropertySettings, SeasonalRate, Review, GalleryImage):
        await session.execute(delete(model))
    # Add-ons already sold on a booking are retired rather than deleted.
    await session.execute(update(Addon).values(active=False))
    await session.flush()

    session.add(PropertySettings(**PROPERTY))

    seasons = build_seasons(today.year) + build_seasons(today.year + 1)
    session.add_all(SeasonalRate(active=True, **s) for s in seasons)
    session.add_all(Addon(active=True, **a) for a in ADDONS)
    session.add_all(
        Review(approved=True, stay_date=date(today.year - 1, 7, 1 + i * 7), **r) for i, r in enumerate(REVIEWS)
    )
    session.add_all(
        GalleryImage(
            category=category,
            url=f"{url}?auto=compress&cs=tinysrgb&w=1200",
            thumbnail_url=f"{url}?auto=compress&cs=tinysrgb&w=400",
            alt_text=alt,
            caption=caption,
            featured=featured,
            sort_order=i,
        )
        for i, (category, url, alt, caption, featured) in enumerate(GALLERY)
    )
    await session.flush()

    return {
        "property_settings": 1,
        "seasonal_rates": len(seasons),
        "addons": len(ADDONS),
        "reviews": len(REVIEWS),
        "gallery_images": len(GALLERY),
    }


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    async with async_session_factory() as session:
        counts = await seed_catalog(session, date.today())
        await session.commit()

    print("=" * 60)
    print("Seed Summary")
    print("=" * 60)
    for table, count in counts.items():
        print(f"   {table:<18} {count}")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
