"""Tests for review summaries, gallery filtering, and the contact form."""

import pytest
import pytest_asyncio
from sqlalchemy import select

from lakehouse.booking.errors import BookingValidationError
from lakehouse.models.contact_submission import ContactSubmission
from lakehouse.models.gallery_image import GalleryImage
from lakehouse.models.review import Review
from lakehouse.services import content_service

pytestmark = pytest.mark.asyncio


def _reviews(*ratings: int) -> list[Review]:
    return [Review(guest_name="Guest", rating=r, title="Stay", comment="Nice") for r in ratings]


class TestSummarizeReviews:
    async def test_no_reviews_defaults_to_five_stars(self):
        summary = content_service.summarize_reviews([])
        assert summary["average_rating"] == 5.0
        assert [b["rating"] for b in summary["breakdown"]] == [5, 4, 3, 2, 1]
        assert all(b["count"] == 0 and b["percentage"] == 0 for b in summary["breakdown"])

    async def test_average_rounds_to_one_decimal(self):
        summary = content_service.summarize_reviews(_reviews(5, 5, 4))
        # 14 / 3 = 4.666...
        assert summary["average_rating"] == 4.7

    async def test_breakdown_percentages(self):
        summary = content_service.summarize_reviews(_reviews(5, 5, 5, 4))
        by_rating = {b["rating"]: b for b in summary["breakdown"]}
        assert by_rating[5] == {"rating": 5, "count": 3, "percentage": 75}
        assert by_rating[4] == {"rating": 4, "count": 1, "percentage": 25}
        assert by_rating[1]["percentage"] == 0


class TestGallery:
    @pytest_asyncio.fixture
    async def images(self, db_session):
        db_session.add_all(
            [
                GalleryImage(category="dock", url="https://img/1.jpg", alt_text="Dock", sort_order=2),
                GalleryImage(category="exterior", url="https://img/2.jpg", alt_text="Front", sort_order=1),
                GalleryImage(category="dock", url="https://img/3.jpg", alt_text="Kayaks", sort_order=3),
            ]
        )
        await db_session.commit()

    async def test_all_in_display_order(self, store, images):
        result = await content_service.list_gallery(store)
        assert [img.alt_text for img in result] == ["Front", "Dock", "Kayaks"]
        assert len(await content_service.list_gallery(store, "all")) == 3

    async def test_filter_by_category(self, store, images):
        result = await content_service.list_gallery(store, "dock")
        assert [img.alt_text for img in result] == ["Dock", "Kayaks"]

    async def test_unknown_category_rejected(self, store):
        with pytest.raises(BookingValidationError):
            await content_service.list_gallery(store, "basement")


class TestContact:
    async def test_submission_is_saved(self, store, db_session):
        submission = await content_service.submit_contact(
            store, "Jamie Rivera", "jamie@example.com", "", "Is the dock open in October?"
        )
        assert submission.id is not None

        result = await db_session.execute(select(ContactSubmission))
        saved = result.scalar_one()
        assert saved.email == "jamie@example.com"
        assert saved.phone is None
