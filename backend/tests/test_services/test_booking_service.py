"""Tests for the booking service: stay validation, quotes, bookings, lifecycle."""

import uuid
from datetime import date, datetime
from decimal import Decimal

import pytest

from conftest import FakeStore, make_season, make_settings
from lakehouse.booking.errors import (
    BookingNotFoundError,
    BookingStateError,
    BookingValidationError,
    DatesUnavailableError,
    PropertyNotConfiguredError,
)
from lakehouse.models.addon import Addon
from lakehouse.schemas.booking import AddonSelection, BookingRequest, StayRequest
from lakehouse.services import booking_service

pytestmark = pytest.mark.asyncio

TODAY = date(2030, 1, 15)


def _booking_request(guest_payload: dict, check_in: date, check_out: date, **extra) -> BookingRequest:
    return BookingRequest(check_in=check_in, check_out=check_out, **{**guest_payload, **extra})


# ---------------------------------------------------------------------------
# validate_stay
# ---------------------------------------------------------------------------


class TestValidateStay:
    async def test_valid_stay_passes(self):
        booking_service.validate_stay(make_settings(), date(2030, 7, 1), date(2030, 7, 4), 4, TODAY, 2)

    @pytest.mark.parametrize(
        ("check_in", "check_out", "guests", "min_nights", "message"),
        [
            (date(2030, 7, 4), date(2030, 7, 1), 2, 1, "after check-in"),
            (date(2030, 7, 1), date(2030, 7, 1), 2, 1, "after check-in"),
            (date(2030, 1, 10), date(2030, 1, 12), 2, 1, "past"),
            (date(2030, 7, 1), date(2030, 7, 4), 0, 1, "At least one guest"),
            (date(2030, 7, 1), date(2030, 7, 4), 9, 1, "sleeps at most 8"),
            (date(2030, 7, 1), date(2030, 7, 3), 2, 3, "Minimum stay"),
        ],
    )
    async def test_rejections(self, check_in, check_out, guests, min_nights, message):
        with pytest.raises(BookingValidationError, match=message):
            booking_service.validate_stay(make_settings(), check_in, check_out, guests, TODAY, min_nights)

    async def test_check_in_today_allowed(self):
        booking_service.validate_stay(make_settings(), TODAY, date(2030, 1, 16), 1, TODAY)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestMinNights:
    async def test_property_default(self, fake_store: FakeStore):
        fake_store.settings = make_settings(min_nights=2)
        assert await booking_service.effective_min_nights(fake_store, fake_store.settings, date(2030, 7, 1)) == 2

    async def test_season_of_check_in_night_overrides(self, fake_store: FakeStore):
        fake_store.settings = make_settings(min_nights=2)
        fake_store.seasons = [make_season("Summer", date(2030, 6, 15), date(2030, 8, 31), "395.00", min_nights=4)]
        settings = fake_store.settings
        assert await booking_service.effective_min_nights(fake_store, settings, date(2030, 7, 1)) == 4
        assert await booking_service.effective_min_nights(fake_store, settings, date(2030, 6, 14)) == 2

    async def test_missing_settings(self):
        with pytest.raises(PropertyNotConfiguredError):
            await booking_service.load_settings(FakeStore())


class TestPriceAddons:
    def _catalog(self):
        return [
            Addon(name="Early Check-in", price=Decimal("75.00"), per_night=False),
            Addon(name="Pet Fee", price=Decimal("25.00"), per_night=True),
        ]

    async def test_flat_and_per_night(self):
        catalog = self._catalog()
        for addon in catalog:
            addon.id = uuid.uuid4()
        early, pet = catalog
        selections = [AddonSelection(addon_id=early.id), AddonSelection(addon_id=pet.id, quantity=2)]

        lines, total = booking_service.price_addons(catalog, selections, num_nights=3)

        # 75 + 25 * 2 dogs * 3 nights
        assert total == Decimal("225.00")
        assert [(line.addon_id, line.quantity, line.price) for line in lines] == [
            (early.id, 1, Decimal("75.00")),
            (pet.id, 2, Decimal("25.00")),
        ]

    async def test_unknown_addon_rejected(self):
        with pytest.raises(BookingValidationError):
            booking_service.price_addons(self._catalog(), [AddonSelection(addon_id=uuid.uuid4())], num_nights=2)


# ---------------------------------------------------------------------------
# quote_stay / book_stay
# ---------------------------------------------------------------------------


class TestQuoteStay:
    async def test_quote_with_addons(self, store, property_settings, addons):
        stay = StayRequest(
            check_in=date(2030, 7, 1),
            check_out=date(2030, 7, 4),
            num_guests=4,
            addons=[AddonSelection(addon_id=addons["pet_fee"].id)],
        )
        quote = await booking_service.quote_stay(store, stay, today=TODAY)

        assert quote.available is True
        assert quote.breakdown.addon_total == Decimal("75.00")
        assert quote.breakdown.before_tax == Decimal("825.00")
        assert quote.breakdown.tax_amount == Decimal("49.50")
        assert quote.breakdown.total_amount == Decimal("874.50")

    async def test_retired_addon_rejected(self, store, property_settings, addons):
        stay = StayRequest(
            check_in=date(2030, 7, 1),
            check_out=date(2030, 7, 4),
            addons=[AddonSelection(addon_id=addons["retired"].id)],
        )
        with pytest.raises(BookingValidationError):
            await booking_service.quote_stay(store, stay, today=TODAY)

    async def test_quote_reports_blocked_nights(self, store, property_settings, guest_payload):
        await booking_service.book_stay(
            store, _booking_request(guest_payload, date(2030, 7, 2), date(2030, 7, 3)), today=TODAY
        )

        stay = StayRequest(check_in=date(2030, 7, 1), check_out=date(2030, 7, 4))
        quote = await booking_service.quote_stay(store, stay, today=TODAY)

        assert quote.available is False
        assert quote.blocked_nights == [date(2030, 7, 2)]

    async def test_unconfigured_property(self, store):
        stay = StayRequest(check_in=date(2030, 7, 1), check_out=date(2030, 7, 4))
        with pytest.raises(PropertyNotConfiguredError):
            await booking_service.quote_stay(store, stay, today=TODAY)


class TestBookStay:
    async def test_creates_pending_booking(self, store, property_settings, addons, guest_payload):
        request = _booking_request(
            guest_payload,
            date(2030, 7, 1),
            date(2030, 7, 4),
            addons=[{"addon_id": str(addons["early_check_in"].id)}],
        )
        booking = await booking_service.book_stay(store, request, today=TODAY)

        assert booking.status == "pending"
        assert booking.guest_email == guest_payload["guest_email"]
        assert booking.addon_total == Decimal("75.00")
        assert booking.total_amount == Decimal("874.50")
        assert len(booking.addons) == 1

    async def test_taken_dates_raise_with_nights(self, store, property_settings, guest_payload):
        await booking_service.book_stay(
            store, _booking_request(guest_payload, date(2030, 7, 1), date(2030, 7, 4)), today=TODAY
        )

        with pytest.raises(DatesUnavailableError) as exc_info:
            await booking_service.book_stay(
                store, _booking_request(guest_payload, date(2030, 7, 3), date(2030, 7, 6)), today=TODAY
            )
        assert exc_info.value.nights == (date(2030, 7, 3),)

    async def test_stay_shorter_than_minimum(self, store, db_session, property_settings, guest_payload):
        db_session.add(make_season("Summer", date(2030, 6, 15), date(2030, 8, 31), "395.00", min_nights=4))
        await db_session.commit()

        with pytest.raises(BookingValidationError, match="Minimum stay"):
            await booking_service.book_stay(
                store, _booking_request(guest_payload, date(2030, 7, 1), date(2030, 7, 3)), today=TODAY
            )


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    async def _book(self, store, guest_payload) -> str:
        booking = await booking_service.book_stay(
            store, _booking_request(guest_payload, date(2030, 7, 1), date(2030, 7, 4)), today=TODAY
        )
        return booking.confirmation_code

    async def test_get_unknown_booking(self, store):
        with pytest.raises(BookingNotFoundError):
            await booking_service.get_booking(store, "ZZZZZZZZ")

    async def test_confirm_is_idempotent(self, store, property_settings, guest_payload):
        code = await self._book(store, guest_payload)

        first = await booking_service.confirm_booking(store, code)
        assert first.status == "confirmed"
        second = await booking_service.confirm_booking(store, code.lower())
        assert second.status == "confirmed"

    async def test_confirm_leaves_cancelled_alone(self, store, property_settings, guest_payload):
        code = await self._book(store, guest_payload)
        booking = await booking_service.get_booking(store, code)
        await store.update_booking_status(booking.id, "cancelled")
        await store.commit()

        assert (await booking_service.confirm_booking(store, code)).status == "cancelled"

    async def test_sign_agreement_once(self, store, property_settings, guest_payload):
        code = await self._book(store, guest_payload)
        signed_at = datetime(2030, 1, 15, 12, 0)

        booking = await booking_service.sign_agreement(store, code, now=signed_at)
        assert booking.agreement_signed is True
        assert booking.agreement_signed_at == signed_at

        again = await booking_service.sign_agreement(store, code, now=datetime(2030, 2, 1))
        assert again.agreement_signed_at == signed_at

    async def test_cancelled_booking_cannot_be_signed(self, store, property_settings, guest_payload):
        code = await self._book(store, guest_payload)
        booking = await booking_service.get_booking(store, code)
        await store.update_booking_status(booking.id, "cancelled")
        await store.commit()

        with pytest.raises(BookingStateError):
            await booking_service.sign_agreement(store, code)
