"""Tests for the availability endpoints."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from conftest import FakeStore, future_dates
from lakehouse.api.deps import get_store
from lakehouse.main import app

pytestmark = pytest.mark.asyncio


class TestCheckDates:
    async def test_open_calendar(self, client: AsyncClient) -> None:
        check_in, check_out = future_dates(30, 3)
        response = await client.get(
            "/api/v1/availability",
            params={"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["available"] is True
        assert data["blocked_nights"] == []

    async def test_booked_nights_reported(
        self, client: AsyncClient, property_settings, guest_payload: dict
    ) -> None:
        check_in, check_out = future_dates(30, 3)
        created = await client.post(
            "/api/v1/bookings",
            json={**guest_payload, "check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
        )
        assert created.status_code == 201

        response = await client.get(
            "/api/v1/availability",
            params={
                "check_in": (check_in + timedelta(days=2)).isoformat(),
                "check_out": (check_out + timedelta(days=2)).isoformat(),
            },
        )
        data = response.json()
        assert data["available"] is False
        assert data["blocked_nights"] == [(check_in + timedelta(days=2)).isoformat()]

    async def test_reversed_range(self, client: AsyncClient) -> None:
        check_in, check_out = future_dates(30, 3)
        response = await client.get(
            "/api/v1/availability",
            params={"check_in": check_out.isoformat(), "check_out": check_in.isoformat()},
        )
        assert response.status_code == 400

    async def test_malformed_date(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/availability", params={"check_in": "07/01/2030", "check_out": "x"})
        assert response.status_code == 422

    async def test_store_outage_is_503(self, client: AsyncClient) -> None:
        outage = FakeStore()
        outage.fail_reads = True
        app.dependency_overrides[get_store] = lambda: outage

        check_in, check_out = future_dates(30, 3)
        response = await client.get(
            "/api/v1/availability",
            params={"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
        )
        assert response.status_code == 503
        assert "try again" in response.json()["detail"]


class TestBlockedWindow:
    async def test_lists_blocked_nights(self, client: AsyncClient, property_settings, guest_payload: dict) -> None:
        check_in, check_out = future_dates(30, 2)
        await client.post(
            "/api/v1/bookings",
            json={**guest_payload, "check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
        )

        response = await client.get(
            "/api/v1/availability/blocked",
            params={"start": check_in.isoformat(), "end": (check_in + timedelta(days=30)).isoformat()},
        )
        assert response.status_code == 200
        assert response.json()["dates"] == [check_in.isoformat(), (check_in + timedelta(days=1)).isoformat()]

    async def test_window_too_large(self, client: AsyncClient) -> None:
        start, _ = future_dates(1, 1)
        response = await client.get(
            "/api/v1/availability/blocked",
            params={"start": start.isoformat(), "end": (start + timedelta(days=500)).isoformat()},
        )
        assert response.status_code == 400
