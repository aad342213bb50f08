"""Property info and add-on catalog router."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lakehouse.api.deps import get_store, raise_http_error
from lakehouse.booking.errors import BookingEngineError
from lakehouse.models.addon import Addon
from lakehouse.models.property_settings import PropertySettings
from lakehouse.schemas.property import AddonResponse, PropertySettingsResponse
from lakehouse.services.booking_service import load_settings
from lakehouse.store import BookingStore

router = APIRouter(prefix="/api/v1", tags=["property"])


@router.get(
    "/property",
    response_model=PropertySettingsResponse,
    summary="Get property details, rates, and policies",
)
async def get_property(store: BookingStore = Depends(get_store)) -> PropertySettings:
    try:
        return await load_settings(store)
    except BookingEngineError as e:
        raise_http_error(e)


@router.get(
    "/addons",
    response_model=list[AddonResponse],
    summary="List add-ons offered in the booking wizard",
)
async def list_addons(store: BookingStore = Depends(get_store)) -> list[Addon]:
    try:
        return await store.list_active_addons()
    except BookingEngineError as e:
        raise_http_error(e)
