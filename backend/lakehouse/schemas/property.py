"""Pydantic v2 response schemas for the property info and add-on catalog."""

import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class PropertySettingsResponse(BaseModel):
    """Public property information used by the home, stay, and policies pages."""

    property_name: str
    sleeps: int
    bedrooms: int
    bathrooms: Decimal
    square_feet: int | None = None
    parking_spaces: int | None = None
    pets_allowed: bool
    base_nightly_rate: Decimal
    cleaning_fee: Decimal
    tax_rate: Decimal
    min_nights: int
    damage_deposit: Decimal
    check_in_time: str
    check_out_time: str
    cancellation_policy: str | None = None
    house_rules: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AddonResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None = None
    price: Decimal
    per_night: bool
    sort_order: int

    model_config = ConfigDict(from_attributes=True)
