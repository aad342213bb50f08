"""Pydantic v2 request/response schemas for availability, quotes, and bookings."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AddonSelection(BaseModel):
    """An add-on ticked in the wizard."""

    addon_id: uuid.UUID
    quantity: int = Field(1, ge=1, le=50)


class StayRequest(BaseModel):
    """Dates, party size, and extras for a stay."""

    check_in: date
    check_out: date
    num_guests: int = Field(1, ge=1)
    addons: list[AddonSelection] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_stay(self) -> "StayRequest":
        """Validate that check_out is strictly after check_in and add-ons are not repeated."""
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        ids = [a.addon_id for a in self.addons]
        if len(ids) != len(set(ids)):
            raise ValueError("each add-on may only be selected once")
        return self


class QuoteRequest(StayRequest):
    """Pricing request; ``sequence`` is echoed back so stale quotes can be dropped."""

    sequence: int | None = Field(None, ge=0)


class BookingRequest(StayRequest):
    """Everything collected by the booking wizard."""

    model_config = ConfigDict(str_strip_whitespace=True)

    guest_name: str = Field(..., min_length=1, max_length=255)
    guest_email: EmailStr
    guest_phone: str = Field(..., min_length=1, max_length=50)
    special_requests: str | None = Field(None, max_length=2000)
    agreement_accepted: bool = False

    @model_validator(mode="after")
    def check_agreement(self) -> "BookingRequest":
        if not self.agreement_accepted:
            raise ValueError("the rental agreement, house rules, and cancellation policy must be accepted")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AvailabilityResponse(BaseModel):
    check_in: date
    check_out: date
    available: bool
    blocked_nights: list[date] = Field(default_factory=list)


class BlockedDatesResponse(BaseModel):
    """Blocked nights in a window, for greying out the date picker."""

    start: date
    end: date
    dates: list[date]


class NightlyRateResponse(BaseModel):
    night: date
    rate: Decimal
    season: str | None = None


class QuoteAddonResponse(BaseModel):
    addon_id: uuid.UUID
    quantity: int
    price: Decimal


class QuoteResponse(BaseModel):
    """Itemised price breakdown for the wizard's summary panel."""

    check_in: date
    check_out: date
    num_nights: int
    subtotal: Decimal
    cleaning_fee: Decimal
    addon_total: Decimal
    discount_amount: Decimal
    before_tax: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    nightly_rates: list[NightlyRateResponse]
    addons: list[QuoteAddonResponse] = Field(default_factory=list)
    min_nights: int
    available: bool
    sequence: int | None = None


class BookingAddonResponse(BaseModel):
    addon_id: uuid.UUID
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BaseModel):
    """Booking as shown on the confirmation and reservation pages."""

    id: uuid.UUID
    confirmation_code: str
    guest_name: str
    guest_email: str
    guest_phone: str
    check_in: date
    check_out: date
    num_guests: int
    num_nights: int
    subtotal: Decimal
    cleaning_fee: Decimal
    addon_total: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    special_requests: str | None = None
    status: str
    agreement_signed: bool
    agreement_signed_at: datetime | None = None
    addons: list[BookingAddonResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
