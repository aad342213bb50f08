"""Nightly rate resolution and stay pricing.

Money is fixed-point ``Decimal`` throughout. Inputs are normalised to cents
on the way in, tax is rounded half-up to cents once, and every field of the
returned breakdown is exact to the cent, so the same inputs always produce
the same totals.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from lakehouse.booking.calendar import days_between, iter_nights
from lakehouse.booking.errors import BookingValidationError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Convert a number (Decimal, int, float, or numeric string) to cents."""
    if isinstance(value, Decimal):
        amount = value
    else:
        amount = Decimal(str(value))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class NightlyRate:
    night: date
    rate: Decimal
    season: str | None = None


@dataclass(frozen=True)
class PriceBreakdown:
    """Itemised price of a stay, as shown in the wizard's summary panel."""

    check_in: date
    check_out: date
    num_nights: int
    subtotal: Decimal
    cleaning_fee: Decimal
    addon_total: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    nightly_rates: tuple[NightlyRate, ...] = field(default=())

    @property
    def before_tax(self) -> Decimal:
        return self.subtotal + self.cleaning_fee + self.addon_total - self.discount_amount

    def as_dict(self) -> dict:
        return {
            "check_in": self.check_in,
            "check_out": self.check_out,
            "num_nights": self.num_nights,
            "subtotal": self.subtotal,
            "cleaning_fee": self.cleaning_fee,
            "addon_total": self.addon_total,
            "discount_amount": self.discount_amount,
            "before_tax": self.before_tax,
            "tax_amount": self.tax_amount,
            "total_amount": self.total_amount,
            "nightly_rates": [
                {"night": n.night, "rate": n.rate, "season": n.season} for n in self.nightly_rates
            ],
        }


async def resolve_nightly_rate(store, night: date, settings) -> Decimal:
    """Return the rate for one night: the covering active season, else base rate."""
    rate, _ = await _resolve(store, night, settings)
    return rate


async def _resolve(store, night: date, settings) -> tuple[Decimal, str | None]:
    season = await store.get_active_seasonal_rate(night)
    if season is not None:
        return to_money(season.nightly_rate), season.name
    return to_money(settings.base_nightly_rate), None


async def calculate_price(
    store,
    check_in: date,
    check_out: date,
    settings,
    addon_total=ZERO,
    discount_amount=ZERO,
) -> PriceBreakdown:
    """Price a stay night by night.

    Each night's rate is resolved on its own, so a stay that crosses a
    seasonal boundary is charged each side's rate. Nothing is written and
    ``settings`` is not modified; repeated calls with the same inputs return
    equal breakdowns.
    """
    if check_out <= check_in:
        raise BookingValidationError("check_out must be after check_in")
    addon_total = to_money(addon_total)
    discount_amount = to_money(discount_amount)
    if addon_total < ZERO:
        raise BookingValidationError("Add-on total cannot be negative")
    if discount_amount < ZERO:
        raise BookingValidationError("Discount cannot be negative")

    num_nights = days_between(check_in, check_out)

    nightly_rates: list[NightlyRate] = []
    for night in iter_nights(check_in, check_out):
        rate, season = await _resolve(store, night, settings)
        nightly_rates.append(NightlyRate(night=night, rate=rate, season=season))
    subtotal = sum((n.rate for n in nightly_rates), ZERO)

    cleaning_fee = to_money(settings.cleaning_fee)
    before_tax = subtotal + cleaning_fee + addon_total - discount_amount
    if before_tax < ZERO:
        raise BookingValidationError("Discount exceeds the price of the stay")

    tax_rate = Decimal(str(settings.tax_rate))
    tax_amount = (before_tax * tax_rate).quantize(CENT, rounding=ROUND_HALF_UP)
    total_amount = before_tax + tax_amount

    logger.debug(
        "Priced %s..%s: %s nights, subtotal=%s, tax=%s, total=%s",
        check_in,
        check_out,
        num_nights,
        subtotal,
        tax_amount,
        total_amount,
    )
    return PriceBreakdown(
        check_in=check_in,
        check_out=check_out,
        num_nights=num_nights,
        subtotal=subtotal,
        cleaning_fee=cleaning_fee,
        addon_total=addon_total,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        total_amount=total_amount,
        nightly_rates=tuple(nightly_rates),
    )
