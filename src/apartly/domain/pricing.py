"""Booking pricing engine.

Fixed pricing: every period purchased is charged at the full period rate,
however much of it the guest actually uses. The daily equivalent is an
informational "~ per day" figure only and uses fixed divisors (30 days a
month, 365 a year); it must never feed a charge.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation

from apartly.domain.billing import BillingPeriod, parse_billing_period
from apartly.domain.errors import InvalidArgument
from apartly.domain.intervals import BookingInterval
from apartly.infra.time import add_elapsed, add_months, add_years

_DAILY_DIVISORS = {
    BillingPeriod.NIGHT: Decimal(1),
    BillingPeriod.DAY: Decimal(1),
    BillingPeriod.WEEK: Decimal(7),
    BillingPeriod.MONTH: Decimal(30),
    BillingPeriod.YEAR: Decimal(365),
}

# rooms.price_per_period is NUMERIC(12, 2)
MAX_RATE_PER_PERIOD = Decimal("9999999999.99")


@dataclass(frozen=True)
class PricingQuote:
    period: BillingPeriod
    period_count: int
    rate_per_period: Decimal
    total_amount: Decimal
    daily_equivalent_rate: Decimal
    interval: BookingInterval


def _require_period_count(period_count: int) -> int:
    # bool is an int subclass; True must not pass as one period
    if isinstance(period_count, bool) or not isinstance(period_count, int):
        raise InvalidArgument("period_count", "must be an integer")
    if period_count < 1:
        raise InvalidArgument("period_count", "must be at least 1")
    return period_count


def _require_rate(rate_per_period: Decimal | int | float | str) -> Decimal:
    if isinstance(rate_per_period, bool):
        raise InvalidArgument("rate_per_period", "must be a number")
    try:
        rate = Decimal(str(rate_per_period))
    except (InvalidOperation, ValueError):
        raise InvalidArgument("rate_per_period", "must be a number") from None
    if not rate.is_finite():
        raise InvalidArgument("rate_per_period", "must be finite")
    if rate < 0:
        raise InvalidArgument("rate_per_period", "must not be negative")
    if rate > MAX_RATE_PER_PERIOD:
        raise InvalidArgument("rate_per_period", f"must not exceed {MAX_RATE_PER_PERIOD}")
    return rate


def _shift(check_in: datetime, period_count: int, unit: BillingPeriod) -> datetime:
    if unit is BillingPeriod.WEEK:
        return add_elapsed(check_in, timedelta(weeks=period_count))
    if unit is BillingPeriod.MONTH:
        return add_months(check_in, period_count)
    if unit is BillingPeriod.YEAR:
        return add_years(check_in, period_count)
    return add_elapsed(check_in, timedelta(hours=24 * period_count))


def compute_checkout(
    check_in: datetime,
    period_count: int,
    period: BillingPeriod | str | None,
) -> datetime:
    """Return the checkout instant for a stay of *period_count* periods.

    Nights, days and weeks are fixed 24-hour blocks of elapsed time, so the
    time of day is kept and DST cannot shorten a stay. Months and years are
    calendar arithmetic with day-of-month clamping (Jan 31 + 1 month lands
    on the last day of February).

    Raises:
        InvalidArgument: check_in is not a datetime, period_count < 1, or the
            checkout would fall after year 9999.
    """
    if not isinstance(check_in, datetime):
        raise InvalidArgument("check_in", "must be a datetime")
    _require_period_count(period_count)

    unit = parse_billing_period(period)
    try:
        return _shift(check_in, period_count, unit)
    except (OverflowError, ValueError):
        raise InvalidArgument("period_count", "checkout is out of range") from None


def compute_total(
    rate_per_period: Decimal | int | float | str,
    period_count: int,
) -> Decimal:
    """Return rate_per_period * period_count, with no proration."""
    rate = _require_rate(rate_per_period)
    return rate * _require_period_count(period_count)


def daily_equivalent(
    rate_per_period: Decimal | int | float | str,
    period: BillingPeriod | str | None,
) -> Decimal:
    """Approximate per-day rate, for display next to a room's price."""
    rate = _require_rate(rate_per_period)
    return rate / _DAILY_DIVISORS[parse_billing_period(period)]


def quote(
    check_in: datetime,
    period_count: int,
    rate_per_period: Decimal | int | float | str,
    period: BillingPeriod | str | None,
) -> PricingQuote:
    """Price a stay: checkout, total and daily equivalent in one value."""
    unit = parse_billing_period(period)
    rate = _require_rate(rate_per_period)
    check_out = compute_checkout(check_in, period_count, unit)
    return PricingQuote(
        period=unit,
        period_count=period_count,
        rate_per_period=rate,
        total_amount=compute_total(rate, period_count),
        daily_equivalent_rate=daily_equivalent(rate, unit),
        interval=BookingInterval(check_in=check_in, check_out=check_out),
    )
