"""Billing periods - the unit in which a room is priced and a stay is measured."""

from __future__ import annotations

from enum import Enum

from apartly.observability.logging import get_logger

logger = get_logger(__name__)


class BillingPeriod(str, Enum):
    NIGHT = "NIGHT"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"

    @property
    def label(self) -> str:
        """Singular lowercase label used in notes and quotes ("night", "week")."""
        return self.value.lower()


DEFAULT_PERIOD = BillingPeriod.NIGHT


def parse_billing_period(value: str | BillingPeriod | None) -> BillingPeriod:
    """Resolve a stored or submitted period into a BillingPeriod.

    Rooms created before pricing periods existed have no value; those and
    any unrecognised unit are priced per night.
    """
    if isinstance(value, BillingPeriod):
        return value
    if value is None or not str(value).strip():
        return DEFAULT_PERIOD

    try:
        return BillingPeriod(str(value).strip().upper())
    except ValueError:
        logger.warning(
            "unknown billing period, falling back to night",
            extra={"extra_fields": {"billing_period": str(value)[:32]}},
        )
        return DEFAULT_PERIOD
