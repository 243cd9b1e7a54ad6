"""Pricing preview endpoint.

POST /pricing/quote → price a stay from an explicit rate and billing period

Pure computation, no database access. Backs the "pricing preview" panel of
the booking form before a room is chosen.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict

from apartly.domain.errors import InvalidArgument
from apartly.domain.pricing import PricingQuote, quote

router = APIRouter(prefix="/pricing", tags=["pricing"])

CENTS = Decimal("0.01")


class QuoteRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rate_per_period: Decimal
    period: str | None = None
    check_in: datetime
    period_count: int


def quote_to_dict(priced: PricingQuote) -> dict:
    """Serialise a quote; amounts are strings rounded to cents."""
    return {
        "period": priced.period.value,
        "period_label": priced.period.label,
        "period_count": priced.period_count,
        "check_in": priced.interval.check_in,
        "check_out": priced.interval.check_out,
        "rate_per_period": str(priced.rate_per_period.quantize(CENTS)),
        "total_amount": str(priced.total_amount.quantize(CENTS)),
        "daily_equivalent_rate": str(priced.daily_equivalent_rate.quantize(CENTS)),
    }


@router.post("/quote")
def pricing_quote(body: QuoteRequest) -> dict:
    """Compute checkout, total and approximate daily rate for a stay."""
    try:
        priced = quote(body.check_in, body.period_count, body.rate_per_period, body.period)
    except InvalidArgument as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return quote_to_dict(priced)
