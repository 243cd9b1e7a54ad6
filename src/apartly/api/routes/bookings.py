"""Bookings endpoints.

POST  /bookings/quote          → price a stay with a room's stored rate
POST  /bookings                → create (201)
PATCH /bookings/{id}           → change room, check-in or period count
POST  /bookings/{id}/extend    → extend checkout by whole billing periods

Every write runs in a single transaction: the room row lock, the conflict
query and the insert/update commit together or not at all.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, HTTPException, Path
from pydantic import BaseModel, ConfigDict, Field

from apartly.api.routes.pricing import CENTS, quote_to_dict
from apartly.domain.errors import (
    ROOM_UNAVAILABLE_MESSAGE,
    BookingConflictError,
    BookingNotExtendableError,
    BookingNotFoundError,
    InvalidArgument,
    RoomNotFoundError,
)
from apartly.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


# ── Schemas ───────────────────────────────────────────────────────────────────


class RoomQuoteRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    room_id: str
    check_in: datetime
    period_count: int


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    room_id: str
    user_id: str
    check_in: datetime
    period_count: int
    guests: int = 1
    special_requests: str | None = Field(default=None, max_length=2000)


class EditBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    period_count: int
    room_id: str | None = None
    check_in: datetime | None = None
    user_id: str | None = None
    guests: int | None = None
    special_requests: str | None = Field(default=None, max_length=2000)


class ExtendBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    extension_periods: int
    reason: str | None = Field(default=None, max_length=500)


# ── Helpers ───────────────────────────────────────────────────────────────────


def _booking_out(booking: dict) -> dict:
    out = dict(booking)
    out["total_amount"] = str(Decimal(booking["total_amount"]).quantize(CENTS))
    return out


def _to_http(exc: Exception) -> HTTPException:
    """Map a domain error to the HTTP error returned to the dashboard."""
    if isinstance(exc, InvalidArgument):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, RoomNotFoundError):
        return HTTPException(status_code=404, detail="Room not found")
    if isinstance(exc, BookingNotFoundError):
        return HTTPException(status_code=404, detail="Booking not found")
    if isinstance(exc, BookingNotExtendableError):
        return HTTPException(status_code=409, detail=str(exc))
    # BookingConflictError
    return HTTPException(
        status_code=409,
        detail={
            "message": ROOM_UNAVAILABLE_MESSAGE,
            "conflicting_booking_id": exc.conflicting_booking_id,
        },
    )


_DOMAIN_ERRORS = (
    InvalidArgument,
    RoomNotFoundError,
    BookingNotFoundError,
    BookingNotExtendableError,
    BookingConflictError,
)


# ── POST /bookings/quote ──────────────────────────────────────────────────────


@router.post("/quote")
def room_quote(body: RoomQuoteRequest) -> dict:
    """Price a stay in a room using the room's rate and billing period."""
    from apartly.domain.bookings import quote_room
    from apartly.infra.db import txn

    with txn() as cur:
        try:
            room, priced = quote_room(
                cur,
                room_id=body.room_id,
                check_in=body.check_in,
                period_count=body.period_count,
            )
        except _DOMAIN_ERRORS as exc:
            raise _to_http(exc) from exc

    result = quote_to_dict(priced)
    result["room_id"] = room.room_id
    result["room_number"] = room.number
    return result


# ── POST /bookings ────────────────────────────────────────────────────────────


@router.post("", status_code=201)
def create_booking(body: CreateBookingRequest) -> dict:
    """Create a PENDING booking.

    Checkout and total come from the room's pricing; 409 when another
    pending, confirmed or checked-in booking overlaps the stay.
    """
    from apartly.domain.bookings import create_booking as do_create
    from apartly.infra.db import txn

    with txn() as cur:
        try:
            booking = do_create(
                cur,
                room_id=body.room_id,
                user_id=body.user_id,
                check_in=body.check_in,
                period_count=body.period_count,
                guests=body.guests,
                special_requests=body.special_requests,
            )
        except _DOMAIN_ERRORS as exc:
            raise _to_http(exc) from exc

    return _booking_out(booking)


# ── PATCH /bookings/{id} ──────────────────────────────────────────────────────


@router.patch("/{booking_id}")
def edit_booking(
    body: EditBookingRequest,
    booking_id: str = Path(..., description="Booking ID"),
) -> dict:
    """Move or resize a booking, repricing it with the target room's rate."""
    from apartly.domain.bookings import edit_booking as do_edit
    from apartly.infra.db import txn

    with txn() as cur:
        try:
            booking = do_edit(
                cur,
                booking_id,
                period_count=body.period_count,
                room_id=body.room_id,
                check_in=body.check_in,
                user_id=body.user_id,
                guests=body.guests,
                special_requests=body.special_requests,
            )
        except _DOMAIN_ERRORS as exc:
            raise _to_http(exc) from exc

    return _booking_out(booking)


# ── POST /bookings/{id}/extend ────────────────────────────────────────────────


@router.post("/{booking_id}/extend")
def extend_booking(
    body: ExtendBookingRequest,
    booking_id: str = Path(..., description="Booking ID"),
) -> dict:
    """Extend a confirmed or checked-in booking by whole billing periods."""
    from apartly.domain.bookings import extend_booking as do_extend
    from apartly.infra.db import txn

    with txn() as cur:
        try:
            booking, additional = do_extend(
                cur,
                booking_id,
                extension_periods=body.extension_periods,
                reason=body.reason,
            )
        except _DOMAIN_ERRORS as exc:
            raise _to_http(exc) from exc

    return {
        "booking": _booking_out(booking),
        "additional_amount": str(additional.quantize(CENTS)),
    }
