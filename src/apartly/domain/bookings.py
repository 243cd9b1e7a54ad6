"""Booking write flows: create, edit and extend.

Each flow runs on a cursor supplied by the caller, inside one transaction:
lock room -> price stay -> reject conflicts -> write. Taking the room row
lock before the conflict query means two requests for the same room cannot
both pass the check.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from psycopg2.extensions import cursor as PgCursor

from apartly.domain.errors import (
    BookingNotExtendableError,
    BookingNotFoundError,
    InvalidArgument,
    RoomNotFoundError,
)
from apartly.domain.intervals import BookingInterval
from apartly.domain.pricing import PricingQuote, compute_checkout, compute_total, quote
from apartly.domain.room_conflict import assert_no_room_conflict
from apartly.infra.repositories.bookings_repository import (
    apply_extension,
    get_booking,
    insert_booking,
    update_booking_stay,
)
from apartly.infra.repositories.rooms_repository import RoomPricing, get_room_pricing
from apartly.infra.time import utc_now
from apartly.observability.logging import get_logger

logger = get_logger(__name__)

EXTENDABLE_STATUSES = ("CONFIRMED", "CHECKED_IN")


def _load_room(cur: PgCursor, room_id: str, *, lock: bool) -> RoomPricing:
    room = get_room_pricing(cur, room_id, lock=lock)
    if room is None:
        raise RoomNotFoundError(f"Room {room_id} not found")
    return room


def _require_guests(guests: int) -> None:
    if isinstance(guests, bool) or not isinstance(guests, int) or guests < 1:
        raise InvalidArgument("guests", "must be at least 1")


def quote_room(
    cur: PgCursor,
    *,
    room_id: str,
    check_in: datetime,
    period_count: int,
) -> tuple[RoomPricing, PricingQuote]:
    """Price a stay in a room using its stored rate and billing period."""
    room = _load_room(cur, room_id, lock=False)
    return room, quote(check_in, period_count, room.rate_per_period, room.period)


def create_booking(
    cur: PgCursor,
    *,
    room_id: str,
    user_id: str,
    check_in: datetime,
    period_count: int,
    guests: int,
    special_requests: str | None = None,
) -> dict:
    """Create a PENDING booking for *period_count* periods of the room's rate.

    Raises:
        RoomNotFoundError: Unknown or deleted room.
        InvalidArgument: Bad period count or guest count.
        BookingConflictError: Room already taken for part of the stay.
    """
    _require_guests(guests)

    room = _load_room(cur, room_id, lock=True)
    priced = quote(check_in, period_count, room.rate_per_period, room.period)

    assert_no_room_conflict(cur, room_id=room.room_id, interval=priced.interval)

    booking = insert_booking(
        cur,
        room_id=room.room_id,
        user_id=user_id,
        check_in=priced.interval.check_in,
        check_out=priced.interval.check_out,
        guests=guests,
        total_amount=priced.total_amount,
        special_requests=special_requests or None,
    )
    logger.info(
        "booking created",
        extra={
            "extra_fields": {
                "booking_id": booking["id"],
                "room_id": room.room_id,
                "check_in": priced.interval.check_in.isoformat(),
                "check_out": priced.interval.check_out.isoformat(),
                "period": priced.period.value,
                "period_count": period_count,
            },
        },
    )
    return booking


def edit_booking(
    cur: PgCursor,
    booking_id: str,
    *,
    period_count: int,
    room_id: str | None = None,
    check_in: datetime | None = None,
    user_id: str | None = None,
    guests: int | None = None,
    special_requests: str | None = None,
) -> dict:
    """Reprice a booking for a new room, check-in and/or period count.

    The period count is always required: bookings store only their dates,
    and a month-priced stay cannot be recovered from its length in days.
    The booking itself is excluded from the conflict check.

    Omitted (None) fields keep their stored value. An empty
    special_requests string clears the stored text.
    """
    if guests is not None:
        _require_guests(guests)

    booking = get_booking(cur, booking_id, lock=True)
    if booking is None:
        raise BookingNotFoundError(f"Booking {booking_id} not found")

    room = _load_room(cur, room_id or booking["room_id"], lock=True)
    priced = quote(
        check_in or booking["check_in"],
        period_count,
        room.rate_per_period,
        room.period,
    )

    assert_no_room_conflict(
        cur,
        room_id=room.room_id,
        interval=priced.interval,
        exclude_booking_id=booking_id,
    )

    updated = update_booking_stay(
        cur,
        booking_id,
        room_id=room.room_id,
        check_in=priced.interval.check_in,
        check_out=priced.interval.check_out,
        total_amount=priced.total_amount,
        user_id=user_id or booking["user_id"],
        guests=guests if guests is not None else booking["guests"],
        special_requests=(
            booking["special_requests"] if special_requests is None else special_requests or None
        ),
    )
    logger.info(
        "booking edited",
        extra={
            "extra_fields": {
                "booking_id": booking_id,
                "room_id": room.room_id,
                "previous_room_id": booking["room_id"],
                "check_in": priced.interval.check_in.isoformat(),
                "check_out": priced.interval.check_out.isoformat(),
            },
        },
    )
    return updated


def extension_note(
    existing: str | None,
    *,
    extension_periods: int,
    period_label: str,
    reason: str | None,
    on: datetime,
) -> str:
    """Append an [EXTENSION] line to the booking's special requests."""
    line = (
        f"[EXTENSION] {on.strftime('%Y-%m-%d')}: Extended by {extension_periods} "
        f"{period_label}(s). Reason: {reason or 'No reason provided'}"
    )
    return f"{existing}\n\n{line}" if existing else line


def extend_booking(
    cur: PgCursor,
    booking_id: str,
    *,
    extension_periods: int,
    reason: str | None = None,
    now: datetime | None = None,
) -> tuple[dict, Decimal]:
    """Push a confirmed or checked-in booking's checkout out by whole periods.

    The new checkout is computed from the current one with the room's billing
    period, so a monthly tenant extended by one month keeps their day of the
    month. Only the added range is checked for conflicts.

    Returns:
        (updated booking, additional amount charged)

    Raises:
        BookingNotFoundError, BookingNotExtendableError, InvalidArgument,
        BookingConflictError
    """
    booking = get_booking(cur, booking_id, lock=True)
    if booking is None:
        raise BookingNotFoundError(f"Booking {booking_id} not found")
    if booking["status"] not in EXTENDABLE_STATUSES:
        raise BookingNotExtendableError(booking_id, booking["status"])

    room = _load_room(cur, booking["room_id"], lock=True)
    current_check_out = booking["check_out"]
    new_check_out = compute_checkout(current_check_out, extension_periods, room.period)
    additional = compute_total(room.rate_per_period, extension_periods)

    assert_no_room_conflict(
        cur,
        room_id=room.room_id,
        interval=BookingInterval(check_in=current_check_out, check_out=new_check_out),
        exclude_booking_id=booking_id,
    )

    updated = apply_extension(
        cur,
        booking_id,
        check_out=new_check_out,
        total_amount=booking["total_amount"] + additional,
        special_requests=extension_note(
            booking["special_requests"],
            extension_periods=extension_periods,
            period_label=room.period.label,
            reason=reason,
            on=now or utc_now(),
        ),
    )
    logger.info(
        "booking extended",
        extra={
            "extra_fields": {
                "booking_id": booking_id,
                "room_id": room.room_id,
                "extension_periods": extension_periods,
                "period": room.period.value,
                "previous_check_out": current_check_out.isoformat(),
                "check_out": new_check_out.isoformat(),
            },
        },
    )
    return updated, additional
