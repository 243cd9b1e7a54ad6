"""Bookings repository - persistence for booking records.

Uses raw SQL with psycopg2 (no ORM). Only check_in, check_out and
total_amount are stored from a pricing quote; the period count is not.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from psycopg2.extensions import cursor as PgCursor

_BOOKING_COLUMNS = """
    id, room_id, user_id, check_in, check_out, guests,
    total_amount, status, special_requests
"""


def _booking_to_dict(row: tuple) -> dict:
    return {
        "id": str(row[0]),
        "room_id": str(row[1]),
        "user_id": str(row[2]),
        "check_in": row[3],
        "check_out": row[4],
        "guests": row[5],
        "total_amount": Decimal(str(row[6])),
        "status": row[7],
        "special_requests": row[8],
    }


def get_booking(
    cur: PgCursor,
    booking_id: str,
    *,
    lock: bool = False,
) -> dict | None:
    """Fetch a booking that is not soft-deleted, optionally locking it."""
    suffix = " FOR UPDATE" if lock else ""
    cur.execute(
        f"""
        SELECT {_BOOKING_COLUMNS}
        FROM bookings
        WHERE id = %s AND deleted_at IS NULL
        {suffix}
        """,
        (booking_id,),
    )
    row = cur.fetchone()
    return _booking_to_dict(row) if row is not None else None


def insert_booking(
    cur: PgCursor,
    *,
    room_id: str,
    user_id: str,
    check_in: datetime,
    check_out: datetime,
    guests: int,
    total_amount: Decimal,
    special_requests: str | None,
) -> dict:
    """Insert a new booking in PENDING status.

    Args:
        cur: Database cursor (within transaction).
        room_id: Room being booked.
        user_id: Guest the booking belongs to.
        check_in: Arrival instant.
        check_out: Departure instant computed from the period count.
        guests: Number of guests.
        total_amount: rate * period count.
        special_requests: Free text from the booking form.

    Returns:
        The inserted booking as a dict.
    """
    cur.execute(
        f"""
        INSERT INTO bookings (
            id, room_id, user_id, check_in, check_out, guests,
            total_amount, status, special_requests
        )
        VALUES (gen_random_uuid()::text, %s, %s, %s, %s, %s, %s, 'PENDING', %s)
        RETURNING {_BOOKING_COLUMNS}
        """,
        (
            room_id,
            user_id,
            check_in,
            check_out,
            guests,
            total_amount,
            special_requests,
        ),
    )
    return _booking_to_dict(cur.fetchone())


def update_booking_stay(
    cur: PgCursor,
    booking_id: str,
    *,
    room_id: str,
    user_id: str,
    check_in: datetime,
    check_out: datetime,
    guests: int,
    total_amount: Decimal,
    special_requests: str | None,
) -> dict:
    """Rewrite a booking's editable fields with a repriced total."""
    cur.execute(
        f"""
        UPDATE bookings
        SET room_id = %s, user_id = %s, check_in = %s, check_out = %s,
            guests = %s, total_amount = %s, special_requests = %s,
            updated_at = now()
        WHERE id = %s
        RETURNING {_BOOKING_COLUMNS}
        """,
        (
            room_id,
            user_id,
            check_in,
            check_out,
            guests,
            total_amount,
            special_requests,
            booking_id,
        ),
    )
    return _booking_to_dict(cur.fetchone())


def apply_extension(
    cur: PgCursor,
    booking_id: str,
    *,
    check_out: datetime,
    total_amount: Decimal,
    special_requests: str,
) -> dict:
    """Persist an extended checkout, the new total and the extension note."""
    cur.execute(
        f"""
        UPDATE bookings
        SET check_out = %s, total_amount = %s,
            special_requests = %s, updated_at = now()
        WHERE id = %s
        RETURNING {_BOOKING_COLUMNS}
        """,
        (check_out, total_amount, special_requests, booking_id),
    )
    return _booking_to_dict(cur.fetchone())
