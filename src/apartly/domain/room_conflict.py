"""Room conflict detection against persisted bookings.

SQL rendition of domain.intervals.overlaps:

    existing.check_in < new.check_out AND existing.check_out > new.check_in

Strict inequality lets a new stay begin at the instant another one ends.
Only blocking statuses (PENDING, CONFIRMED, CHECKED_IN) on rows that are not
soft-deleted generate conflicts.

Run inside the same transaction as the write it guards; the room row lock
taken by rooms_repository.get_room_pricing(lock=True) serialises writers.
"""

from __future__ import annotations

from psycopg2.extensions import cursor as PgCursor

from apartly.domain.errors import BookingConflictError
from apartly.domain.intervals import BLOCKING_STATUSES, BookingInterval
from apartly.observability.logging import get_logger

logger = get_logger(__name__)


def assert_no_room_conflict(
    cur: PgCursor,
    *,
    room_id: str,
    interval: BookingInterval,
    exclude_booking_id: str | None = None,
) -> None:
    """Raise BookingConflictError if the room is taken during *interval*.

    Args:
        cur: Database cursor (should be within a transaction).
        room_id: Room identifier.
        interval: Proposed stay, half-open.
        exclude_booking_id: Booking to ignore (the one being edited).

    Raises:
        BookingConflictError: carrying the earliest conflicting booking.
    """
    conditions = [
        "room_id = %s",
        "status = ANY(%s)",
        "deleted_at IS NULL",
        "check_in < %s",   # existing check_in < new check_out
        "check_out > %s",  # existing check_out > new check_in
    ]
    params: list = [
        room_id,
        list(BLOCKING_STATUSES),
        interval.check_out,
        interval.check_in,
    ]

    if exclude_booking_id is not None:
        conditions.append("id != %s")
        params.append(exclude_booking_id)

    where = " AND ".join(conditions)

    cur.execute(
        f"""
        SELECT id, check_in, check_out
        FROM bookings
        WHERE {where}
        ORDER BY check_in
        LIMIT 1
        """,
        params,
    )
    row = cur.fetchone()
    if row is None:
        return

    conflicting_id = str(row[0])
    logger.warning(
        "room conflict rejected booking write",
        extra={
            "extra_fields": {
                "room_id": room_id,
                "requested_check_in": interval.check_in.isoformat(),
                "requested_check_out": interval.check_out.isoformat(),
                "conflicting_booking_id": conflicting_id,
            },
        },
    )
    raise BookingConflictError(
        room_id=room_id,
        conflicting_booking_id=conflicting_id,
        existing_check_in=row[1],
        existing_check_out=row[2],
    )
