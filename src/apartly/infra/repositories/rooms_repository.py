"""Rooms repository - read access to a room's pricing configuration.

Uses raw SQL with psycopg2 (no ORM).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from psycopg2.extensions import cursor as PgCursor

from apartly.domain.billing import BillingPeriod, parse_billing_period


@dataclass(frozen=True)
class RoomPricing:
    room_id: str
    number: str
    rate_per_period: Decimal
    period: BillingPeriod


def get_room_pricing(
    cur: PgCursor,
    room_id: str,
    *,
    lock: bool = False,
) -> RoomPricing | None:
    """Load the rate and billing period of a room that is not soft-deleted.

    Args:
        cur: Database cursor (within transaction).
        room_id: Room identifier.
        lock: If True, locks the room row FOR UPDATE. Booking writes take
            this lock so that concurrent conflict checks on the same room
            run one after the other.

    Returns:
        RoomPricing, or None if the room does not exist.
    """
    suffix = " FOR UPDATE" if lock else ""
    cur.execute(
        f"""
        SELECT id, number, price_per_period, pricing_period
        FROM rooms
        WHERE id = %s AND deleted_at IS NULL
        {suffix}
        """,
        (room_id,),
    )
    row = cur.fetchone()
    if row is None:
        return None

    return RoomPricing(
        room_id=str(row[0]),
        number=str(row[1]),
        rate_per_period=Decimal(str(row[2])),
        period=parse_billing_period(row[3]),
    )
