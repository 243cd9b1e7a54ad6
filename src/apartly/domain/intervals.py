"""Booking intervals and the half-open overlap test.

A stay occupies [check_in, check_out): the departure instant is free for the
next guest, so back-to-back bookings never conflict.

Overlap formula:  (a.check_in < b.check_out) AND (b.check_in < a.check_out)

The same predicate is expressed in SQL by domain.room_conflict; keep the two
in sync.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from apartly.domain.errors import InvalidArgument

BLOCKING_STATUSES = ("PENDING", "CONFIRMED", "CHECKED_IN")


@dataclass(frozen=True)
class BookingInterval:
    check_in: datetime
    check_out: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.check_in, datetime):
            raise InvalidArgument("check_in", "must be a datetime")
        if not isinstance(self.check_out, datetime):
            raise InvalidArgument("check_out", "must be a datetime")
        if self.check_out <= self.check_in:
            raise InvalidArgument("check_out", "must be after check_in")


def overlaps(a: BookingInterval, b: BookingInterval) -> bool:
    """Return True if two stays share any instant."""
    return a.check_in < b.check_out and b.check_in < a.check_out

