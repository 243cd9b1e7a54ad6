"""Time utilities for consistent timestamp handling.

Two kinds of arithmetic are offered:

- elapsed: a fixed duration added on the absolute timeline. Aware values are
  shifted in UTC and converted back, so DST never stretches or shrinks the
  result.
- calendar: months/years added on the wall clock, clamping the day-of-month
  when the target month is shorter.
"""

import calendar
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def add_elapsed(instant: datetime, delta: timedelta) -> datetime:
    """Add an exact elapsed duration to *instant*.

    Python's aware arithmetic works on wall-clock fields, which is wrong for
    zones with DST. Naive values have no zone and are shifted directly.
    """
    if instant.tzinfo is None:
        return instant + delta
    shifted = instant.astimezone(timezone.utc) + delta
    return shifted.astimezone(instant.tzinfo)


def add_months(instant: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month's length.

    Example: 2023-01-31 + 1 month -> 2023-02-28.
    """
    index = instant.month - 1 + months
    year = instant.year + index // 12
    month = index % 12 + 1
    day = min(instant.day, calendar.monthrange(year, month)[1])
    return instant.replace(year=year, month=month, day=day)


def add_years(instant: datetime, years: int) -> datetime:
    """Add calendar years; Feb 29 becomes Feb 28 in non-leap years."""
    return add_months(instant, years * 12)
