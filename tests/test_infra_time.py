"""Tests for time utilities."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from apartly.infra.time import add_elapsed, add_months, add_years, utc_now


class TestUtcNow:
    def test_returns_utc_datetime(self):
        now = utc_now()
        assert now.tzinfo == timezone.utc

    def test_returns_current_time(self):
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after


class TestAddElapsed:
    def test_naive_is_plain_addition(self):
        start = datetime(2024, 6, 1, 15, 0)
        assert add_elapsed(start, timedelta(hours=48)) == datetime(2024, 6, 3, 15, 0)

    def test_aware_keeps_timezone(self):
        tz = ZoneInfo("Europe/Berlin")
        start = datetime(2024, 6, 1, 15, 0, tzinfo=tz)

        result = add_elapsed(start, timedelta(hours=24))

        assert result.tzinfo is tz
        assert result == datetime(2024, 6, 2, 15, 0, tzinfo=tz)

    def test_across_fall_back_adds_exact_hours(self):
        tz = ZoneInfo("Europe/Berlin")
        # clocks go back at 03:00 on 2024-10-27
        start = datetime(2024, 10, 26, 15, 0, tzinfo=tz)

        result = add_elapsed(start, timedelta(hours=24))

        elapsed = result.astimezone(timezone.utc) - start.astimezone(timezone.utc)
        assert elapsed == timedelta(hours=24)
        assert (result.day, result.hour) == (27, 14)


class TestCalendarArithmetic:
    def test_month_end_clamps_leap_year(self):
        assert add_months(datetime(2024, 1, 31, 9), 1) == datetime(2024, 2, 29, 9)

    def test_month_end_clamps_common_year(self):
        assert add_months(datetime(2023, 1, 31, 9), 1) == datetime(2023, 2, 28, 9)

    def test_rolls_over_year(self):
        assert add_months(datetime(2024, 11, 30), 3) == datetime(2025, 2, 28)

    def test_twelve_months_is_one_year(self):
        assert add_months(datetime(2024, 1, 15), 12) == datetime(2025, 1, 15)

    def test_negative_months(self):
        assert add_months(datetime(2024, 3, 31), -1) == datetime(2024, 2, 29)

    def test_leap_day_plus_year(self):
        assert add_years(datetime(2024, 2, 29), 1) == datetime(2025, 2, 28)

    def test_leap_day_plus_four_years(self):
        assert add_years(datetime(2024, 2, 29), 4) == datetime(2028, 2, 29)
