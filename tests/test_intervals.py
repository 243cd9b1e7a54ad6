"""Tests for booking intervals and the overlap test."""

from datetime import datetime

import pytest

from apartly.domain.errors import InvalidArgument
from apartly.domain.intervals import BLOCKING_STATUSES, BookingInterval, overlaps


def _iv(start: tuple, end: tuple) -> BookingInterval:
    return BookingInterval(check_in=datetime(*start), check_out=datetime(*end))


MAR_1_TO_5 = _iv((2024, 3, 1), (2024, 3, 5))


class TestBookingInterval:
    def test_checkout_must_follow_check_in(self):
        with pytest.raises(InvalidArgument):
            _iv((2024, 3, 5), (2024, 3, 1))

    def test_zero_length_rejected(self):
        with pytest.raises(InvalidArgument):
            _iv((2024, 3, 5), (2024, 3, 5))

    def test_requires_datetimes(self):
        with pytest.raises(InvalidArgument):
            BookingInterval(check_in=None, check_out=datetime(2024, 3, 5))

    def test_is_immutable(self):
        with pytest.raises(AttributeError):
            MAR_1_TO_5.check_in = datetime(2024, 1, 1)


class TestOverlaps:
    def test_partial_overlap(self):
        assert overlaps(MAR_1_TO_5, _iv((2024, 3, 4), (2024, 3, 8))) is True

    def test_back_to_back_do_not_overlap(self):
        assert overlaps(MAR_1_TO_5, _iv((2024, 3, 5), (2024, 3, 8))) is False

    def test_disjoint(self):
        assert overlaps(MAR_1_TO_5, _iv((2024, 3, 10), (2024, 3, 12))) is False

    def test_containment(self):
        assert overlaps(MAR_1_TO_5, _iv((2024, 3, 2), (2024, 3, 3))) is True
        assert overlaps(_iv((2024, 2, 1), (2024, 4, 1)), MAR_1_TO_5) is True

    def test_identical(self):
        assert overlaps(MAR_1_TO_5, _iv((2024, 3, 1), (2024, 3, 5))) is True

    def test_one_second_of_overlap(self):
        other = _iv((2024, 3, 4, 23, 59, 59), (2024, 3, 6))
        later = _iv((2024, 3, 5, 0, 0, 0), (2024, 3, 6))
        assert overlaps(MAR_1_TO_5, other) is True
        assert overlaps(MAR_1_TO_5, later) is False

    @pytest.mark.parametrize(
        "other",
        [
            _iv((2024, 3, 4), (2024, 3, 8)),
            _iv((2024, 3, 5), (2024, 3, 8)),
            _iv((2024, 2, 20), (2024, 3, 1)),
            _iv((2024, 2, 20), (2024, 3, 2)),
        ],
    )
    def test_commutative(self, other):
        assert overlaps(MAR_1_TO_5, other) == overlaps(other, MAR_1_TO_5)


def test_blocking_statuses():
    assert BLOCKING_STATUSES == ("PENDING", "CONFIRMED", "CHECKED_IN")
