"""Domain errors shared by the pricing engine and the booking flows."""

from __future__ import annotations

from datetime import datetime

ROOM_UNAVAILABLE_MESSAGE = (
    "The selected room is not available for the chosen dates due to another booking."
)


class InvalidArgument(ValueError):
    """Raised when a calculator input is out of range or missing."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class BookingNotFoundError(Exception):
    """Raised when the booking does not exist or was soft-deleted."""

    pass


class RoomNotFoundError(Exception):
    """Raised when the room does not exist or was soft-deleted."""

    pass


class BookingNotExtendableError(Exception):
    """Raised when extending a booking that is not confirmed or checked in."""

    def __init__(self, booking_id: str, status: str) -> None:
        self.booking_id = booking_id
        self.status = status
        super().__init__(
            f"Only confirmed or checked-in bookings can be extended (status={status})"
        )


class BookingConflictError(Exception):
    """Raised when a room already has a blocking booking in the requested range."""

    def __init__(
        self,
        room_id: str,
        conflicting_booking_id: str,
        existing_check_in: datetime,
        existing_check_out: datetime,
    ) -> None:
        self.room_id = room_id
        self.conflicting_booking_id = conflicting_booking_id
        self.existing_check_in = existing_check_in
        self.existing_check_out = existing_check_out
        super().__init__(
            f"Room {room_id} has a conflicting booking "
            f"({existing_check_in.isoformat()} to {existing_check_out.isoformat()})"
        )
