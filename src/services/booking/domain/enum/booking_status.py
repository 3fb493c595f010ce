from enum import Enum


class BookingStatus(str, Enum):
    """Booking status

    PENDING holds its seats until paid or expired; CANCELLED and FAILED
    are terminal and have released their seats.
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CANCELLED, BookingStatus.FAILED)
