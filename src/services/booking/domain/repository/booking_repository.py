from abc import abstractmethod

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.shared.domain import IsoDateTime, Repository


class BookingRepository(Repository[Booking, BookingId]):
    """Booking repository

    Writes that change a booking's seat holds also move the flight's
    seat items and available-seat counter in the same transaction.
    """

    @abstractmethod
    def save(self, booking: Booking, passengers: list[Passenger] | None = None) -> None:
        """Persist a new PENDING booking and hold its seats"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Booking]:
        """The user's bookings, newest first"""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Booking]:
        """Every booking, newest first"""
        raise NotImplementedError

    @abstractmethod
    def confirm(self, booking: Booking) -> None:
        """PENDING -> CONFIRMED; OptimisticLockException if no longer pending"""
        raise NotImplementedError

    @abstractmethod
    def release(self, booking: Booking, expected_status: BookingStatus) -> None:
        """Persist a CANCELLED/FAILED booking and free its seats

        OptimisticLockException if the stored status is not ``expected_status``.
        """
        raise NotImplementedError

    @abstractmethod
    def find_expired_holds(self, now: IsoDateTime) -> list[Booking]:
        """PENDING bookings whose hold expired at or before ``now``"""
        raise NotImplementedError
