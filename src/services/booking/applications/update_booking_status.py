from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)


class BookingStatusService:
    """Status transitions driven by payments and admins"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def confirm(self, booking_id: BookingId) -> Booking:
        """PENDING -> CONFIRMED; confirming twice is a no-op"""
        booking = self._get(booking_id)
        if booking.status == BookingStatus.CONFIRMED:
            return booking
        booking.confirm()
        self._repository.confirm(booking)
        return booking

    def update_status(self, booking_id: BookingId, status: BookingStatus) -> Booking:
        booking = self._get(booking_id)
        if status == BookingStatus.CONFIRMED:
            return self.confirm(booking_id)

        expected_status = booking.status
        if status == BookingStatus.CANCELLED:
            if booking.cancel("Cancelled by admin"):
                self._repository.release(booking, expected_status=expected_status)
            return booking
        if status == BookingStatus.FAILED:
            booking.fail()
            self._repository.release(booking, expected_status=expected_status)
            return booking
        raise BusinessRuleViolationException(
            f"Cannot move a {booking.status.value} booking back to {status.value}"
        )

    def _get(self, booking_id: BookingId) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking
