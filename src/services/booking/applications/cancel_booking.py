from services.booking.domain.entity import Booking
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain.exception import (
    AuthorizationException,
    ResourceNotFoundException,
)
from services.shared.utils.principal import Principal


class CancelBookingService:
    """Cancel a booking and give its seats back to the flight"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def cancel(
        self, booking_id: BookingId, requester: Principal, reason: str | None = None
    ) -> Booking:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        if not requester.can_access(booking.user_id):
            raise AuthorizationException("You cannot cancel this booking")

        expected_status = booking.status
        if booking.cancel(reason):
            self._repository.release(booking, expected_status=expected_status)
        return booking
