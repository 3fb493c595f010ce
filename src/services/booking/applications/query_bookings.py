from services.booking.domain.entity import Booking
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain.exception import (
    AuthorizationException,
    ResourceNotFoundException,
)
from services.shared.utils.principal import Principal


class BookingQueryService:
    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def get(self, booking_id: BookingId, requester: Principal) -> Booking:
        """Owner or admin only"""
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        if not requester.can_access(booking.user_id):
            raise AuthorizationException("You cannot access this booking")
        return booking

    def list_mine(self, requester: Principal) -> list[Booking]:
        return self._repository.list_by_user(requester.user_id)

    def list_all(self) -> list[Booking]:
        return self._repository.list_all()
