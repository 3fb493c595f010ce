from datetime import date
from typing import TypedDict

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.factory import BookingFactory, PassengerDetails
from services.booking.domain.repository import BookingRepository, PassengerRepository
from services.booking.domain.value_object import BookingId, PassengerId
from services.shared.domain.exception import (
    AuthorizationException,
    BusinessRuleViolationException,
    ResourceNotFoundException,
)
from services.shared.utils.principal import Principal


class PassengerChanges(TypedDict, total=False):
    first_name: str
    last_name: str
    date_of_birth: date
    nationality: str
    passport_number: str


class PassengerService:
    """Passenger CRUD, limited to the booking owner or an admin"""

    def __init__(
        self,
        repository: PassengerRepository,
        booking_repository: BookingRepository,
        factory: BookingFactory,
    ) -> None:
        self._repository = repository
        self._booking_repository = booking_repository
        self._factory = factory

    def add(
        self, booking_id: BookingId, details: PassengerDetails, requester: Principal
    ) -> Passenger:
        booking = self._booking_for(booking_id, requester)
        if booking.status.is_terminal:
            raise BusinessRuleViolationException(
                f"Cannot add passengers to a {booking.status.value} booking"
            )
        passenger = self._factory.create_passenger(booking.id, details)
        self._repository.save(passenger)
        return passenger

    def list_for_booking(
        self, booking_id: BookingId, requester: Principal
    ) -> list[Passenger]:
        self._booking_for(booking_id, requester)
        return self._repository.list_by_booking(booking_id)

    def get(self, passenger_id: PassengerId, requester: Principal) -> Passenger:
        passenger = self._repository.find_by_id(passenger_id)
        if passenger is None:
            raise ResourceNotFoundException(f"Passenger not found: {passenger_id}")
        self._booking_for(passenger.booking_id, requester)
        return passenger

    def update(
        self,
        passenger_id: PassengerId,
        changes: PassengerChanges,
        requester: Principal,
    ) -> Passenger:
        passenger = self.get(passenger_id, requester)
        passenger.update_details(**changes)
        self._repository.update(passenger)
        return passenger

    def delete(self, passenger_id: PassengerId, requester: Principal) -> None:
        passenger = self.get(passenger_id, requester)
        self._repository.delete(passenger.id)

    def _booking_for(self, booking_id: BookingId, requester: Principal) -> Booking:
        booking = self._booking_repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        if not requester.can_access(booking.user_id):
            raise AuthorizationException("You cannot access this booking")
        return booking
