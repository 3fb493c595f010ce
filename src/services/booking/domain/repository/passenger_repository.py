from abc import abstractmethod

from services.booking.domain.entity import Passenger
from services.booking.domain.value_object import BookingId, PassengerId
from services.shared.domain import Repository


class PassengerRepository(Repository[Passenger, PassengerId]):
    """Passenger repository"""

    @abstractmethod
    def save(self, passenger: Passenger) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, passenger_id: PassengerId) -> Passenger | None:
        raise NotImplementedError

    @abstractmethod
    def list_by_booking(self, booking_id: BookingId) -> list[Passenger]:
        raise NotImplementedError

    @abstractmethod
    def update(self, passenger: Passenger) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, passenger_id: PassengerId) -> None:
        raise NotImplementedError
