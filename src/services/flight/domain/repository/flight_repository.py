from abc import abstractmethod

from services.flight.domain.entity import Flight, ResizePlan, Seat
from services.flight.domain.value_object import FlightId, SeatNumber
from services.shared.domain import IsoDateTime, Repository


class FlightRepository(Repository[Flight, FlightId]):
    """Flight repository (flight items and their seat items)"""

    @abstractmethod
    def save(self, flight: Flight, seats: list[Seat] | None = None) -> None:
        """Persist a new flight with its seats"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Flight]:
        raise NotImplementedError

    @abstractmethod
    def find_departing_between(
        self, start: IsoDateTime, end: IsoDateTime
    ) -> list[Flight]:
        """Flights with start <= departure < end, earliest first"""
        raise NotImplementedError

    @abstractmethod
    def find_by_route(
        self,
        origin: str,
        destination: str,
        start: IsoDateTime,
        end: IsoDateTime,
    ) -> list[Flight]:
        """Flights on a route departing in [start, end), earliest first"""
        raise NotImplementedError

    @abstractmethod
    def update(self, flight: Flight) -> None:
        """Persist descriptive attributes and status (not seat counters)"""
        raise NotImplementedError

    @abstractmethod
    def resize(self, flight: Flight, plan: ResizePlan) -> None:
        """Add/remove seats atomically with the available-seat counter"""
        raise NotImplementedError

    @abstractmethod
    def recount_available_seats(self, flight_id: FlightId) -> int:
        """Rebuild the counter from the seat items and return it"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, flight: Flight) -> None:
        """Delete a flight and its seats; refused while any seat is held"""
        raise NotImplementedError

    @abstractmethod
    def list_seats(self, flight_id: FlightId) -> list[Seat]:
        raise NotImplementedError

    @abstractmethod
    def find_seat(self, flight_id: FlightId, seat_number: SeatNumber) -> Seat | None:
        raise NotImplementedError

    @abstractmethod
    def update_seat(self, seat: Seat) -> None:
        raise NotImplementedError
