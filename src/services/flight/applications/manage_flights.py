from decimal import Decimal
from typing import TypedDict

from services.flight.domain.entity import Flight, Seat
from services.flight.domain.enum import FlightStatus, SeatClass
from services.flight.domain.factory import FlightDetails, FlightFactory
from services.flight.domain.repository import FlightRepository
from services.flight.domain.value_object import FlightId, FlightNumber, SeatNumber
from services.shared.domain import Currency, IsoDateTime, Money
from services.shared.domain.exception import ResourceNotFoundException


class FlightChanges(TypedDict, total=False):
    """Partial update of a flight; absent keys are left unchanged"""

    flight_number: str
    airline: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    price_amount: Decimal
    price_currency: str
    seat_capacity: int


class FlightAdminService:
    """Admin use cases for flights and their seat map"""

    def __init__(self, repository: FlightRepository, factory: FlightFactory) -> None:
        self._repository = repository
        self._factory = factory

    def create(self, details: FlightDetails) -> Flight:
        flight, seats = self._factory.create(details)
        self._repository.save(flight, seats)
        return flight

    def import_many(self, items: list[FlightDetails]) -> list[Flight]:
        """Create each flight with its seats, in order

        Every item is built and validated before the first one is saved.
        """
        built = [self._factory.create(details) for details in items]
        for flight, seats in built:
            self._repository.save(flight, seats)
        return [flight for flight, _ in built]

    def update(self, flight_id: FlightId, changes: FlightChanges) -> Flight:
        flight = self._get(flight_id)

        price = None
        if "price_amount" in changes or "price_currency" in changes:
            price = Money(
                amount=changes.get("price_amount", flight.price.amount),
                currency=Currency(
                    changes.get("price_currency", str(flight.price.currency))
                ),
            )
        flight.update_details(
            flight_number=(
                FlightNumber(changes["flight_number"])
                if "flight_number" in changes
                else None
            ),
            airline=changes.get("airline"),
            origin=changes.get("origin"),
            destination=changes.get("destination"),
            departure_time=(
                IsoDateTime.from_string(changes["departure_time"])
                if "departure_time" in changes
                else None
            ),
            arrival_time=(
                IsoDateTime.from_string(changes["arrival_time"])
                if "arrival_time" in changes
                else None
            ),
            price=price,
        )

        new_capacity = changes.get("seat_capacity")
        plan = None
        if new_capacity is not None and new_capacity != flight.seat_capacity:
            plan = flight.plan_resize(new_capacity)

        # seats first: a refused resize must leave the flight untouched
        if plan is not None:
            self._repository.resize(flight, plan)
            flight.apply_resize(plan)
        self._repository.update(flight)
        return flight

    def change_status(self, flight_id: FlightId, status: FlightStatus) -> Flight:
        flight = self._get(flight_id)
        flight.change_status(status)
        self._repository.update(flight)
        return flight

    def recount(self, flight_id: FlightId) -> Flight:
        """Rebuild ``available_seats`` from the seat items"""
        flight = self._get(flight_id)
        available = self._repository.recount_available_seats(flight_id)
        flight.reset_available_seats(available)
        return flight

    def delete(self, flight_id: FlightId) -> None:
        flight = self._get(flight_id)
        self._repository.delete(flight)

    def update_seat(
        self, flight_id: FlightId, seat_number: SeatNumber, seat_class: SeatClass
    ) -> Seat:
        seat = self._repository.find_seat(flight_id, seat_number)
        if seat is None:
            raise ResourceNotFoundException(
                f"Seat {seat_number} not found on flight {flight_id}"
            )
        seat.change_class(seat_class)
        self._repository.update_seat(seat)
        return seat

    def _get(self, flight_id: FlightId) -> Flight:
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        return flight
