from decimal import Decimal
from typing import TypedDict

from services.flight.domain.entity import Flight, Seat
from services.flight.domain.enum import FlightStatus, SeatClass
from services.flight.domain.value_object import FlightId, FlightNumber, SeatNumber
from services.shared.domain import Currency, IsoDateTime, Money


class FlightDetails(TypedDict):
    """Input data for a new flight"""

    flight_number: str
    airline: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    price_amount: Decimal
    price_currency: str
    seat_capacity: int


class FlightFactory:
    """Factory for flights and their seat map

    - Converts primitives into value objects
    - Generates ``seat_capacity`` economy seats (1A, 1B, ... 1F, 2A, ...)
    """

    def create(self, details: FlightDetails) -> tuple[Flight, list[Seat]]:
        """Build a new SCHEDULED flight with every seat free"""
        flight = Flight(
            id=FlightId.generate(),
            flight_number=FlightNumber(details["flight_number"]),
            airline=details["airline"],
            origin=details["origin"],
            destination=details["destination"],
            departure_time=IsoDateTime.from_string(details["departure_time"]),
            arrival_time=IsoDateTime.from_string(details["arrival_time"]),
            price=Money(
                amount=details["price_amount"],
                currency=Currency(details["price_currency"]),
            ),
            seat_capacity=details["seat_capacity"],
            status=FlightStatus.SCHEDULED,
        )
        return flight, self.create_seats(flight.id, range(flight.seat_capacity))

    def create_seats(self, flight_id: FlightId, indexes: range) -> list[Seat]:
        return [
            Seat(
                flight_id=flight_id,
                seat_number=SeatNumber.from_index(i),
                seat_class=SeatClass.ECONOMY,
            )
            for i in indexes
        ]
