import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone

from services.flight.domain.entity import Flight, Seat
from services.flight.domain.repository import FlightRepository
from services.flight.domain.value_object import FlightId
from services.shared.domain import IsoDateTime
from services.shared.domain.exception import ResourceNotFoundException

FILTERABLE_FIELDS = (
    "flight_number",
    "airline",
    "origin",
    "destination",
    "status",
    "seat_capacity",
    "available_seats",
    "price_currency",
)


@dataclass(frozen=True)
class FlightPage:
    flights: list[Flight]
    total_pages: int
    current_page: int
    total_items: int


@dataclass(frozen=True)
class FlightSearchResult:
    round_trip: bool
    outbound: list[Flight] = field(default_factory=list)
    return_flights: list[Flight] = field(default_factory=list)

    @property
    def message(self) -> str:
        no_outbound = not self.outbound
        no_return = self.round_trip and not self.return_flights
        if no_outbound and no_return:
            return "No matching outbound or return flights found."
        if no_outbound:
            return "No outbound flights found."
        if no_return:
            return "No return flights found."
        return "Flights found."


def _day_start(day: date) -> IsoDateTime:
    return IsoDateTime(value=datetime.combine(day, time.min, tzinfo=timezone.utc))


def _matches(flight: Flight, term: str) -> bool:
    haystack = (
        flight.airline,
        flight.origin,
        flight.destination,
        str(flight.flight_number),
    )
    return any(term in value.lower() for value in haystack)


def _filterable_values(flight: Flight) -> dict[str, str]:
    return {
        "flight_number": str(flight.flight_number),
        "airline": flight.airline,
        "origin": flight.origin,
        "destination": flight.destination,
        "status": flight.status.value,
        "seat_capacity": str(flight.seat_capacity),
        "available_seats": str(flight.available_seats),
        "price_currency": str(flight.price.currency),
    }


class FlightQueryService:
    """Read-side flight use cases (listing, search, seat maps)"""

    def __init__(self, repository: FlightRepository) -> None:
        self._repository = repository

    def list_paginated(self, page: int = 1, limit: int = 5, search: str = "") -> FlightPage:
        """Newest-created first, optionally narrowed by a free-text term"""
        flights = self._repository.list_all()
        term = search.strip().lower()
        if term:
            flights = [f for f in flights if _matches(f, term)]
        flights.sort(key=lambda f: f.created_at.value, reverse=True)

        total = len(flights)
        offset = (page - 1) * limit
        return FlightPage(
            flights=flights[offset : offset + limit],
            total_pages=math.ceil(total / limit),
            current_page=page,
            total_items=total,
        )

    def get(self, flight_id: FlightId) -> Flight:
        flight = self._repository.find_by_id(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        return flight

    def search(
        self,
        origin: str,
        destination: str,
        departure: date,
        return_date: date | None = None,
        passengers: int = 1,
    ) -> FlightSearchResult:
        """Outbound (and optional return) flights with room for every passenger"""
        outbound = self._flights_on_day(origin, destination, departure, passengers)
        return_flights: list[Flight] = []
        if return_date is not None:
            return_flights = self._flights_on_day(
                destination, origin, return_date, passengers
            )
        return FlightSearchResult(
            round_trip=return_date is not None,
            outbound=outbound,
            return_flights=return_flights,
        )

    def upcoming(self) -> list[Flight]:
        now = IsoDateTime.now()
        flights = [
            f for f in self._repository.list_all() if not f.departure_time.is_before(now)
        ]
        return sorted(flights, key=lambda f: f.departure_time.value)

    def by_date_range(self, start: date, end: date) -> list[Flight]:
        """Flights departing on any day from ``start`` to ``end`` inclusive"""
        if end < start:
            raise ValueError("end must not be before start")
        flights = self._repository.find_departing_between(
            _day_start(start), _day_start(end + timedelta(days=1))
        )
        return sorted(flights, key=lambda f: f.departure_time.value)

    def filter(self, filters: dict) -> list[Flight]:
        unknown = set(filters) - set(FILTERABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unsupported filter fields: {', '.join(sorted(unknown))}")
        wanted = {key: str(value) for key, value in filters.items()}
        return [
            flight
            for flight in self._repository.list_all()
            if all(
                _filterable_values(flight)[key] == value
                for key, value in wanted.items()
            )
        ]

    def list_seats(self, flight_id: FlightId) -> list[Seat]:
        self.get(flight_id)
        seats = self._repository.list_seats(flight_id)
        return sorted(seats, key=lambda s: s.seat_number)

    def list_available_seats(self, flight_id: FlightId) -> list[Seat]:
        return [seat for seat in self.list_seats(flight_id) if not seat.is_booked]

    def _flights_on_day(
        self, origin: str, destination: str, day: date, passengers: int
    ) -> list[Flight]:
        start = _day_start(day)
        flights = self._repository.find_by_route(
            origin, destination, start, start.plus(timedelta(days=1))
        )
        flights = [f for f in flights if f.has_room_for(passengers)]
        return sorted(flights, key=lambda f: f.departure_time.value)
