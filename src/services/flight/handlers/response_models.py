from __future__ import annotations

from pydantic import BaseModel, Field

from services.flight.applications.search_flights import FlightPage, FlightSearchResult
from services.flight.domain.entity import Flight, Seat


class FlightData(BaseModel):
    """Flight response model"""

    flight_id: str
    flight_number: str
    airline: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    duration_minutes: int
    price: str
    currency: str
    seat_capacity: int
    available_seats: int
    status: str
    created_at: str


class SeatData(BaseModel):
    """Seat response model"""

    flight_id: str
    seat_number: str
    seat_class: str
    is_booked: bool


class FlightPageData(BaseModel):
    flights: list[FlightData]
    total_pages: int
    current_page: int
    total_items: int


class FlightSearchData(BaseModel):
    round_trip: bool
    outbound: list[FlightData]
    return_flights: list[FlightData] = Field(serialization_alias="return")
    message: str


def flight_data(flight: Flight) -> FlightData:
    return FlightData(
        flight_id=str(flight.id),
        flight_number=str(flight.flight_number),
        airline=flight.airline,
        origin=flight.origin,
        destination=flight.destination,
        departure_time=str(flight.departure_time),
        arrival_time=str(flight.arrival_time),
        duration_minutes=flight.duration_minutes,
        price=str(flight.price.amount),
        currency=str(flight.price.currency),
        seat_capacity=flight.seat_capacity,
        available_seats=flight.available_seats,
        status=flight.status.value,
        created_at=str(flight.created_at),
    )


def to_response(flight: Flight) -> dict:
    """Convert a Flight entity into a response dict"""
    return flight_data(flight).model_dump()


def to_list_response(flights: list[Flight]) -> list[dict]:
    return [to_response(flight) for flight in flights]


def to_seat_response(seat: Seat) -> dict:
    return SeatData(
        flight_id=str(seat.flight_id),
        seat_number=str(seat.seat_number),
        seat_class=seat.seat_class.value,
        is_booked=seat.is_booked,
    ).model_dump()


def to_page_response(page: FlightPage) -> dict:
    return FlightPageData(
        flights=[flight_data(flight) for flight in page.flights],
        total_pages=page.total_pages,
        current_page=page.current_page,
        total_items=page.total_items,
    ).model_dump()


def to_search_response(result: FlightSearchResult) -> dict:
    return FlightSearchData(
        round_trip=result.round_trip,
        outbound=[flight_data(flight) for flight in result.outbound],
        return_flights=[flight_data(flight) for flight in result.return_flights],
        message=result.message,
    ).model_dump(by_alias=True)
