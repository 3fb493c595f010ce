from __future__ import annotations

from pydantic import BaseModel

from services.booking.domain.entity import Booking, Passenger


class PassengerData(BaseModel):
    """Passenger response model"""

    passenger_id: str
    booking_id: str
    first_name: str
    last_name: str
    date_of_birth: str
    nationality: str
    passport_number: str | None
    seat_number: str | None


class BookingData(BaseModel):
    """Booking response model"""

    booking_id: str
    user_id: str
    flight_id: str
    seat_numbers: list[str]
    total_price: str
    currency: str
    status: str
    hold_expires_at: str | None
    created_at: str
    updated_at: str
    cancellation_reason: str | None
    passengers: list[PassengerData] | None = None


def passenger_data(passenger: Passenger) -> PassengerData:
    return PassengerData(
        passenger_id=str(passenger.id),
        booking_id=str(passenger.booking_id),
        first_name=passenger.first_name,
        last_name=passenger.last_name,
        date_of_birth=passenger.date_of_birth.isoformat(),
        nationality=passenger.nationality,
        passport_number=passenger.passport_number,
        seat_number=str(passenger.seat_number) if passenger.seat_number else None,
    )


def to_response(booking: Booking, passengers: list[Passenger] | None = None) -> dict:
    """Convert a Booking entity into a response dict"""
    data = BookingData(
        booking_id=str(booking.id),
        user_id=booking.user_id,
        flight_id=str(booking.flight_id),
        seat_numbers=[str(seat) for seat in booking.seat_numbers],
        total_price=str(booking.total_price.amount),
        currency=str(booking.total_price.currency),
        status=booking.status.value,
        hold_expires_at=(
            str(booking.hold_expires_at) if booking.hold_expires_at else None
        ),
        created_at=str(booking.created_at),
        updated_at=str(booking.updated_at),
        cancellation_reason=booking.cancellation_reason,
        passengers=(
            [passenger_data(p) for p in passengers] if passengers is not None else None
        ),
    )
    if passengers is None:
        return data.model_dump(exclude={"passengers"})
    return data.model_dump()


def to_passenger_response(passenger: Passenger) -> dict:
    return passenger_data(passenger).model_dump()
