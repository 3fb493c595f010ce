from datetime import date, timedelta
from typing import NotRequired, TypedDict

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId, PassengerId
from services.flight.domain.entity import Flight
from services.flight.domain.value_object import SeatNumber
from services.shared.domain import IsoDateTime
from services.shared.domain.exception import BusinessRuleViolationException


class PassengerDetails(TypedDict):
    """Input data for a passenger"""

    first_name: str
    last_name: str
    date_of_birth: date
    nationality: str
    passport_number: NotRequired[str | None]


class BookingFactory:
    """Factory for a pending booking and its passengers

    - Prices the booking at the flight fare times the seat count
    - Assigns seats to passengers in order
    """

    def create(
        self,
        user_id: str,
        flight: Flight,
        seat_numbers: list[SeatNumber],
        passengers: list[PassengerDetails],
        hold_minutes: int,
    ) -> tuple[Booking, list[Passenger]]:
        if len(seat_numbers) != len(passengers):
            raise BusinessRuleViolationException(
                "Number of seats must match the number of passengers"
            )
        now = IsoDateTime.now()
        booking = Booking(
            id=BookingId.generate(),
            user_id=user_id,
            flight_id=flight.id,
            seat_numbers=seat_numbers,
            total_price=flight.price.multiply(len(seat_numbers)),
            status=BookingStatus.PENDING,
            hold_expires_at=now.plus(timedelta(minutes=hold_minutes)),
            created_at=now,
        )
        return booking, [
            self.create_passenger(booking.id, details, seat)
            for details, seat in zip(passengers, seat_numbers)
        ]

    def create_passenger(
        self,
        booking_id: BookingId,
        details: PassengerDetails,
        seat_number: SeatNumber | None = None,
    ) -> Passenger:
        return Passenger(
            id=PassengerId.generate(),
            booking_id=booking_id,
            first_name=details["first_name"],
            last_name=details["last_name"],
            date_of_birth=details["date_of_birth"],
            nationality=details["nationality"],
            passport_number=details.get("passport_number"),
            seat_number=seat_number,
        )
