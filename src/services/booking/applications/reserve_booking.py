from services.booking.domain.entity import MAX_SEATS_PER_BOOKING, Booking, Passenger
from services.booking.domain.factory import BookingFactory, PassengerDetails
from services.booking.domain.repository import BookingRepository
from services.flight.domain.entity import Flight
from services.flight.domain.repository import FlightRepository
from services.flight.domain.value_object import FlightId, SeatNumber
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)


class ReserveBookingService:
    """Create a PENDING booking that holds seats until it is paid"""

    def __init__(
        self,
        repository: BookingRepository,
        flight_repository: FlightRepository,
        factory: BookingFactory,
        hold_minutes: int,
    ) -> None:
        self._repository = repository
        self._flight_repository = flight_repository
        self._factory = factory
        self._hold_minutes = hold_minutes

    def reserve(
        self,
        user_id: str,
        flight_id: FlightId,
        passengers: list[PassengerDetails],
        seat_numbers: list[SeatNumber] | None = None,
    ) -> tuple[Booking, list[Passenger]]:
        count = len(passengers)
        if not 1 <= count <= MAX_SEATS_PER_BOOKING:
            raise ValueError(
                f"A booking needs between 1 and {MAX_SEATS_PER_BOOKING} passengers"
            )
        if seat_numbers and len(seat_numbers) != count:
            raise ValueError("Number of seats must match the number of passengers")

        flight = self._flight_repository.find_by_id(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        if not flight.is_bookable():
            raise BusinessRuleViolationException(
                f"Flight {flight.flight_number} is {flight.status.value} "
                "and cannot be booked"
            )
        if not flight.has_room_for(count):
            raise BusinessRuleViolationException("Not enough seats available")

        seats = seat_numbers or self._lowest_free_seats(flight, count)
        booking, booked_passengers = self._factory.create(
            user_id=user_id,
            flight=flight,
            seat_numbers=seats,
            passengers=passengers,
            hold_minutes=self._hold_minutes,
        )
        self._repository.save(booking, booked_passengers)
        return booking, booked_passengers

    def _lowest_free_seats(self, flight: Flight, count: int) -> list[SeatNumber]:
        free = sorted(
            seat.seat_number
            for seat in self._flight_repository.list_seats(flight.id)
            if not seat.is_booked
        )
        if len(free) < count:
            raise BusinessRuleViolationException("Not enough seats available")
        return free[:count]
