from dataclasses import dataclass, field

from services.flight.domain.enum import FlightStatus
from services.flight.domain.value_object import FlightId, FlightNumber, SeatNumber
from services.shared.domain import AggregateRoot, IsoDateTime, Money
from services.shared.domain.exception import BusinessRuleViolationException


@dataclass(frozen=True)
class ResizePlan:
    """Seats to add or remove when the seat capacity changes"""

    added: list[SeatNumber] = field(default_factory=list)
    removed: list[SeatNumber] = field(default_factory=list)


class Flight(AggregateRoot[FlightId]):
    """Flight

    ``available_seats`` mirrors the number of unbooked seat items and is only
    ever changed in the same transaction as the seats themselves.
    """

    def __init__(
        self,
        id: FlightId,
        flight_number: FlightNumber,
        airline: str,
        origin: str,
        destination: str,
        departure_time: IsoDateTime,
        arrival_time: IsoDateTime,
        price: Money,
        seat_capacity: int,
        available_seats: int | None = None,
        status: FlightStatus = FlightStatus.SCHEDULED,
        created_at: IsoDateTime | None = None,
    ) -> None:
        super().__init__(id)

        self._flight_number = flight_number
        self._airline = airline.strip()
        self._origin = origin.strip()
        self._destination = destination.strip()
        self._departure_time = departure_time
        self._arrival_time = arrival_time
        self._price = price
        self._seat_capacity = seat_capacity
        self._available_seats = (
            seat_capacity if available_seats is None else available_seats
        )
        self._status = status
        self._created_at = created_at or IsoDateTime.now()

        self._validate()

    def _validate(self) -> None:
        if not self._airline:
            raise BusinessRuleViolationException("Airline is required")
        if not self._origin or not self._destination:
            raise BusinessRuleViolationException("Origin and destination are required")
        if self._origin.upper() == self._destination.upper():
            raise BusinessRuleViolationException(
                "Origin and destination must be different"
            )
        if not self._departure_time.is_before(self._arrival_time):
            raise BusinessRuleViolationException(
                "Departure time must be before arrival time"
            )
        if self._seat_capacity < 1:
            raise BusinessRuleViolationException("Seat capacity must be at least 1")
        if not 0 <= self._available_seats <= self._seat_capacity:
            raise BusinessRuleViolationException(
                "Available seats must be between 0 and the seat capacity"
            )

    @property
    def flight_number(self) -> FlightNumber:
        return self._flight_number

    @property
    def airline(self) -> str:
        return self._airline

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def route_key(self) -> str:
        """Case-insensitive route identifier"""
        return f"{self._origin.upper()}#{self._destination.upper()}"

    @property
    def departure_time(self) -> IsoDateTime:
        return self._departure_time

    @property
    def arrival_time(self) -> IsoDateTime:
        return self._arrival_time

    @property
    def duration_minutes(self) -> int:
        return self._departure_time.minutes_until(self._arrival_time)

    @property
    def price(self) -> Money:
        return self._price

    @property
    def seat_capacity(self) -> int:
        return self._seat_capacity

    @property
    def available_seats(self) -> int:
        return self._available_seats

    @property
    def booked_seats(self) -> int:
        return self._seat_capacity - self._available_seats

    @property
    def status(self) -> FlightStatus:
        return self._status

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    def is_bookable(self) -> bool:
        return self._status.is_bookable

    def has_room_for(self, passengers: int) -> bool:
        return self._available_seats >= passengers

    def update_details(
        self,
        flight_number: FlightNumber | None = None,
        airline: str | None = None,
        origin: str | None = None,
        destination: str | None = None,
        departure_time: IsoDateTime | None = None,
        arrival_time: IsoDateTime | None = None,
        price: Money | None = None,
    ) -> None:
        """Change descriptive attributes; the schedule is re-validated"""
        if flight_number is not None:
            self._flight_number = flight_number
        if airline is not None:
            self._airline = airline.strip()
        if origin is not None:
            self._origin = origin.strip()
        if destination is not None:
            self._destination = destination.strip()
        if departure_time is not None:
            self._departure_time = departure_time
        if arrival_time is not None:
            self._arrival_time = arrival_time
        if price is not None:
            self._price = price
        self._validate()

    def change_status(self, status: FlightStatus) -> None:
        self._status = status

    def plan_resize(self, new_capacity: int) -> ResizePlan:
        """Work out which seats to add or remove for a new capacity

        Removal always takes the highest-numbered seats; the repository
        refuses to drop a seat that is booked.
        """
        if new_capacity < 1:
            raise BusinessRuleViolationException("Seat capacity must be at least 1")
        if new_capacity < self.booked_seats:
            raise BusinessRuleViolationException(
                f"Cannot reduce capacity to {new_capacity}: "
                f"{self.booked_seats} seats are already booked"
            )
        if new_capacity > self._seat_capacity:
            added = [
                SeatNumber.from_index(i)
                for i in range(self._seat_capacity, new_capacity)
            ]
            return ResizePlan(added=added)
        removed = [
            SeatNumber.from_index(i) for i in range(new_capacity, self._seat_capacity)
        ]
        return ResizePlan(removed=removed)

    def apply_resize(self, plan: ResizePlan) -> None:
        """Reflect a persisted resize in the aggregate"""
        delta = len(plan.added) - len(plan.removed)
        self._seat_capacity += delta
        self._available_seats += delta
        self._validate()

    def reset_available_seats(self, available_seats: int) -> None:
        self._available_seats = available_seats
        self._validate()
