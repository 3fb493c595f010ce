from datetime import date

from services.booking.domain.value_object import BookingId, PassengerId
from services.flight.domain.value_object import SeatNumber
from services.shared.domain import Entity
from services.shared.domain.exception import BusinessRuleViolationException


class Passenger(Entity[PassengerId]):
    """Traveller on a booking"""

    def __init__(
        self,
        id: PassengerId,
        booking_id: BookingId,
        first_name: str,
        last_name: str,
        date_of_birth: date,
        nationality: str,
        passport_number: str | None = None,
        seat_number: SeatNumber | None = None,
    ) -> None:
        super().__init__(id)
        self._booking_id = booking_id
        self._first_name = first_name.strip()
        self._last_name = last_name.strip()
        self._date_of_birth = date_of_birth
        self._nationality = nationality.strip()
        self._passport_number = passport_number.strip() if passport_number else None
        self._seat_number = seat_number
        self._validate()

    def _validate(self) -> None:
        if not self._first_name or not self._last_name:
            raise BusinessRuleViolationException("Passenger name is required")
        if self._date_of_birth > date.today():
            raise BusinessRuleViolationException("Date of birth cannot be in the future")

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def date_of_birth(self) -> date:
        return self._date_of_birth

    @property
    def nationality(self) -> str:
        return self._nationality

    @property
    def passport_number(self) -> str | None:
        return self._passport_number

    @property
    def seat_number(self) -> SeatNumber | None:
        return self._seat_number

    def update_details(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        date_of_birth: date | None = None,
        nationality: str | None = None,
        passport_number: str | None = None,
    ) -> None:
        """Seat assignment is owned by the booking and never changes here"""
        if first_name is not None:
            self._first_name = first_name.strip()
        if last_name is not None:
            self._last_name = last_name.strip()
        if date_of_birth is not None:
            self._date_of_birth = date_of_birth
        if nationality is not None:
            self._nationality = nationality.strip()
        if passport_number is not None:
            self._passport_number = passport_number.strip() or None
        self._validate()
