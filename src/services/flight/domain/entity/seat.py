from services.flight.domain.enum import SeatClass
from services.flight.domain.value_object import FlightId, SeatNumber
from services.shared.domain import Entity


class Seat(Entity[SeatNumber]):
    """A seat on a flight, identified by its seat number within the flight"""

    def __init__(
        self,
        flight_id: FlightId,
        seat_number: SeatNumber,
        seat_class: SeatClass = SeatClass.ECONOMY,
        is_booked: bool = False,
        booking_id: str | None = None,
    ) -> None:
        super().__init__(seat_number)
        self._flight_id = flight_id
        self._seat_class = seat_class
        self._is_booked = is_booked
        self._booking_id = booking_id

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_number(self) -> SeatNumber:
        return self._id

    @property
    def seat_class(self) -> SeatClass:
        return self._seat_class

    @property
    def is_booked(self) -> bool:
        return self._is_booked

    @property
    def booking_id(self) -> str | None:
        return self._booking_id

    def change_class(self, seat_class: SeatClass) -> None:
        self._seat_class = seat_class

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Seat):
            return False
        return self._flight_id == other._flight_id and self._id == other._id

    def __hash__(self) -> int:
        return hash((self._flight_id, self._id))
