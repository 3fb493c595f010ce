from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.flight.domain.value_object import FlightId, SeatNumber
from services.shared.domain import AggregateRoot, IsoDateTime, Money
from services.shared.domain.exception import BusinessRuleViolationException

MAX_SEATS_PER_BOOKING = 9


class Booking(AggregateRoot[BookingId]):
    """Seat booking on a flight

    A PENDING booking holds its seats until ``hold_expires_at``.
    """

    def __init__(
        self,
        id: BookingId,
        user_id: str,
        flight_id: FlightId,
        seat_numbers: list[SeatNumber],
        total_price: Money,
        status: BookingStatus = BookingStatus.PENDING,
        hold_expires_at: IsoDateTime | None = None,
        created_at: IsoDateTime | None = None,
        updated_at: IsoDateTime | None = None,
        cancellation_reason: str | None = None,
    ) -> None:
        super().__init__(id)

        self._user_id = user_id
        self._flight_id = flight_id
        self._seat_numbers = sorted(seat_numbers)
        self._total_price = total_price
        self._status = status
        self._hold_expires_at = hold_expires_at
        self._created_at = created_at or IsoDateTime.now()
        self._updated_at = updated_at or self._created_at
        self._cancellation_reason = cancellation_reason

        self._validate()

    def _validate(self) -> None:
        if not self._seat_numbers:
            raise BusinessRuleViolationException("A booking needs at least one seat")
        if len(self._seat_numbers) > MAX_SEATS_PER_BOOKING:
            raise BusinessRuleViolationException(
                f"A booking can hold at most {MAX_SEATS_PER_BOOKING} seats"
            )
        if len(set(self._seat_numbers)) != len(self._seat_numbers):
            raise BusinessRuleViolationException("Seat numbers must be unique")
        if self._status == BookingStatus.PENDING and self._hold_expires_at is None:
            raise BusinessRuleViolationException(
                "A pending booking needs a hold expiry time"
            )

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def flight_id(self) -> FlightId:
        return self._flight_id

    @property
    def seat_numbers(self) -> list[SeatNumber]:
        return list(self._seat_numbers)

    @property
    def seat_count(self) -> int:
        return len(self._seat_numbers)

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def hold_expires_at(self) -> IsoDateTime | None:
        return self._hold_expires_at

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def updated_at(self) -> IsoDateTime:
        return self._updated_at

    @property
    def cancellation_reason(self) -> str | None:
        return self._cancellation_reason

    def is_owned_by(self, user_id: str) -> bool:
        return self._user_id == user_id

    def is_hold_expired(self, now: IsoDateTime) -> bool:
        return (
            self._status == BookingStatus.PENDING
            and self._hold_expires_at is not None
            and not now.is_before(self._hold_expires_at)
        )

    def confirm(self) -> None:
        """Payment succeeded"""
        if self._status == BookingStatus.CONFIRMED:
            return
        if self._status != BookingStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot confirm a booking that is {self._status.value}"
            )
        self._status = BookingStatus.CONFIRMED
        self._hold_expires_at = None
        self._touch()

    def cancel(self, reason: str | None = None) -> bool:
        """Cancel the booking; returns False when it was already cancelled"""
        if self._status == BookingStatus.CANCELLED:
            return False
        if self._status == BookingStatus.FAILED:
            raise BusinessRuleViolationException("Cannot cancel a failed booking")
        self._status = BookingStatus.CANCELLED
        self._hold_expires_at = None
        self._cancellation_reason = reason
        self._touch()
        return True

    def fail(self) -> None:
        """The hold expired without a successful payment"""
        if self._status != BookingStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Only pending bookings can fail, this one is {self._status.value}"
            )
        self._status = BookingStatus.FAILED
        self._hold_expires_at = None
        self._cancellation_reason = "Payment not completed before the hold expired"
        self._touch()

    def _touch(self) -> None:
        self._updated_at = IsoDateTime.now()
