from datetime import date, timedelta
from decimal import Decimal

import pytest

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId, PassengerId
from services.flight.domain.entity import Flight, Seat
from services.flight.domain.enum import FlightStatus
from services.flight.domain.value_object import FlightId, FlightNumber, SeatNumber
from services.payment.domain.entity import Payment
from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.value_object import (
    PaymentId,
    StripeReference,
    XenditReference,
)
from services.shared.domain import IsoDateTime, Money
from services.shared.utils.principal import Principal


@pytest.fixture
def create_flight():
    """Flight factory fixture"""

    def _factory(
        flight_id: str = "FL-TEST000001",
        flight_number: str = "PR102",
        origin: str = "Manila",
        destination: str = "Cebu",
        departure: str = "2026-12-01T08:00:00+00:00",
        arrival: str = "2026-12-01T09:20:00+00:00",
        price: str = "2500",
        seat_capacity: int = 12,
        available_seats: int | None = None,
        status: FlightStatus = FlightStatus.SCHEDULED,
        created_at: str = "2026-10-01T00:00:00+00:00",
        airline: str = "Philippine Airlines",
    ) -> Flight:
        return Flight(
            id=FlightId(value=flight_id),
            flight_number=FlightNumber(flight_number),
            airline=airline,
            origin=origin,
            destination=destination,
            departure_time=IsoDateTime.from_string(departure),
            arrival_time=IsoDateTime.from_string(arrival),
            price=Money.php(price),
            seat_capacity=seat_capacity,
            available_seats=available_seats,
            status=status,
            created_at=IsoDateTime.from_string(created_at),
        )

    return _factory


@pytest.fixture
def create_seat():
    def _factory(
        seat_number: str = "1A",
        flight_id: str = "FL-TEST000001",
        is_booked: bool = False,
        booking_id: str | None = None,
    ) -> Seat:
        return Seat(
            flight_id=FlightId(value=flight_id),
            seat_number=SeatNumber.parse(seat_number),
            is_booked=is_booked,
            booking_id=booking_id,
        )

    return _factory


@pytest.fixture
def create_booking():
    """Booking factory fixture"""

    def _factory(
        booking_id: str = "BK-TEST00000001",
        user_id: str = "USR-OWNER",
        flight_id: str = "FL-TEST000001",
        seats: tuple[str, ...] = ("1A", "1B"),
        total: str = "5000",
        status: BookingStatus = BookingStatus.PENDING,
        hold_expires_at: IsoDateTime | None = None,
    ) -> Booking:
        if status == BookingStatus.PENDING and hold_expires_at is None:
            hold_expires_at = IsoDateTime.now().plus(timedelta(minutes=15))
        return Booking(
            id=BookingId(value=booking_id),
            user_id=user_id,
            flight_id=FlightId(value=flight_id),
            seat_numbers=[SeatNumber.parse(s) for s in seats],
            total_price=Money.php(total),
            status=status,
            hold_expires_at=hold_expires_at if status == BookingStatus.PENDING else None,
        )

    return _factory


@pytest.fixture
def create_passenger():
    def _factory(
        passenger_id: str = "PX-TEST00000001",
        booking_id: str = "BK-TEST00000001",
        first_name: str = "Juan",
        last_name: str = "Dela Cruz",
        seat_number: str | None = "1A",
    ) -> Passenger:
        return Passenger(
            id=PassengerId(value=passenger_id),
            booking_id=BookingId(value=booking_id),
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date(1990, 5, 17),
            nationality="Filipino",
            passport_number="P1234567A",
            seat_number=SeatNumber.parse(seat_number) if seat_number else None,
        )

    return _factory


@pytest.fixture
def passenger_details():
    def _factory(first_name: str = "Juan", last_name: str = "Dela Cruz") -> dict:
        return {
            "first_name": first_name,
            "last_name": last_name,
            "date_of_birth": date(1990, 5, 17),
            "nationality": "Filipino",
            "passport_number": None,
        }

    return _factory


@pytest.fixture
def create_payment():
    """Payment factory fixture"""

    def _factory(
        payment_id: str = "PAY-TEST00000001",
        booking_id: str = "BK-TEST00000001",
        user_id: str | None = "USR-OWNER",
        method: PaymentMethod = PaymentMethod.GCASH,
        amount: Decimal = Decimal("5000"),
        status: PaymentStatus = PaymentStatus.PROCESSING,
        payment_intent_id: str | None = None,
        reference_id: str | None = None,
    ) -> Payment:
        return Payment(
            id=PaymentId(value=payment_id),
            booking_id=booking_id,
            user_id=user_id,
            method=method,
            amount=Money.php(amount),
            status=status,
            stripe=StripeReference(payment_intent_id=payment_intent_id),
            xendit=XenditReference(reference_id=reference_id),
        )

    return _factory


@pytest.fixture
def owner() -> Principal:
    return Principal(user_id="USR-OWNER", email="juan@example.com")


@pytest.fixture
def stranger() -> Principal:
    return Principal(user_id="USR-STRANGER", email="maria@example.com")


@pytest.fixture
def admin() -> Principal:
    return Principal(user_id="USR-ADMIN", email="admin@example.com", is_admin=True)
