from datetime import date, timedelta

import pytest

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId, PassengerId
from services.flight.domain.value_object import FlightId, SeatNumber
from services.shared.domain import IsoDateTime, Money
from services.shared.domain.exception import BusinessRuleViolationException


def _seats(*values: str) -> list[SeatNumber]:
    return [SeatNumber.parse(v) for v in values]


class TestBookingInvariants:
    def test_seats_are_kept_in_cabin_order(self, create_booking):
        booking = create_booking(seats=("10A", "2C", "2A"))

        assert [str(s) for s in booking.seat_numbers] == ["2A", "2C", "10A"]
        assert booking.seat_count == 3

    def test_needs_a_seat(self):
        with pytest.raises(BusinessRuleViolationException):
            Booking(
                id=BookingId.generate(),
                user_id="USR-OWNER",
                flight_id=FlightId(value="FL-1"),
                seat_numbers=[],
                total_price=Money.php(0),
                hold_expires_at=IsoDateTime.now(),
            )

    def test_rejects_more_than_nine_seats(self):
        seats = [SeatNumber.from_index(i) for i in range(10)]

        with pytest.raises(BusinessRuleViolationException):
            Booking(
                id=BookingId.generate(),
                user_id="USR-OWNER",
                flight_id=FlightId(value="FL-1"),
                seat_numbers=seats,
                total_price=Money.php(10),
                hold_expires_at=IsoDateTime.now(),
            )

    def test_rejects_duplicate_seats(self):
        with pytest.raises(BusinessRuleViolationException):
            Booking(
                id=BookingId.generate(),
                user_id="USR-OWNER",
                flight_id=FlightId(value="FL-1"),
                seat_numbers=_seats("1A", "1A"),
                total_price=Money.php(10),
                hold_expires_at=IsoDateTime.now(),
            )

    def test_pending_booking_needs_hold_expiry(self):
        with pytest.raises(BusinessRuleViolationException):
            Booking(
                id=BookingId.generate(),
                user_id="USR-OWNER",
                flight_id=FlightId(value="FL-1"),
                seat_numbers=_seats("1A"),
                total_price=Money.php(10),
            )


class TestHoldExpiry:
    def test_expired_at_the_exact_expiry_instant(self, create_booking):
        expires = IsoDateTime.from_string("2026-12-01T08:00:00+00:00")
        booking = create_booking(hold_expires_at=expires)

        assert booking.is_hold_expired(expires)
        assert not booking.is_hold_expired(expires.plus(timedelta(seconds=-1)))

    def test_confirmed_booking_never_expires(self, create_booking):
        booking = create_booking(status=BookingStatus.CONFIRMED)

        assert not booking.is_hold_expired(IsoDateTime.now().plus(timedelta(days=30)))


class TestTransitions:
    def test_confirm_clears_hold(self, create_booking):
        booking = create_booking()

        booking.confirm()

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.hold_expires_at is None

    def test_confirm_is_idempotent(self, create_booking):
        booking = create_booking(status=BookingStatus.CONFIRMED)

        booking.confirm()

        assert booking.status == BookingStatus.CONFIRMED

    def test_cannot_confirm_cancelled_booking(self, create_booking):
        booking = create_booking(status=BookingStatus.CANCELLED)

        with pytest.raises(BusinessRuleViolationException):
            booking.confirm()

    def test_cancel_records_reason(self, create_booking):
        booking = create_booking(status=BookingStatus.CONFIRMED)

        assert booking.cancel("Change of plans") is True
        assert booking.status == BookingStatus.CANCELLED
        assert booking.cancellation_reason == "Change of plans"

    def test_cancel_twice_reports_no_change(self, create_booking):
        booking = create_booking(status=BookingStatus.CANCELLED)

        assert booking.cancel() is False

    def test_failed_booking_cannot_be_cancelled(self, create_booking):
        booking = create_booking(status=BookingStatus.FAILED)

        with pytest.raises(BusinessRuleViolationException):
            booking.cancel()

    def test_only_pending_bookings_fail(self, create_booking):
        pending = create_booking()
        pending.fail()
        assert pending.status == BookingStatus.FAILED
        assert pending.hold_expires_at is None

        with pytest.raises(BusinessRuleViolationException):
            create_booking(status=BookingStatus.CONFIRMED).fail()


class TestPassenger:
    def test_names_are_trimmed(self, create_passenger):
        passenger = create_passenger(first_name="  Juan ", last_name=" Dela Cruz ")

        assert passenger.full_name == "Juan Dela Cruz"

    def test_name_required(self):
        with pytest.raises(BusinessRuleViolationException):
            Passenger(
                id=PassengerId.generate(),
                booking_id=BookingId(value="BK-1"),
                first_name=" ",
                last_name="Cruz",
                date_of_birth=date(1990, 1, 1),
                nationality="Filipino",
            )

    def test_birth_date_cannot_be_in_the_future(self, create_passenger):
        passenger = create_passenger()

        with pytest.raises(BusinessRuleViolationException):
            passenger.update_details(date_of_birth=date.today() + timedelta(days=1))

    def test_update_keeps_seat(self, create_passenger):
        passenger = create_passenger(seat_number="3C")

        passenger.update_details(first_name="Maria", passport_number=" ")

        assert passenger.first_name == "Maria"
        assert passenger.passport_number is None
        assert str(passenger.seat_number) == "3C"
