import pytest

from services.flight.domain.enum import FlightStatus
from services.flight.domain.value_object import SeatNumber
from services.shared.domain.exception import BusinessRuleViolationException


class TestFlight:
    def test_new_flight_has_every_seat_available(self, create_flight):
        flight = create_flight(seat_capacity=12)

        assert flight.available_seats == 12
        assert flight.booked_seats == 0
        assert flight.duration_minutes == 80

    def test_arrival_must_follow_departure(self, create_flight):
        with pytest.raises(BusinessRuleViolationException, match="before arrival"):
            create_flight(
                departure="2026-12-01T10:00:00Z", arrival="2026-12-01T09:00:00Z"
            )

    def test_origin_and_destination_must_differ(self, create_flight):
        with pytest.raises(BusinessRuleViolationException, match="different"):
            create_flight(origin="Manila", destination="manila")

    def test_available_seats_cannot_exceed_capacity(self, create_flight):
        with pytest.raises(BusinessRuleViolationException, match="Available seats"):
            create_flight(seat_capacity=10, available_seats=11)

    @pytest.mark.parametrize(
        "status, bookable",
        [
            (FlightStatus.SCHEDULED, True),
            (FlightStatus.DELAYED, True),
            (FlightStatus.CANCELLED, False),
            (FlightStatus.DEPARTED, False),
        ],
    )
    def test_bookable_statuses(self, create_flight, status, bookable):
        assert create_flight(status=status).is_bookable() is bookable

    def test_route_key_is_case_insensitive(self, create_flight):
        assert create_flight(origin="manila", destination="Cebu").route_key == (
            "MANILA#CEBU"
        )

    def test_update_details_revalidates(self, create_flight):
        flight = create_flight()

        with pytest.raises(BusinessRuleViolationException):
            flight.update_details(destination="Manila")


class TestFlightResize:
    def test_growing_adds_the_next_seats(self, create_flight):
        flight = create_flight(seat_capacity=6)

        plan = flight.plan_resize(8)

        assert plan.added == [SeatNumber.parse("2A"), SeatNumber.parse("2B")]
        assert plan.removed == []

    def test_shrinking_removes_the_highest_seats(self, create_flight):
        flight = create_flight(seat_capacity=8)

        plan = flight.plan_resize(6)

        assert plan.removed == [SeatNumber.parse("2A"), SeatNumber.parse("2B")]

    def test_cannot_shrink_below_booked_seats(self, create_flight):
        flight = create_flight(seat_capacity=12, available_seats=2)

        with pytest.raises(BusinessRuleViolationException, match="already booked"):
            flight.plan_resize(9)

    def test_apply_resize_moves_capacity_and_availability_together(
        self, create_flight
    ):
        flight = create_flight(seat_capacity=12, available_seats=10)

        flight.apply_resize(flight.plan_resize(15))

        assert flight.seat_capacity == 15
        assert flight.available_seats == 13
        assert flight.booked_seats == 2
