from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from services.flight.domain.entity import ResizePlan
from services.flight.domain.value_object import FlightId, SeatNumber
from services.flight.infrastructure.dynamodb_flight_repository import (
    DynamoDBFlightRepository,
)
from services.shared.domain import IsoDateTime
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
)


def _conditional_check_failed(operation: str = "PutItem") -> ClientError:
    return ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException", "Message": "failed"}},
        operation,
    )


def _cancelled() -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException", "Message": "cancelled"},
            "CancellationReasons": [{"Code": "ConditionalCheckFailed"}],
        },
        "TransactWriteItems",
    )


@pytest.fixture
def table():
    mock_table = MagicMock()
    mock_table.name = "airline-test-table"
    return mock_table


@pytest.fixture
def repository(table):
    with patch(
        "services.flight.infrastructure.dynamodb_flight_repository.get_table",
        return_value=table,
    ):
        yield DynamoDBFlightRepository()


def _flight_item(**overrides) -> dict:
    item = {
        "PK": "FLIGHT#FL-1",
        "SK": "FLIGHT",
        "flight_id": "FL-1",
        "flight_number": "PR102",
        "airline": "Philippine Airlines",
        "origin": "Manila",
        "destination": "Cebu",
        "departure_time": "2026-12-01T08:00:00+00:00",
        "arrival_time": "2026-12-01T09:20:00+00:00",
        "price_amount": "2500",
        "price_currency": "PHP",
        "seat_capacity": Decimal("12"),
        "available_seats": Decimal("10"),
        "status": "SCHEDULED",
        "created_at": "2026-10-01T00:00:00+00:00",
    }
    item.update(overrides)
    return item


class TestSave:
    def test_flight_item_carries_listing_and_route_keys(
        self, repository, table, create_flight
    ):
        flight = create_flight(origin="Manila", destination="Cebu")

        repository.save(flight, [])

        item = table.put_item.call_args.kwargs["Item"]
        assert item["PK"] == "FLIGHT#FL-TEST000001"
        assert item["SK"] == "FLIGHT"
        assert item["GSI1PK"] == "FLIGHTS"
        assert item["GSI2PK"] == "ROUTE#MANILA#CEBU"
        assert item["GSI2SK"].startswith("2026-12-01T08:00:00+00:00#")
        assert item["available_seats"] == 12

    def test_seats_are_written_with_padded_sort_keys(
        self, repository, table, create_flight, create_seat
    ):
        batch = table.batch_writer.return_value.__enter__.return_value

        repository.save(create_flight(), [create_seat("1A"), create_seat("12F")])

        keys = [c.kwargs["Item"]["SK"] for c in batch.put_item.call_args_list]
        assert keys == ["SEAT#001A", "SEAT#012F"]

    def test_existing_flight_is_a_duplicate(self, repository, table, create_flight):
        table.put_item.side_effect = _conditional_check_failed()

        with pytest.raises(DuplicateResourceException):
            repository.save(create_flight())


class TestRead:
    def test_find_by_id_maps_the_item(self, repository, table):
        table.get_item.return_value = {"Item": _flight_item()}

        flight = repository.find_by_id(FlightId(value="FL-1"))

        assert str(flight.flight_number) == "PR102"
        assert flight.available_seats == 10
        assert flight.price.amount == Decimal("2500")

    def test_find_by_id_missing(self, repository, table):
        table.get_item.return_value = {}

        assert repository.find_by_id(FlightId(value="FL-404")) is None

    def test_range_query_drops_flights_at_the_end_bound(self, repository, table):
        table.query.return_value = {
            "Items": [
                _flight_item(),
                _flight_item(
                    flight_id="FL-2",
                    departure_time="2026-12-02T00:00:00+00:00",
                    arrival_time="2026-12-02T01:00:00+00:00",
                ),
            ]
        }

        flights = repository.find_departing_between(
            IsoDateTime.from_string("2026-12-01T00:00:00Z"),
            IsoDateTime.from_string("2026-12-02T00:00:00Z"),
        )

        assert [str(f.id) for f in flights] == ["FL-1"]


class TestResize:
    def test_large_growth_is_split_into_transactions(
        self, repository, table, create_flight
    ):
        flight = create_flight()
        plan = ResizePlan(added=[SeatNumber.from_index(i) for i in range(12, 112)])

        repository.resize(flight, plan)

        calls = table.meta.client.transact_write_items.call_args_list
        assert len(calls) == 2
        first = calls[0].kwargs["TransactItems"]
        assert len(first) == 100
        assert first[-1]["Update"]["ExpressionAttributeValues"] == {":delta": 99}
        second = calls[1].kwargs["TransactItems"]
        assert second[-1]["Update"]["ExpressionAttributeValues"] == {":delta": 1}

    def test_removing_a_booked_seat_is_refused(self, repository, table, create_flight):
        table.meta.client.transact_write_items.side_effect = _cancelled()
        plan = ResizePlan(removed=[SeatNumber.parse("2F")])

        with pytest.raises(BusinessRuleViolationException, match="booked"):
            repository.resize(create_flight(), plan)

    def test_shrink_requires_enough_free_seats(self, repository, table, create_flight):
        plan = ResizePlan(removed=[SeatNumber.parse("2E"), SeatNumber.parse("2F")])

        repository.resize(create_flight(), plan)

        counter = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ][-1]["Update"]
        assert "available_seats >= :needed" in counter["ConditionExpression"]
        assert counter["ExpressionAttributeValues"] == {":delta": -2, ":needed": 2}


class TestMaintenance:
    def test_recount_uses_the_counter_it_read(self, repository, table):
        table.get_item.return_value = {"Item": _flight_item()}
        table.query.return_value = {
            "Items": [
                {"flight_id": "FL-1", "seat_number": "1A", "seat_class": "ECONOMY", "is_booked": True},
                {"flight_id": "FL-1", "seat_number": "1B", "seat_class": "ECONOMY", "is_booked": False},
            ]
        }

        available = repository.recount_available_seats(FlightId(value="FL-1"))

        assert available == 1
        values = table.update_item.call_args.kwargs["ExpressionAttributeValues"]
        assert values == {":available": 1, ":capacity": 2, ":expected": 10}

    def test_delete_is_refused_while_seats_are_held(
        self, repository, table, create_flight
    ):
        table.delete_item.side_effect = _conditional_check_failed("DeleteItem")

        with pytest.raises(BusinessRuleViolationException, match="booked seats"):
            repository.delete(create_flight(available_seats=11))

        table.batch_writer.assert_not_called()

    def test_delete_removes_seat_items(self, repository, table, create_flight):
        table.query.return_value = {
            "Items": [
                {"flight_id": "FL-TEST000001", "seat_number": "1A", "seat_class": "ECONOMY"},
            ]
        }
        batch = table.batch_writer.return_value.__enter__.return_value

        repository.delete(create_flight())

        batch.delete_item.assert_called_once_with(
            Key={"PK": "FLIGHT#FL-TEST000001", "SK": "SEAT#001A"}
        )
