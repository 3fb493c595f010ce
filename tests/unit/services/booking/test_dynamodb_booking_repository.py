from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.shared.domain import IsoDateTime
from services.shared.domain.exception import OptimisticLockException


def _transaction_cancelled() -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException", "Message": "cancelled"},
            "CancellationReasons": [{"Code": "None"}, {"Code": "ConditionalCheckFailed"}],
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
        "services.booking.infrastructure.dynamodb_booking_repository.get_table",
        return_value=table,
    ):
        yield DynamoDBBookingRepository()


def _transact_items(table) -> list[dict]:
    return table.meta.client.transact_write_items.call_args.kwargs["TransactItems"]


class TestSave:
    def test_booking_seats_counter_and_passengers_in_one_transaction(
        self, repository, table, create_booking, create_passenger
    ):
        booking = create_booking(seats=("1A", "1B"))
        passengers = [
            create_passenger("PX-1", seat_number="1A"),
            create_passenger("PX-2", seat_number="1B"),
        ]

        repository.save(booking, passengers)

        items = _transact_items(table)
        assert len(items) == 1 + 2 + 1 + 2
        booking_put = items[0]["Put"]
        assert booking_put["TableName"] == "airline-test-table"
        assert booking_put["ConditionExpression"] == "attribute_not_exists(PK)"
        assert booking_put["Item"]["GSI3PK"] == "BOOKING_HOLDS"
        assert booking_put["Item"]["GSI3SK"] == str(booking.hold_expires_at)

        seat_updates = [items[1]["Update"], items[2]["Update"]]
        assert [u["Key"]["SK"] for u in seat_updates] == ["SEAT#001A", "SEAT#001B"]
        assert all("is_booked = :false" in u["ConditionExpression"] for u in seat_updates)

        counter = items[3]["Update"]
        assert counter["Key"] == {"PK": "FLIGHT#FL-TEST000001", "SK": "FLIGHT"}
        assert counter["ExpressionAttributeValues"][":n"] == 2
        assert "available_seats >= :n" in counter["ConditionExpression"]

    def test_taken_seat_is_an_optimistic_lock_failure(
        self, repository, table, create_booking
    ):
        table.meta.client.transact_write_items.side_effect = _transaction_cancelled()

        with pytest.raises(OptimisticLockException, match="no longer available"):
            repository.save(create_booking())


class TestRelease:
    def test_frees_seats_owned_by_the_booking(self, repository, table, create_booking):
        booking = create_booking(seats=("3C",))
        booking.cancel("Change of plans")

        repository.release(booking, expected_status=BookingStatus.PENDING)

        items = _transact_items(table)
        update = items[0]["Update"]
        assert update["ExpressionAttributeValues"][":expected"] == "PENDING"
        assert update["ExpressionAttributeValues"][":reason"] == "Change of plans"
        assert "REMOVE hold_expires_at, GSI3PK, GSI3SK" in update["UpdateExpression"]

        seat = items[1]["Update"]
        assert seat["ConditionExpression"] == "booking_id = :booking_id"
        assert seat["ExpressionAttributeValues"][":booking_id"] == "BK-TEST00000001"

        counter = items[2]["Update"]
        assert counter["UpdateExpression"] == "SET available_seats = available_seats + :n"
        assert counter["ExpressionAttributeValues"][":n"] == 1

    def test_status_changed_meanwhile(self, repository, table, create_booking):
        table.meta.client.transact_write_items.side_effect = _transaction_cancelled()
        booking = create_booking()
        booking.fail()

        with pytest.raises(OptimisticLockException):
            repository.release(booking, expected_status=BookingStatus.PENDING)


class TestConfirm:
    def test_conditional_failure_is_optimistic_lock(
        self, repository, table, create_booking
    ):
        table.update_item.side_effect = ClientError(
            {"Error": {"Code": "ConditionalCheckFailedException", "Message": "x"}},
            "UpdateItem",
        )
        booking = create_booking()
        booking.confirm()

        with pytest.raises(OptimisticLockException):
            repository.confirm(booking)

    def test_removes_hold_index(self, repository, table, create_booking):
        booking = create_booking()
        booking.confirm()

        repository.confirm(booking)

        kwargs = table.update_item.call_args.kwargs
        assert "REMOVE hold_expires_at, GSI3PK, GSI3SK" in kwargs["UpdateExpression"]
        assert kwargs["ExpressionAttributeValues"][":status"] == "CONFIRMED"


class TestRead:
    def test_round_trips_through_item(self, repository, table, create_booking):
        booking = create_booking()
        table.get_item.return_value = {"Item": repository._to_item(booking)}

        loaded = repository.find_by_id(BookingId(value="BK-TEST00000001"))

        assert loaded.id == booking.id
        assert loaded.seat_numbers == booking.seat_numbers
        assert loaded.total_price == booking.total_price
        assert loaded.hold_expires_at == booking.hold_expires_at

    def test_missing_booking(self, repository, table):
        table.get_item.return_value = {}

        assert repository.find_by_id(BookingId(value="BK-NONE")) is None

    def test_expired_holds_query_the_hold_index(self, repository, table, create_booking):
        table.query.return_value = {"Items": []}

        repository.find_expired_holds(IsoDateTime.from_string("2026-12-01T08:00:00Z"))

        assert table.query.call_args.kwargs["IndexName"] == "GSI3"
