from decimal import Decimal

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.booking.domain.entity import Booking, Passenger
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.booking.infrastructure.dynamodb_passenger_repository import (
    passenger_item,
)
from services.flight.domain.enum import FlightStatus
from services.flight.domain.value_object import FlightId, SeatNumber
from services.flight.infrastructure.keys import flight_key, seat_key
from services.shared.domain import Currency, IsoDateTime, Money
from services.shared.domain.exception import OptimisticLockException
from services.shared.infrastructure import get_table, query_all, transact_write

BOOKINGS_GSI_PK = "BOOKINGS"
HOLDS_GSI_PK = "BOOKING_HOLDS"


def booking_key(booking_id: BookingId) -> dict:
    return {"PK": f"BOOKING#{booking_id}", "SK": "BOOKING"}


class DynamoDBBookingRepository(BookingRepository):
    """BookingRepository backed by the single table

    Booking item: PK=BOOKING#<id> SK=BOOKING
      GSI1  USER#<user_id> / BOOKING#<created_at>   (a user's bookings)
      GSI2  BOOKINGS / <created_at>                  (every booking)
      GSI3  BOOKING_HOLDS / <hold_expires_at>        (only while PENDING)
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table = get_table(table_name)

    def save(self, booking: Booking, passengers: list[Passenger] | None = None) -> None:
        """Create the booking, hold every seat and decrement the counter atomically"""
        actions: list[dict] = [
            {
                "Put": {
                    "Item": self._to_item(booking),
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            }
        ]
        for seat_number in booking.seat_numbers:
            actions.append(
                {
                    "Update": {
                        "Key": seat_key(booking.flight_id, seat_number),
                        "UpdateExpression": (
                            "SET is_booked = :true, booking_id = :booking_id"
                        ),
                        "ConditionExpression": (
                            "attribute_exists(PK) AND is_booked = :false"
                        ),
                        "ExpressionAttributeValues": {
                            ":true": True,
                            ":false": False,
                            ":booking_id": str(booking.id),
                        },
                    }
                }
            )
        actions.append(
            {
                "Update": {
                    "Key": flight_key(booking.flight_id),
                    "UpdateExpression": "SET available_seats = available_seats - :n",
                    "ConditionExpression": (
                        "attribute_exists(PK) AND available_seats >= :n "
                        "AND #status IN (:scheduled, :delayed)"
                    ),
                    "ExpressionAttributeNames": {"#status": "status"},
                    "ExpressionAttributeValues": {
                        ":n": booking.seat_count,
                        ":scheduled": FlightStatus.SCHEDULED.value,
                        ":delayed": FlightStatus.DELAYED.value,
                    },
                }
            }
        )
        for passenger in passengers or []:
            actions.append({"Put": {"Item": passenger_item(passenger)}})

        transact_write(
            self.table,
            actions,
            OptimisticLockException("Selected seats are no longer available"),
        )

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        response = self.table.get_item(Key=booking_key(booking_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def list_by_user(self, user_id: str) -> list[Booking]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"USER#{user_id}")
            & Key("GSI1SK").begins_with("BOOKING#"),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def list_all(self) -> list[Booking]:
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(BOOKINGS_GSI_PK),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def confirm(self, booking: Booking) -> None:
        try:
            self.table.update_item(
                Key=booking_key(booking.id),
                UpdateExpression=(
                    "SET #status = :status, updated_at = :updated_at "
                    "REMOVE hold_expires_at, GSI3PK, GSI3SK"
                ),
                ConditionExpression=Attr("status").eq(BookingStatus.PENDING.value),
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={
                    ":status": BookingStatus.CONFIRMED.value,
                    ":updated_at": str(booking.updated_at),
                },
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Booking status conflict: expected PENDING, booking_id={booking.id}"
                )
            raise

    def release(self, booking: Booking, expected_status: BookingStatus) -> None:
        """Write the terminal status, free the seats and restore the counter"""
        values = {
            ":status": booking.status.value,
            ":expected": expected_status.value,
            ":updated_at": str(booking.updated_at),
        }
        update_expression = "SET #status = :status, updated_at = :updated_at"
        if booking.cancellation_reason:
            update_expression += ", cancellation_reason = :reason"
            values[":reason"] = booking.cancellation_reason
        update_expression += " REMOVE hold_expires_at, GSI3PK, GSI3SK"

        actions: list[dict] = [
            {
                "Update": {
                    "Key": booking_key(booking.id),
                    "UpdateExpression": update_expression,
                    "ConditionExpression": "#status = :expected",
                    "ExpressionAttributeNames": {"#status": "status"},
                    "ExpressionAttributeValues": values,
                }
            }
        ]
        for seat_number in booking.seat_numbers:
            actions.append(
                {
                    "Update": {
                        "Key": seat_key(booking.flight_id, seat_number),
                        "UpdateExpression": "SET is_booked = :false REMOVE booking_id",
                        "ConditionExpression": "booking_id = :booking_id",
                        "ExpressionAttributeValues": {
                            ":false": False,
                            ":booking_id": str(booking.id),
                        },
                    }
                }
            )
        actions.append(
            {
                "Update": {
                    "Key": flight_key(booking.flight_id),
                    "UpdateExpression": "SET available_seats = available_seats + :n",
                    "ConditionExpression": "attribute_exists(PK)",
                    "ExpressionAttributeValues": {":n": booking.seat_count},
                }
            }
        )
        transact_write(
            self.table,
            actions,
            OptimisticLockException(
                f"Booking status conflict: expected {expected_status.value}, "
                f"booking_id={booking.id}"
            ),
        )

    def find_expired_holds(self, now: IsoDateTime) -> list[Booking]:
        items = query_all(
            self.table,
            IndexName="GSI3",
            KeyConditionExpression=Key("GSI3PK").eq(HOLDS_GSI_PK)
            & Key("GSI3SK").lte(str(now)),
        )
        return [self._to_entity(item) for item in items]

    def _to_item(self, booking: Booking) -> dict:
        item = {
            **booking_key(booking.id),
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "user_id": booking.user_id,
            "flight_id": str(booking.flight_id),
            "seat_numbers": [str(seat) for seat in booking.seat_numbers],
            "total_amount": str(booking.total_price.amount),
            "currency": str(booking.total_price.currency),
            "status": booking.status.value,
            "created_at": str(booking.created_at),
            "updated_at": str(booking.updated_at),
            "GSI1PK": f"USER#{booking.user_id}",
            "GSI1SK": f"BOOKING#{booking.created_at}",
            "GSI2PK": BOOKINGS_GSI_PK,
            "GSI2SK": str(booking.created_at),
        }
        if booking.hold_expires_at is not None:
            item["hold_expires_at"] = str(booking.hold_expires_at)
            item["GSI3PK"] = HOLDS_GSI_PK
            item["GSI3SK"] = str(booking.hold_expires_at)
        if booking.cancellation_reason:
            item["cancellation_reason"] = booking.cancellation_reason
        return item

    def _to_entity(self, item: dict) -> Booking:
        """Convert a DynamoDB item into the aggregate"""
        hold = item.get("hold_expires_at")
        return Booking(
            id=BookingId(value=item["booking_id"]),
            user_id=item["user_id"],
            flight_id=FlightId(value=item["flight_id"]),
            seat_numbers=[SeatNumber.parse(s) for s in item["seat_numbers"]],
            total_price=Money(
                amount=Decimal(item["total_amount"]),
                currency=Currency(item["currency"]),
            ),
            status=BookingStatus(item["status"]),
            hold_expires_at=IsoDateTime.from_string(hold) if hold else None,
            created_at=IsoDateTime.from_string(item["created_at"]),
            updated_at=IsoDateTime.from_string(item["updated_at"]),
            cancellation_reason=item.get("cancellation_reason"),
        )
