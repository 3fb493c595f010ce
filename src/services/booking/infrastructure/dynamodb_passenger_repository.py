from datetime import date

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.booking.domain.entity import Passenger
from services.booking.domain.repository import PassengerRepository
from services.booking.domain.value_object import BookingId, PassengerId
from services.flight.domain.value_object import SeatNumber
from services.shared.domain.exception import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from services.shared.infrastructure import get_table, query_all


def passenger_key(passenger_id: PassengerId) -> dict:
    return {"PK": f"PASSENGER#{passenger_id}", "SK": "PASSENGER"}


def passenger_item(passenger: Passenger) -> dict:
    """DynamoDB item for a passenger (also used inside booking transactions)"""
    item = {
        **passenger_key(passenger.id),
        "entity_type": "PASSENGER",
        "passenger_id": str(passenger.id),
        "booking_id": str(passenger.booking_id),
        "first_name": passenger.first_name,
        "last_name": passenger.last_name,
        "date_of_birth": passenger.date_of_birth.isoformat(),
        "nationality": passenger.nationality,
        "GSI1PK": f"BOOKING#{passenger.booking_id}",
        "GSI1SK": f"PASSENGER#{passenger.id}",
    }
    if passenger.passport_number:
        item["passport_number"] = passenger.passport_number
    if passenger.seat_number is not None:
        item["seat_number"] = str(passenger.seat_number)
    return item


class DynamoDBPassengerRepository(PassengerRepository):
    """PassengerRepository backed by the single table; GSI1 groups by booking"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table = get_table(table_name)

    def save(self, passenger: Passenger) -> None:
        try:
            self.table.put_item(
                Item=passenger_item(passenger),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Passenger already exists: {passenger.id}"
                )
            raise

    def find_by_id(self, passenger_id: PassengerId) -> Passenger | None:
        response = self.table.get_item(Key=passenger_key(passenger_id))
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def list_by_booking(self, booking_id: BookingId) -> list[Passenger]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"BOOKING#{booking_id}")
            & Key("GSI1SK").begins_with("PASSENGER#"),
        )
        return [self._to_entity(item) for item in items]

    def update(self, passenger: Passenger) -> None:
        try:
            self.table.put_item(
                Item=passenger_item(passenger),
                ConditionExpression=Attr("PK").exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ResourceNotFoundException(f"Passenger not found: {passenger.id}")
            raise

    def delete(self, passenger_id: PassengerId) -> None:
        self.table.delete_item(Key=passenger_key(passenger_id))

    def _to_entity(self, item: dict) -> Passenger:
        seat = item.get("seat_number")
        return Passenger(
            id=PassengerId(value=item["passenger_id"]),
            booking_id=BookingId(value=item["booking_id"]),
            first_name=item["first_name"],
            last_name=item["last_name"],
            date_of_birth=date.fromisoformat(item["date_of_birth"]),
            nationality=item["nationality"],
            passport_number=item.get("passport_number"),
            seat_number=SeatNumber.parse(seat) if seat else None,
        )
