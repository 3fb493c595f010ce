from decimal import Decimal

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.flight.domain.entity import Flight, ResizePlan, Seat
from services.flight.domain.enum import FlightStatus, SeatClass
from services.flight.domain.repository import FlightRepository
from services.flight.domain.value_object import FlightId, FlightNumber, SeatNumber
from services.flight.infrastructure.keys import (
    FLIGHTS_GSI_PK,
    SEAT_SK_PREFIX,
    flight_key,
    flight_pk,
    route_pk,
    seat_key,
)
from services.shared.domain import Currency, IsoDateTime, Money
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    OptimisticLockException,
    ResourceNotFoundException,
)
from services.shared.infrastructure import (
    chunked,
    get_table,
    query_all,
    transact_write,
)
from services.shared.infrastructure.dynamodb import MAX_TRANSACT_ITEMS

# One slot of every resize transaction is taken by the flight counter update
_SEATS_PER_TRANSACTION = MAX_TRANSACT_ITEMS - 1


class DynamoDBFlightRepository(FlightRepository):
    """FlightRepository backed by the single DynamoDB table

    Flight item:  PK=FLIGHT#<id>  SK=FLIGHT
    Seat items:   PK=FLIGHT#<id>  SK=SEAT#<row:03d><letter>
    GSI1 lists every flight by departure, GSI2 indexes them by route.
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table = get_table(table_name)

    def save(self, flight: Flight, seats: list[Seat] | None = None) -> None:
        """Write the seats first, then the flight item that makes them visible"""
        with self.table.batch_writer() as batch:
            for seat in seats or []:
                batch.put_item(Item=self._seat_item(seat))
        try:
            self.table.put_item(
                Item=self._flight_item(flight),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(f"Flight already exists: {flight.id}")
            raise

    def find_by_id(self, flight_id: FlightId) -> Flight | None:
        response = self.table.get_item(Key=flight_key(flight_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def list_all(self) -> list[Flight]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(FLIGHTS_GSI_PK),
        )
        return [self._to_entity(item) for item in items]

    def find_departing_between(
        self, start: IsoDateTime, end: IsoDateTime
    ) -> list[Flight]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(FLIGHTS_GSI_PK)
            & Key("GSI1SK").between(str(start), f"{end}#"),
        )
        flights = [self._to_entity(item) for item in items]
        return [f for f in flights if f.departure_time.is_before(end)]

    def find_by_route(
        self,
        origin: str,
        destination: str,
        start: IsoDateTime,
        end: IsoDateTime,
    ) -> list[Flight]:
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(route_pk(origin, destination))
            & Key("GSI2SK").between(str(start), f"{end}#"),
        )
        flights = [self._to_entity(item) for item in items]
        return [f for f in flights if f.departure_time.is_before(end)]

    def update(self, flight: Flight) -> None:
        try:
            self.table.update_item(
                Key=flight_key(flight.id),
                UpdateExpression=(
                    "SET flight_number = :flight_number, airline = :airline, "
                    "origin = :origin, destination = :destination, "
                    "departure_time = :departure_time, arrival_time = :arrival_time, "
                    "duration_minutes = :duration, price_amount = :price_amount, "
                    "price_currency = :price_currency, #status = :status, "
                    "GSI1SK = :gsi1sk, GSI2PK = :gsi2pk, GSI2SK = :gsi2sk"
                ),
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={
                    ":flight_number": str(flight.flight_number),
                    ":airline": flight.airline,
                    ":origin": flight.origin,
                    ":destination": flight.destination,
                    ":departure_time": str(flight.departure_time),
                    ":arrival_time": str(flight.arrival_time),
                    ":duration": flight.duration_minutes,
                    ":price_amount": str(flight.price.amount),
                    ":price_currency": str(flight.price.currency),
                    ":status": flight.status.value,
                    ":gsi1sk": self._departure_sort_key(flight),
                    ":gsi2pk": route_pk(flight.origin, flight.destination),
                    ":gsi2sk": self._departure_sort_key(flight),
                },
                ConditionExpression=Attr("PK").exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ResourceNotFoundException(f"Flight not found: {flight.id}")
            raise

    def resize(self, flight: Flight, plan: ResizePlan) -> None:
        """Each chunk of seats commits together with its counter delta"""
        for numbers in chunked(plan.added, _SEATS_PER_TRANSACTION):
            actions = [
                {
                    "Put": {
                        "Item": self._seat_item(Seat(flight.id, number)),
                        "ConditionExpression": "attribute_not_exists(PK)",
                    }
                }
                for number in numbers
            ]
            actions.append(self._capacity_delta_action(flight.id, len(numbers)))
            transact_write(
                self.table,
                actions,
                OptimisticLockException(f"Seat map changed concurrently: {flight.id}"),
            )

        for numbers in chunked(plan.removed, _SEATS_PER_TRANSACTION):
            actions = [
                {
                    "Delete": {
                        "Key": seat_key(flight.id, number),
                        "ConditionExpression": "is_booked = :false",
                        "ExpressionAttributeValues": {":false": False},
                    }
                }
                for number in numbers
            ]
            actions.append(self._capacity_delta_action(flight.id, -len(numbers)))
            transact_write(
                self.table,
                actions,
                BusinessRuleViolationException(
                    "Cannot remove seats that are booked; choose a larger capacity"
                ),
            )

    def recount_available_seats(self, flight_id: FlightId) -> int:
        flight = self.find_by_id(flight_id)
        if flight is None:
            raise ResourceNotFoundException(f"Flight not found: {flight_id}")
        seats = self.list_seats(flight_id)
        available = sum(1 for seat in seats if not seat.is_booked)
        try:
            self.table.update_item(
                Key=flight_key(flight_id),
                UpdateExpression="SET available_seats = :available, seat_capacity = :capacity",
                ConditionExpression="available_seats = :expected",
                ExpressionAttributeValues={
                    ":available": available,
                    ":capacity": len(seats),
                    ":expected": flight.available_seats,
                },
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Seats changed while recounting flight {flight_id}; retry"
                )
            raise
        return available

    def delete(self, flight: Flight) -> None:
        try:
            self.table.delete_item(
                Key=flight_key(flight.id),
                ConditionExpression="available_seats = seat_capacity",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise BusinessRuleViolationException(
                    "Cannot delete a flight that has booked seats"
                )
            raise
        with self.table.batch_writer() as batch:
            for seat in self.list_seats(flight.id):
                batch.delete_item(Key=seat_key(flight.id, seat.seat_number))

    def list_seats(self, flight_id: FlightId) -> list[Seat]:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(flight_pk(flight_id))
            & Key("SK").begins_with(SEAT_SK_PREFIX),
            ConsistentRead=True,
        )
        return [self._to_seat(item) for item in items]

    def find_seat(self, flight_id: FlightId, seat_number: SeatNumber) -> Seat | None:
        response = self.table.get_item(
            Key=seat_key(flight_id, seat_number), ConsistentRead=True
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_seat(item)

    def update_seat(self, seat: Seat) -> None:
        self.table.update_item(
            Key=seat_key(seat.flight_id, seat.seat_number),
            UpdateExpression="SET seat_class = :seat_class",
            ExpressionAttributeValues={":seat_class": seat.seat_class.value},
            ConditionExpression=Attr("PK").exists(),
        )

    def _capacity_delta_action(self, flight_id: FlightId, delta: int) -> dict:
        action = {
            "Key": flight_key(flight_id),
            "UpdateExpression": (
                "SET seat_capacity = seat_capacity + :delta, "
                "available_seats = available_seats + :delta"
            ),
            "ExpressionAttributeValues": {":delta": delta},
            "ConditionExpression": "attribute_exists(PK)",
        }
        if delta < 0:
            action["ConditionExpression"] = (
                "attribute_exists(PK) AND available_seats >= :needed"
            )
            action["ExpressionAttributeValues"][":needed"] = -delta
        return {"Update": action}

    @staticmethod
    def _departure_sort_key(flight: Flight) -> str:
        return f"{flight.departure_time}#{flight.id}"

    def _flight_item(self, flight: Flight) -> dict:
        return {
            **flight_key(flight.id),
            "entity_type": "FLIGHT",
            "flight_id": str(flight.id),
            "flight_number": str(flight.flight_number),
            "airline": flight.airline,
            "origin": flight.origin,
            "destination": flight.destination,
            "departure_time": str(flight.departure_time),
            "arrival_time": str(flight.arrival_time),
            "duration_minutes": flight.duration_minutes,
            "price_amount": str(flight.price.amount),
            "price_currency": str(flight.price.currency),
            "seat_capacity": flight.seat_capacity,
            "available_seats": flight.available_seats,
            "status": flight.status.value,
            "created_at": str(flight.created_at),
            "GSI1PK": FLIGHTS_GSI_PK,
            "GSI1SK": self._departure_sort_key(flight),
            "GSI2PK": route_pk(flight.origin, flight.destination),
            "GSI2SK": self._departure_sort_key(flight),
        }

    @staticmethod
    def _seat_item(seat: Seat) -> dict:
        return {
            **seat_key(seat.flight_id, seat.seat_number),
            "entity_type": "SEAT",
            "flight_id": str(seat.flight_id),
            "seat_number": str(seat.seat_number),
            "seat_class": seat.seat_class.value,
            "is_booked": seat.is_booked,
        }

    def _to_entity(self, item: dict) -> Flight:
        """Convert a DynamoDB item into the aggregate"""
        return Flight(
            id=FlightId(value=item["flight_id"]),
            flight_number=FlightNumber(value=item["flight_number"]),
            airline=item["airline"],
            origin=item["origin"],
            destination=item["destination"],
            departure_time=IsoDateTime.from_string(item["departure_time"]),
            arrival_time=IsoDateTime.from_string(item["arrival_time"]),
            price=Money(
                amount=Decimal(item["price_amount"]),
                currency=Currency(item["price_currency"]),
            ),
            seat_capacity=int(item["seat_capacity"]),
            available_seats=int(item["available_seats"]),
            status=FlightStatus(item["status"]),
            created_at=IsoDateTime.from_string(item["created_at"]),
        )

    @staticmethod
    def _to_seat(item: dict) -> Seat:
        return Seat(
            flight_id=FlightId(value=item["flight_id"]),
            seat_number=SeatNumber.parse(item["seat_number"]),
            seat_class=SeatClass(item["seat_class"]),
            is_booked=bool(item.get("is_booked", False)),
            booking_id=item.get("booking_id"),
        )
