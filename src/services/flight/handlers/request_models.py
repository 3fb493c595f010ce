from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.flight.applications.manage_flights import FlightChanges
from services.flight.domain.enum import FlightStatus, SeatClass
from services.flight.domain.factory import FlightDetails
from services.shared.utils import to_decimal

MAX_SEAT_CAPACITY = 600


class CreateFlightRequest(BaseModel):
    """Create-flight request schema"""

    flight_number: str = Field(
        ...,
        min_length=3,
        max_length=6,
        description="IATA flight number",
        examples=["PR102", "5J560"],
    )
    airline: str = Field(..., min_length=1, examples=["Philippine Airlines"])
    origin: str = Field(..., min_length=1, examples=["Manila"])
    destination: str = Field(..., min_length=1, examples=["Cebu"])
    departure_time: str = Field(
        ...,
        description="Departure time (ISO 8601)",
        examples=["2026-01-01T10:00:00Z"],
    )
    arrival_time: str = Field(
        ...,
        description="Arrival time (ISO 8601)",
        examples=["2026-01-01T11:20:00Z"],
    )
    price: Decimal = Field(..., ge=0, description="Fare per seat", examples=[2499])
    currency: str = Field(
        default="PHP",
        pattern="^[A-Z]{3}$",
        description="Currency code (ISO 4217)",
    )
    seat_capacity: int = Field(..., ge=1, le=MAX_SEAT_CAPACITY)

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return to_decimal(v)

    def to_details(self) -> FlightDetails:
        return {
            "flight_number": self.flight_number,
            "airline": self.airline,
            "origin": self.origin,
            "destination": self.destination,
            "departure_time": self.departure_time,
            "arrival_time": self.arrival_time,
            "price_amount": self.price,
            "price_currency": self.currency,
            "seat_capacity": self.seat_capacity,
        }


class UpdateFlightRequest(BaseModel):
    """Partial flight update; only the fields present are changed"""

    flight_number: str | None = Field(default=None, min_length=3, max_length=6)
    airline: str | None = Field(default=None, min_length=1)
    origin: str | None = Field(default=None, min_length=1)
    destination: str | None = Field(default=None, min_length=1)
    departure_time: str | None = None
    arrival_time: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, pattern="^[A-Z]{3}$")
    seat_capacity: int | None = Field(default=None, ge=1, le=MAX_SEAT_CAPACITY)

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        if v is None:
            return v
        return to_decimal(v)

    def to_changes(self) -> FlightChanges:
        data = self.model_dump(exclude_none=True)
        if "price" in data:
            data["price_amount"] = data.pop("price")
        if "currency" in data:
            data["price_currency"] = data.pop("currency")
        return data


class FlightStatusRequest(BaseModel):
    status: FlightStatus


class SearchFlightsRequest(BaseModel):
    """Flight search body: ``from``, ``to``, ``departure`` and optional ``return``"""

    model_config = ConfigDict(populate_by_name=True)

    origin: str | None = Field(default=None, alias="from")
    destination: str | None = Field(default=None, alias="to")
    departure: str | None = None
    return_date: str | None = Field(default=None, alias="return")
    passengers: int = Field(default=1, ge=1)

    def ensure_required(self) -> None:
        if not (self.origin and self.destination and self.departure):
            raise ValueError("From, to, and departure date are required.")


class UpdateSeatRequest(BaseModel):
    seat_class: SeatClass
