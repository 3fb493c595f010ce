from datetime import date

from pydantic import BaseModel, Field

from services.booking.applications.manage_passengers import PassengerChanges
from services.booking.domain.entity import MAX_SEATS_PER_BOOKING
from services.booking.domain.enum import BookingStatus
from services.booking.domain.factory import PassengerDetails


class PassengerRequest(BaseModel):
    """Passenger input schema"""

    first_name: str = Field(..., min_length=1, max_length=100, examples=["Juan"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Dela Cruz"])
    date_of_birth: date = Field(..., examples=["1990-05-17"])
    nationality: str = Field(..., min_length=2, max_length=60, examples=["Filipino"])
    passport_number: str | None = Field(default=None, max_length=20)

    def to_details(self) -> PassengerDetails:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth,
            "nationality": self.nationality,
            "passport_number": self.passport_number,
        }


class CreateBookingRequest(BaseModel):
    """Create-booking request schema

    ``seat_numbers`` is optional; when absent the lowest free seats are
    assigned.
    """

    flight_id: str = Field(..., min_length=1)
    passengers: list[PassengerRequest] = Field(
        ..., min_length=1, max_length=MAX_SEATS_PER_BOOKING
    )
    seat_numbers: list[str] | None = Field(
        default=None,
        min_length=1,
        max_length=MAX_SEATS_PER_BOOKING,
        examples=[["12A", "12B"]],
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "flight_id": "FL-3F9A1C07B2",
                    "passengers": [
                        {
                            "first_name": "Juan",
                            "last_name": "Dela Cruz",
                            "date_of_birth": "1990-05-17",
                            "nationality": "Filipino",
                        }
                    ],
                    "seat_numbers": ["12A"],
                }
            ]
        }
    }


class CancelBookingRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class BookingStatusRequest(BaseModel):
    status: BookingStatus


class UpdatePassengerRequest(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    date_of_birth: date | None = None
    nationality: str | None = Field(default=None, min_length=2, max_length=60)
    passport_number: str | None = Field(default=None, max_length=20)

    def to_changes(self) -> PassengerChanges:
        return self.model_dump(exclude_none=True)
