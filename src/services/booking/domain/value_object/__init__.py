from .booking_id import BookingId
from .passenger_id import PassengerId

__all__ = ["BookingId", "PassengerId"]
