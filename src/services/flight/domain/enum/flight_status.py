from enum import Enum


class FlightStatus(str, Enum):
    """Flight operational status"""

    SCHEDULED = "SCHEDULED"
    DELAYED = "DELAYED"
    CANCELLED = "CANCELLED"
    DEPARTED = "DEPARTED"
    ARRIVED = "ARRIVED"

    @property
    def is_bookable(self) -> bool:
        return self in (FlightStatus.SCHEDULED, FlightStatus.DELAYED)
