from enum import Enum


class SeatClass(str, Enum):
    """Cabin class of a seat"""

    ECONOMY = "ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"
