from .flight_id import FlightId
from .flight_number import FlightNumber
from .seat_number import SeatNumber

__all__ = ["FlightId", "FlightNumber", "SeatNumber"]
