from .entity import Flight as Flight
from .entity import Seat as Seat
from .enum import FlightStatus as FlightStatus
from .enum import SeatClass as SeatClass
from .factory import FlightDetails as FlightDetails
from .factory import FlightFactory as FlightFactory
from .repository import FlightRepository as FlightRepository
from .value_object import FlightId as FlightId
from .value_object import FlightNumber as FlightNumber
from .value_object import SeatNumber as SeatNumber
