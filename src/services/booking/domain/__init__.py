from .entity import Booking as Booking
from .entity import Passenger as Passenger
from .enum import BookingStatus as BookingStatus
from .factory import BookingFactory as BookingFactory
from .factory import PassengerDetails as PassengerDetails
from .repository import BookingRepository as BookingRepository
from .repository import PassengerRepository as PassengerRepository
from .value_object import BookingId as BookingId
from .value_object import PassengerId as PassengerId
