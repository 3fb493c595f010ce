from .booking_repository import BookingRepository as BookingRepository
from .passenger_repository import PassengerRepository as PassengerRepository
