from .flight import Flight as Flight
from .flight import ResizePlan as ResizePlan
from .seat import Seat as Seat
