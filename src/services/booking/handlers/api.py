from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.cancel_booking import CancelBookingService
from services.booking.applications.manage_passengers import PassengerService
from services.booking.applications.query_bookings import BookingQueryService
from services.booking.applications.reserve_booking import ReserveBookingService
from services.booking.applications.update_booking_status import BookingStatusService
from services.booking.domain.factory import BookingFactory
from services.booking.domain.value_object import BookingId, PassengerId
from services.booking.handlers.request_models import (
    BookingStatusRequest,
    CancelBookingRequest,
    CreateBookingRequest,
    PassengerRequest,
    UpdatePassengerRequest,
)
from services.booking.handlers.response_models import (
    to_passenger_response,
    to_response,
)
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.booking.infrastructure.dynamodb_passenger_repository import (
    DynamoDBPassengerRepository,
)
from services.flight.domain.value_object import FlightId, SeatNumber
from services.flight.infrastructure.dynamodb_flight_repository import (
    DynamoDBFlightRepository,
)
from services.shared.config import get_settings
from services.shared.utils import (
    build_cors_config,
    current_principal,
    json_response,
    register_exception_handlers,
    request_body,
    require_admin,
)

logger = Logger()
settings = get_settings()
app = APIGatewayRestResolver(cors=build_cors_config(settings))
register_exception_handlers(app)

repository = DynamoDBBookingRepository()
passenger_repository = DynamoDBPassengerRepository()
factory = BookingFactory()
reserve_service = ReserveBookingService(
    repository=repository,
    flight_repository=DynamoDBFlightRepository(),
    factory=factory,
    hold_minutes=settings.booking_hold_minutes,
)
query_service = BookingQueryService(repository=repository)
cancel_service = CancelBookingService(repository=repository)
status_service = BookingStatusService(repository=repository)
passenger_service = PassengerService(
    repository=passenger_repository,
    booking_repository=repository,
    factory=factory,
)


@app.post("/bookings")
def create_booking():
    principal = current_principal(app)
    request = CreateBookingRequest.model_validate(request_body(app))
    seat_numbers = (
        [SeatNumber.parse(s) for s in request.seat_numbers]
        if request.seat_numbers
        else None
    )
    booking, passengers = reserve_service.reserve(
        user_id=principal.user_id,
        flight_id=FlightId(value=request.flight_id),
        passengers=[p.to_details() for p in request.passengers],
        seat_numbers=seat_numbers,
    )
    logger.info(
        "Booking created",
        extra={
            "booking_id": str(booking.id),
            "flight_id": str(booking.flight_id),
            "seats": [str(s) for s in booking.seat_numbers],
            "hold_expires_at": str(booking.hold_expires_at),
        },
    )
    return json_response(201, to_response(booking, passengers))


@app.get("/bookings")
def list_my_bookings():
    principal = current_principal(app)
    return [to_response(b) for b in query_service.list_mine(principal)]


@app.get("/bookings/all")
def list_all_bookings():
    require_admin(app)
    return [to_response(b) for b in query_service.list_all()]


@app.get("/bookings/<booking_id>")
def get_booking(booking_id: str):
    principal = current_principal(app)
    booking = query_service.get(BookingId(value=booking_id), principal)
    return to_response(booking)


@app.patch("/bookings/<booking_id>/cancel")
def cancel_booking(booking_id: str):
    principal = current_principal(app)
    request = CancelBookingRequest.model_validate(request_body(app))
    booking = cancel_service.cancel(BookingId(value=booking_id), principal, request.reason)
    logger.info(
        "Booking cancelled",
        extra={"booking_id": booking_id, "cancelled_by": principal.user_id},
    )
    return to_response(booking)


@app.patch("/bookings/<booking_id>/status")
def update_booking_status(booking_id: str):
    require_admin(app)
    request = BookingStatusRequest.model_validate(request_body(app))
    booking = status_service.update_status(BookingId(value=booking_id), request.status)
    logger.info(
        "Booking status updated",
        extra={"booking_id": booking_id, "status": booking.status.value},
    )
    return to_response(booking)


@app.post("/bookings/<booking_id>/passengers")
def add_passenger(booking_id: str):
    principal = current_principal(app)
    request = PassengerRequest.model_validate(request_body(app))
    passenger = passenger_service.add(
        BookingId(value=booking_id), request.to_details(), principal
    )
    return json_response(201, to_passenger_response(passenger))


@app.get("/bookings/<booking_id>/passengers")
def list_passengers(booking_id: str):
    principal = current_principal(app)
    passengers = passenger_service.list_for_booking(BookingId(value=booking_id), principal)
    return [to_passenger_response(p) for p in passengers]


@app.get("/passengers/<passenger_id>")
def get_passenger(passenger_id: str):
    principal = current_principal(app)
    passenger = passenger_service.get(PassengerId(value=passenger_id), principal)
    return to_passenger_response(passenger)


@app.put("/passengers/<passenger_id>")
def update_passenger(passenger_id: str):
    principal = current_principal(app)
    request = UpdatePassengerRequest.model_validate(request_body(app))
    passenger = passenger_service.update(
        PassengerId(value=passenger_id), request.to_changes(), principal
    )
    return to_passenger_response(passenger)


@app.delete("/passengers/<passenger_id>")
def delete_passenger(passenger_id: str):
    principal = current_principal(app)
    passenger_service.delete(PassengerId(value=passenger_id), principal)
    return {"message": "Passenger deleted successfully"}


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """Booking service Lambda handler"""
    return app.resolve(event, context)
