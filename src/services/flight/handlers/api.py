from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.flight.applications.manage_flights import FlightAdminService
from services.flight.applications.search_flights import FlightQueryService
from services.flight.domain.factory import FlightFactory
from services.flight.domain.value_object import FlightId, SeatNumber
from services.flight.handlers.request_models import (
    CreateFlightRequest,
    FlightStatusRequest,
    SearchFlightsRequest,
    UpdateFlightRequest,
    UpdateSeatRequest,
)
from services.flight.handlers.response_models import (
    to_list_response,
    to_page_response,
    to_response,
    to_search_response,
    to_seat_response,
)
from services.flight.infrastructure.dynamodb_flight_repository import (
    DynamoDBFlightRepository,
)
from services.shared.config import get_settings
from services.shared.utils import (
    build_cors_config,
    json_response,
    register_exception_handlers,
    request_body,
    require_admin,
)
from services.shared.utils.validators import parse_day, parse_positive_int

logger = Logger()
app = APIGatewayRestResolver(cors=build_cors_config(get_settings()))
register_exception_handlers(app)

repository = DynamoDBFlightRepository()
query_service = FlightQueryService(repository=repository)
admin_service = FlightAdminService(repository=repository, factory=FlightFactory())


def _query(name: str) -> str | None:
    return app.current_event.get_query_string_value(name=name, default_value=None)


# Public routes


@app.get("/flights")
def list_flights():
    page = query_service.list_paginated(
        page=parse_positive_int(_query("page"), 1, "page"),
        limit=parse_positive_int(_query("limit"), 5, "limit"),
        search=_query("search") or "",
    )
    return to_page_response(page)


@app.get("/flights/upcoming")
def upcoming_flights():
    return to_list_response(query_service.upcoming())


@app.get("/flights/range")
def flights_by_date_range():
    flights = query_service.by_date_range(
        start=parse_day(_query("start"), "start"),
        end=parse_day(_query("end"), "end"),
    )
    return to_list_response(flights)


@app.post("/flights/search")
def search_flights():
    request = SearchFlightsRequest.model_validate(request_body(app))
    request.ensure_required()
    result = query_service.search(
        origin=request.origin,
        destination=request.destination,
        departure=parse_day(request.departure, "departure"),
        return_date=(
            parse_day(request.return_date, "return") if request.return_date else None
        ),
        passengers=request.passengers,
    )
    logger.info(
        "Flight search",
        extra={
            "origin": request.origin,
            "destination": request.destination,
            "outbound": len(result.outbound),
            "return": len(result.return_flights),
        },
    )
    return to_search_response(result)


@app.get("/flights/<flight_id>")
def get_flight(flight_id: str):
    return to_response(query_service.get(FlightId(value=flight_id)))


@app.get("/flights/<flight_id>/seats")
def list_seats(flight_id: str):
    seats = query_service.list_seats(FlightId(value=flight_id))
    return [to_seat_response(seat) for seat in seats]


@app.get("/flights/<flight_id>/seats/available")
def list_available_seats(flight_id: str):
    seats = query_service.list_available_seats(FlightId(value=flight_id))
    return [to_seat_response(seat) for seat in seats]


# Admin routes


@app.post("/flights")
def create_flight():
    require_admin(app)
    request = CreateFlightRequest.model_validate(request_body(app))
    flight = admin_service.create(request.to_details())
    logger.info(
        "Flight created",
        extra={"flight_id": str(flight.id), "seat_capacity": flight.seat_capacity},
    )
    return json_response(201, to_response(flight))


@app.post("/flights/import")
def import_flights():
    require_admin(app)
    payload = request_body(app)
    if not isinstance(payload, list):
        raise ValueError("Payload must be an array of flights")
    requests = [CreateFlightRequest.model_validate(item) for item in payload]
    flights = admin_service.import_many([r.to_details() for r in requests])
    logger.info("Flights imported", extra={"count": len(flights)})
    return json_response(
        201,
        {
            "message": f"{len(flights)} flights imported successfully with seats.",
            "data": to_list_response(flights),
        },
    )


@app.post("/flights/filter")
def filter_flights():
    require_admin(app)
    filters = request_body(app)
    if not isinstance(filters, dict):
        raise ValueError("Filters must be a JSON object")
    return to_list_response(query_service.filter(filters))


@app.put("/flights/<flight_id>")
def update_flight(flight_id: str):
    require_admin(app)
    request = UpdateFlightRequest.model_validate(request_body(app))
    flight = admin_service.update(FlightId(value=flight_id), request.to_changes())
    return to_response(flight)


@app.patch("/flights/<flight_id>/status")
def update_flight_status(flight_id: str):
    require_admin(app)
    request = FlightStatusRequest.model_validate(request_body(app))
    flight = admin_service.change_status(FlightId(value=flight_id), request.status)
    logger.info(
        "Flight status changed",
        extra={"flight_id": flight_id, "status": flight.status.value},
    )
    return to_response(flight)


@app.post("/flights/<flight_id>/recount")
def recount_available_seats(flight_id: str):
    require_admin(app)
    flight = admin_service.recount(FlightId(value=flight_id))
    logger.info(
        "Available seats recounted",
        extra={"flight_id": flight_id, "available_seats": flight.available_seats},
    )
    return to_response(flight)


@app.delete("/flights/<flight_id>")
def delete_flight(flight_id: str):
    require_admin(app)
    admin_service.delete(FlightId(value=flight_id))
    logger.info("Flight deleted", extra={"flight_id": flight_id})
    return {"message": "Flight deleted successfully"}


@app.patch("/flights/<flight_id>/seats/<seat_number>")
def update_seat(flight_id: str, seat_number: str):
    require_admin(app)
    request = UpdateSeatRequest.model_validate(request_body(app))
    seat = admin_service.update_seat(
        FlightId(value=flight_id), SeatNumber.parse(seat_number), request.seat_class
    )
    return to_seat_response(seat)


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """Flight service Lambda handler"""
    return app.resolve(event, context)
