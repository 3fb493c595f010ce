from services.flight.domain.value_object import FlightId, SeatNumber

FLIGHT_SK = "FLIGHT"
SEAT_SK_PREFIX = "SEAT#"
FLIGHTS_GSI_PK = "FLIGHTS"


def flight_pk(flight_id: FlightId | str) -> str:
    return f"FLIGHT#{flight_id}"


def flight_key(flight_id: FlightId | str) -> dict:
    return {"PK": flight_pk(flight_id), "SK": FLIGHT_SK}


def seat_key(flight_id: FlightId | str, seat_number: SeatNumber) -> dict:
    return {"PK": flight_pk(flight_id), "SK": f"{SEAT_SK_PREFIX}{seat_number.sort_key}"}


def route_pk(origin: str, destination: str) -> str:
    return f"ROUTE#{origin.strip().upper()}#{destination.strip().upper()}"
