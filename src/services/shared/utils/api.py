import json
from typing import Any

from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.event_handler.exceptions import ServiceError
from pydantic import ValidationError

from services.shared.domain.exception import (
    AuthenticationException,
    AuthorizationException,
    BusinessRuleViolationException,
    ConfigurationException,
    DuplicateResourceException,
    OptimisticLockException,
    PaymentGatewayException,
    ResourceNotFoundException,
)

from .http_response import json_response
from .principal import Principal

logger = Logger(child=True)

_STATUS_BY_EXCEPTION: list[tuple[type[Exception], int]] = [
    (ResourceNotFoundException, 404),
    (BusinessRuleViolationException, 409),
    (DuplicateResourceException, 409),
    (OptimisticLockException, 409),
    (AuthenticationException, 401),
    (AuthorizationException, 403),
    (PaymentGatewayException, 502),
]


def _validation_message(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        parts.append(f"{location}: {detail.get('msg')}" if location else detail.get("msg"))
    return "; ".join(parts)


def register_exception_handlers(app: APIGatewayRestResolver) -> None:
    """Map domain and validation errors to JSON error responses"""

    def _domain_handler(status_code: int):
        def handle(ex: Exception) -> Response:
            logger.info(
                "Request rejected",
                extra={"status_code": status_code, "reason": str(ex)},
            )
            return json_response(status_code, {"message": str(ex)})

        return handle

    for exception_type, status_code in _STATUS_BY_EXCEPTION:
        app.exception_handler(exception_type)(_domain_handler(status_code))

    @app.exception_handler(ValidationError)
    def handle_validation_error(ex: ValidationError) -> Response:
        return json_response(
            400,
            {"message": "Invalid request", "error": _validation_message(ex)},
        )

    @app.exception_handler(ValueError)
    def handle_value_error(ex: ValueError) -> Response:
        return json_response(400, {"message": str(ex)})

    @app.exception_handler(ConfigurationException)
    def handle_configuration_error(ex: ConfigurationException) -> Response:
        logger.error("Service misconfigured", extra={"reason": str(ex)})
        return json_response(500, {"message": "Internal server error"})

    @app.exception_handler(Exception)
    def handle_unexpected_error(ex: Exception) -> Response:
        if isinstance(ex, ServiceError):
            return json_response(ex.status_code, {"message": ex.msg})
        logger.exception("Unhandled error while processing request")
        return json_response(500, {"message": "Internal server error"})


def current_principal(app: APIGatewayRestResolver) -> Principal:
    """Identity of the caller, as set by the Lambda authorizer"""
    request_context = app.current_event.raw_event.get("requestContext") or {}
    principal = Principal.from_context(request_context.get("authorizer") or {})
    if principal is None:
        raise AuthenticationException("Authentication required")
    return principal


def require_admin(app: APIGatewayRestResolver) -> Principal:
    principal = current_principal(app)
    if not principal.is_admin:
        raise AuthorizationException("Admin access required")
    return principal


def request_body(app: APIGatewayRestResolver) -> Any:
    """Decoded JSON body of the current request ({} when empty)"""
    if not app.current_event.body:
        return {}
    try:
        return app.current_event.json_body
    except json.JSONDecodeError as e:
        raise ValueError("Request body must be valid JSON") from e
