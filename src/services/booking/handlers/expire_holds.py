from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.expire_bookings import ExpireBookingsService
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)

logger = Logger()

repository = DynamoDBBookingRepository()
service = ExpireBookingsService(repository=repository)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """Scheduled job: fail unpaid bookings and release their seats"""
    result = service.expire_stale()
    if result.skipped:
        logger.warning(
            "Skipped bookings that changed while expiring",
            extra={"booking_ids": result.skipped},
        )
    logger.info(
        "Expired stale bookings",
        extra={**result.summary(), "booking_ids": result.expired},
    )
    return result.summary()
