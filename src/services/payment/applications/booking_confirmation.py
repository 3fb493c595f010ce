from aws_lambda_powertools import Logger

from services.booking.applications.update_booking_status import BookingStatusService
from services.booking.domain.value_object import BookingId
from services.payment.domain.entity import Payment
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    OptimisticLockException,
    ResourceNotFoundException,
)

logger = Logger(child=True)


def confirm_paid_booking(status_service: BookingStatusService, payment: Payment) -> bool:
    """Confirm the booking behind a succeeded payment

    The payment is kept even when the booking can no longer be confirmed
    (expired, cancelled or deleted); that case is logged for follow-up.
    """
    try:
        status_service.confirm(BookingId(value=payment.booking_id))
    except (
        BusinessRuleViolationException,
        OptimisticLockException,
        ResourceNotFoundException,
    ) as e:
        logger.warning(
            "Payment succeeded but the booking could not be confirmed",
            extra={
                "payment_id": str(payment.id),
                "booking_id": payment.booking_id,
                "reason": str(e),
            },
        )
        return False
    return True
