import hmac
from decimal import Decimal

from services.booking.applications.update_booking_status import BookingStatusService
from services.payment.applications.booking_confirmation import confirm_paid_booking
from services.payment.domain.entity import Payment
from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.factory import PaymentFactory
from services.payment.domain.repository import PaymentRepository
from services.shared.domain import IsoDateTime
from services.shared.domain.exception import AuthenticationException

STRIPE_SUCCEEDED = "payment_intent.succeeded"
STRIPE_FAILED = "payment_intent.payment_failed"
XENDIT_SUCCEEDED = "SUCCEEDED"
XENDIT_FAILED = "FAILED"


def verify_callback_token(received: str | None, expected: str) -> None:
    """Constant-time comparison of Xendit's x-callback-token header"""
    if not received or not hmac.compare_digest(received, expected):
        raise AuthenticationException("Invalid callback token")


class PaymentWebhookService:
    """Apply asynchronous provider notifications to payments

    Each handler returns a short outcome string that is logged and echoed
    back to the provider.
    """

    def __init__(
        self,
        repository: PaymentRepository,
        factory: PaymentFactory,
        booking_status_service: BookingStatusService,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._booking_status_service = booking_status_service

    def handle_stripe_event(self, event: dict) -> str:
        event_type = event.get("type")
        if event_type not in (STRIPE_SUCCEEDED, STRIPE_FAILED):
            return "ignored"

        intent = event["data"]["object"]
        payment = self._repository.find_by_stripe_intent(intent["id"])
        if event_type == STRIPE_FAILED:
            if payment is None:
                return "unknown_payment"
            return self._fail(payment)

        if payment is None:
            payment = self._record_from_intent(intent)
            if payment is None:
                return "unknown_payment"
        else:
            expected_status = payment.status
            if not payment.succeed(transaction_id=intent.get("latest_charge")):
                return "already_succeeded"
            self._repository.update(payment, expected_status=expected_status)
        confirm_paid_booking(self._booking_status_service, payment)
        return "succeeded"

    def handle_xendit_callback(self, payload: dict) -> str:
        data = payload.get("data", payload)
        reference_id = data.get("reference_id")
        if not reference_id:
            raise ValueError("reference_id is required")
        payment = self._repository.find_by_xendit_reference(reference_id)
        if payment is None:
            return "unknown_payment"

        status = data.get("status")
        if status == XENDIT_FAILED:
            return self._fail(payment)
        if status != XENDIT_SUCCEEDED:
            return "ignored"

        expected_status = payment.status
        if not payment.succeed(transaction_id=data.get("id")):
            return "already_succeeded"
        self._repository.update(payment, expected_status=expected_status)
        confirm_paid_booking(self._booking_status_service, payment)
        return "succeeded"

    def _fail(self, payment: Payment) -> str:
        expected_status = payment.status
        if payment.status == PaymentStatus.SUCCEEDED or not payment.fail():
            return "ignored"
        self._repository.update(payment, expected_status=expected_status)
        return "failed"

    def _record_from_intent(self, intent: dict) -> Payment | None:
        """Card payment the client never recorded; needs booking metadata"""
        metadata = intent.get("metadata") or {}
        booking_id = metadata.get("booking_id")
        if not booking_id:
            return None
        payment = self._factory.create(
            metadata.get("user_id"),
            {
                "booking_id": booking_id,
                "method": PaymentMethod.CARD.value,
                "amount": Decimal(intent["amount"]) / 100,
                "currency": str(intent.get("currency", "php")).upper(),
                "status": PaymentStatus.SUCCEEDED.value,
                "stripe_payment_intent_id": intent["id"],
                "stripe_customer_id": intent.get("customer"),
                "transaction_id": intent.get("latest_charge"),
                "paid_at": str(IsoDateTime.now()),
            },
        )
        self._repository.save(payment)
        return payment
