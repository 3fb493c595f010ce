from decimal import Decimal
from typing import TypedDict

from services.payment.domain.entity import Payment
from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.value_object import (
    PaymentId,
    StripeReference,
    XenditReference,
)
from services.shared.domain import Currency, IsoDateTime, Money


class PaymentDetails(TypedDict, total=False):
    """Input data for a payment record"""

    booking_id: str
    method: str
    amount: Decimal
    currency: str
    status: str
    stripe_payment_intent_id: str
    stripe_customer_id: str
    receipt_url: str
    transaction_id: str
    paid_at: str
    xendit_charge_id: str
    xendit_reference_id: str
    xendit_checkout_url: str
    xendit_channel_code: str
    xendit_redirect_success_url: str
    xendit_redirect_failure_url: str


class PaymentFactory:
    """Payment factory

    - Currency defaults to PHP and is upper-cased
    - ``paid_at`` is parsed when present
    """

    def create(self, user_id: str | None, details: PaymentDetails) -> Payment:
        paid_at = details.get("paid_at")
        return Payment(
            id=PaymentId.generate(),
            booking_id=details["booking_id"],
            user_id=user_id,
            method=PaymentMethod(details["method"]),
            amount=Money(
                amount=details["amount"],
                currency=Currency(details.get("currency") or "PHP"),
            ),
            status=PaymentStatus(details.get("status") or PaymentStatus.PROCESSING),
            stripe=StripeReference(
                payment_intent_id=details.get("stripe_payment_intent_id"),
                customer_id=details.get("stripe_customer_id"),
                receipt_url=details.get("receipt_url"),
            ),
            xendit=XenditReference(
                charge_id=details.get("xendit_charge_id"),
                reference_id=details.get("xendit_reference_id"),
                checkout_url=details.get("xendit_checkout_url"),
                channel_code=details.get("xendit_channel_code"),
                redirect_success_url=details.get("xendit_redirect_success_url"),
                redirect_failure_url=details.get("xendit_redirect_failure_url"),
            ),
            transaction_id=details.get("transaction_id"),
            paid_at=IsoDateTime.from_string(paid_at) if paid_at else None,
        )
