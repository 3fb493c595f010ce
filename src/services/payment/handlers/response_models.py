from __future__ import annotations

from pydantic import BaseModel

from services.payment.domain.entity.payment import Payment


class PaymentData(BaseModel):
    """Payment response model"""

    payment_id: str
    booking_id: str
    user_id: str | None
    method: str
    amount: str
    currency: str
    status: str
    stripe_payment_intent_id: str | None
    stripe_customer_id: str | None
    receipt_url: str | None
    xendit_charge_id: str | None
    xendit_reference_id: str | None
    xendit_checkout_url: str | None
    xendit_channel_code: str | None
    transaction_id: str | None
    paid_at: str | None
    created_at: str


def to_response(payment: Payment) -> dict:
    """Convert a Payment entity into a response dict"""
    return PaymentData(
        payment_id=str(payment.id),
        booking_id=payment.booking_id,
        user_id=payment.user_id,
        method=payment.method.value,
        amount=str(payment.amount.amount),
        currency=str(payment.amount.currency),
        status=payment.status.value,
        stripe_payment_intent_id=payment.stripe.payment_intent_id,
        stripe_customer_id=payment.stripe.customer_id,
        receipt_url=payment.stripe.receipt_url,
        xendit_charge_id=payment.xendit.charge_id,
        xendit_reference_id=payment.xendit.reference_id,
        xendit_checkout_url=payment.xendit.checkout_url,
        xendit_channel_code=payment.xendit.channel_code,
        transaction_id=payment.transaction_id,
        paid_at=str(payment.paid_at) if payment.paid_at else None,
        created_at=str(payment.created_at),
    ).model_dump()
