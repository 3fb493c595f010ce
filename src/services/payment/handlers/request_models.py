from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator

from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.factory import PaymentDetails
from services.shared.utils import to_decimal


class PaymentIntentRequest(BaseModel):
    """Stripe payment-intent request schema"""

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount in pesos; converted to centavos for Stripe",
        examples=[2499.50],
    )
    booking_id: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return to_decimal(v)


class RecordPaymentRequest(BaseModel):
    """Payment record as reported by the client after checkout"""

    booking_id: str = Field(..., min_length=1)
    method: PaymentMethod
    amount: Decimal = Field(..., ge=0, description="Amount (must not be negative)")
    status: PaymentStatus = PaymentStatus.PROCESSING
    currency: str = Field(default="PHP", min_length=3, max_length=3)

    stripe_payment_intent_id: str | None = None
    stripe_customer_id: str | None = None
    receipt_url: str | None = None

    xendit_charge_id: str | None = None
    xendit_reference_id: str | None = None
    xendit_checkout_url: str | None = None
    xendit_channel_code: str | None = None
    xendit_redirect_success_url: str | None = None
    xendit_redirect_failure_url: str | None = None

    transaction_id: str | None = None
    paid_at: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return to_decimal(v)

    @field_validator("currency")
    @classmethod
    def upper_case_currency(cls, v: str) -> str:
        return v.upper()

    def to_details(self) -> PaymentDetails:
        data = self.model_dump(exclude_none=True)
        data["method"] = self.method.value
        data["status"] = self.status.value
        return data


class GcashChargeRequest(BaseModel):
    amount: Decimal = Field(..., gt=0)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20, examples=["09171234567"])

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return to_decimal(v)
