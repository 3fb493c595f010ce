from decimal import Decimal

from services.payment.infrastructure.stripe_gateway import PaymentIntent, StripeGateway
from services.shared.domain import Currency, Money


class PaymentIntentService:
    """Start a Stripe card payment"""

    def __init__(self, gateway: StripeGateway, currency: str = "PHP") -> None:
        self._gateway = gateway
        self._currency = Currency(currency)

    def create(
        self, amount: Decimal, user_id: str, booking_id: str | None = None
    ) -> PaymentIntent:
        """``amount`` is in major units (pesos); Stripe receives centavos"""
        metadata = {"user_id": user_id}
        if booking_id:
            metadata["booking_id"] = booking_id
        return self._gateway.create_payment_intent(
            Money(amount=amount, currency=self._currency), metadata
        )
