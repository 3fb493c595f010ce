from dataclasses import dataclass

import stripe
from aws_lambda_powertools import Logger

from services.shared.config import get_secret
from services.shared.domain import Money
from services.shared.domain.exception import (
    AuthenticationException,
    PaymentGatewayException,
)

logger = Logger(child=True)


@dataclass(frozen=True)
class PaymentIntent:
    id: str
    client_secret: str


class StripeGateway:
    """Thin wrapper over the Stripe SDK

    Keys are read per call so a cold start never fails on a missing secret.
    """

    def create_payment_intent(self, amount: Money, metadata: dict[str, str]) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=get_secret("STRIPE_SECRET_KEY"),
                amount=amount.to_minor_units(),
                currency=str(amount.currency).lower(),
                automatic_payment_methods={"enabled": True},
                metadata=metadata,
            )
        except stripe.StripeError as e:
            logger.error(
                "Stripe rejected the payment intent",
                extra={"stripe_error": e.user_message or str(e), "code": e.code},
            )
            raise PaymentGatewayException(
                e.user_message or "Could not create the payment intent"
            ) from e
        return PaymentIntent(id=intent.id, client_secret=intent.client_secret)

    def construct_event(self, payload: str, signature: str) -> dict:
        """Verify a webhook signature and parse the event"""
        try:
            event = stripe.Webhook.construct_event(
                payload=payload,
                sig_header=signature,
                secret=get_secret("STRIPE_WEBHOOK_SECRET"),
            )
        except stripe.SignatureVerificationError as e:
            raise AuthenticationException("Invalid Stripe signature") from e
        return event.to_dict()
