from dataclasses import dataclass, fields


@dataclass(frozen=True)
class StripeReference:
    """Stripe identifiers attached to a card payment"""

    payment_intent_id: str | None = None
    customer_id: str | None = None
    receipt_url: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass(frozen=True)
class XenditReference:
    """Xendit e-wallet charge identifiers (GCash and friends)

    ``reference_id`` is our own id, sent to Xendit when the charge is made.
    """

    charge_id: str | None = None
    reference_id: str | None = None
    checkout_url: str | None = None
    channel_code: str | None = None
    redirect_success_url: str | None = None
    redirect_failure_url: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))
