from .payment_id import PaymentId
from .provider_reference import StripeReference, XenditReference

__all__ = ["PaymentId", "StripeReference", "XenditReference"]
