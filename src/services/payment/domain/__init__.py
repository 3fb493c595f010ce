from .entity import Payment as Payment
from .enum import PaymentMethod as PaymentMethod
from .enum import PaymentStatus as PaymentStatus
from .factory import PaymentDetails as PaymentDetails
from .factory import PaymentFactory as PaymentFactory
from .repository import PaymentRepository as PaymentRepository
from .value_object import PaymentId as PaymentId
from .value_object import StripeReference as StripeReference
from .value_object import XenditReference as XenditReference
