from dataclasses import replace

from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.value_object import (
    PaymentId,
    StripeReference,
    XenditReference,
)
from services.shared.domain import AggregateRoot, IsoDateTime, Money
from services.shared.domain.exception import BusinessRuleViolationException


class Payment(AggregateRoot[PaymentId]):
    """Payment for a booking"""

    def __init__(
        self,
        id: PaymentId,
        booking_id: str,
        user_id: str | None,
        method: PaymentMethod,
        amount: Money,
        status: PaymentStatus = PaymentStatus.PROCESSING,
        stripe: StripeReference | None = None,
        xendit: XenditReference | None = None,
        transaction_id: str | None = None,
        paid_at: IsoDateTime | None = None,
        created_at: IsoDateTime | None = None,
    ) -> None:
        super().__init__(id)
        if not booking_id:
            raise BusinessRuleViolationException("A payment must reference a booking")
        self._booking_id = booking_id
        self._user_id = user_id
        self._method = method
        self._amount = amount
        self._status = status
        self._stripe = stripe or StripeReference()
        self._xendit = xendit or XenditReference()
        self._transaction_id = transaction_id
        self._paid_at = paid_at
        self._created_at = created_at or IsoDateTime.now()

    @property
    def booking_id(self) -> str:
        return self._booking_id

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def method(self) -> PaymentMethod:
        return self._method

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def stripe(self) -> StripeReference:
        return self._stripe

    @property
    def xendit(self) -> XenditReference:
        return self._xendit

    @property
    def transaction_id(self) -> str | None:
        return self._transaction_id

    @property
    def paid_at(self) -> IsoDateTime | None:
        return self._paid_at

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def is_succeeded(self) -> bool:
        return self._status == PaymentStatus.SUCCEEDED

    def succeed(
        self,
        paid_at: IsoDateTime | None = None,
        transaction_id: str | None = None,
        receipt_url: str | None = None,
    ) -> bool:
        """Mark the payment as paid; returns False if it already was"""
        if self._status == PaymentStatus.SUCCEEDED:
            return False
        self._status = PaymentStatus.SUCCEEDED
        self._paid_at = paid_at or self._paid_at or IsoDateTime.now()
        if transaction_id:
            self._transaction_id = transaction_id
        if receipt_url:
            self._stripe = replace(self._stripe, receipt_url=receipt_url)
        return True

    def fail(self) -> bool:
        if self._status == PaymentStatus.FAILED:
            return False
        if self._status == PaymentStatus.SUCCEEDED:
            raise BusinessRuleViolationException(
                "Cannot fail a payment that already succeeded"
            )
        self._status = PaymentStatus.FAILED
        return True
