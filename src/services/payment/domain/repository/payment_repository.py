from abc import abstractmethod

from services.payment.domain.entity import Payment
from services.payment.domain.enum import PaymentStatus
from services.payment.domain.value_object import PaymentId
from services.shared.domain import Repository


class PaymentRepository(Repository[Payment, PaymentId]):
    """Payment repository"""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        raise NotImplementedError

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Payment]:
        """The user's payments, newest first"""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Payment]:
        """Every payment, newest first"""
        raise NotImplementedError

    @abstractmethod
    def find_by_xendit_reference(self, reference_id: str) -> Payment | None:
        raise NotImplementedError

    @abstractmethod
    def list_by_xendit_reference(self, reference_id: str) -> list[Payment]:
        """Every payment carrying the Xendit reference, newest first"""
        raise NotImplementedError

    @abstractmethod
    def find_by_stripe_intent(self, payment_intent_id: str) -> Payment | None:
        raise NotImplementedError

    @abstractmethod
    def update(self, payment: Payment, expected_status: PaymentStatus) -> None:
        """Persist a status change made from ``expected_status``"""
        raise NotImplementedError
