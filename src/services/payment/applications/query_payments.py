from services.payment.domain.entity import Payment
from services.payment.domain.enum import PaymentMethod
from services.payment.domain.repository import PaymentRepository


class PaymentQueryService:
    def __init__(self, repository: PaymentRepository) -> None:
        self._repository = repository

    def list_all(self) -> list[Payment]:
        return self._repository.list_all()

    def list_for_user(self, user_id: str) -> list[Payment]:
        return self._repository.list_by_user(user_id)

    def find_succeeded_gcash(self, reference_id: str) -> Payment | None:
        """Succeeded GCash payment for a Xendit reference, if any"""
        for payment in self._repository.list_by_xendit_reference(reference_id):
            if payment.method == PaymentMethod.GCASH and payment.is_succeeded:
                return payment
        return None
