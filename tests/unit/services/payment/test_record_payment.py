from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from services.booking.applications.query_bookings import BookingQueryService
from services.payment.applications.query_payments import PaymentQueryService
from services.payment.applications.record_payment import RecordPaymentService
from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.factory import PaymentFactory
from services.shared.domain.exception import (
    AuthorizationException,
    BusinessRuleViolationException,
    ResourceNotFoundException,
)


@pytest.fixture
def repository():
    return MagicMock()


@pytest.fixture
def booking_repository(create_booking):
    mock = MagicMock()
    mock.find_by_id.return_value = create_booking(booking_id="BK-1", user_id="USR-OWNER")
    return mock


@pytest.fixture
def booking_status_service():
    return MagicMock()


@pytest.fixture
def service(repository, booking_repository, booking_status_service):
    return RecordPaymentService(
        repository=repository,
        factory=PaymentFactory(),
        booking_query_service=BookingQueryService(booking_repository),
        booking_status_service=booking_status_service,
    )


def _details(status: str) -> dict:
    return {
        "booking_id": "BK-1",
        "method": "card",
        "amount": Decimal("5000"),
        "status": status,
        "stripe_payment_intent_id": "pi_123",
    }


class TestRecordPayment:
    def test_succeeded_payment_confirms_booking(
        self, service, repository, booking_status_service, owner
    ):
        payment = service.record(owner, _details("succeeded"))

        repository.save.assert_called_once_with(payment)
        assert payment.user_id == "USR-OWNER"
        assert str(booking_status_service.confirm.call_args[0][0]) == "BK-1"

    def test_processing_payment_leaves_booking_pending(
        self, service, booking_status_service, owner
    ):
        service.record(owner, _details("processing"))

        booking_status_service.confirm.assert_not_called()

    def test_unconfirmable_booking_does_not_undo_payment(
        self, service, repository, booking_status_service, owner
    ):
        booking_status_service.confirm.side_effect = BusinessRuleViolationException(
            "Booking hold has expired"
        )

        payment = service.record(owner, _details("succeeded"))

        assert payment.is_succeeded
        repository.save.assert_called_once()

    def test_someone_elses_booking_is_forbidden(
        self, service, repository, booking_status_service, stranger
    ):
        with pytest.raises(AuthorizationException):
            service.record(stranger, _details("succeeded"))

        repository.save.assert_not_called()
        booking_status_service.confirm.assert_not_called()

    def test_admin_may_record_for_any_booking(self, service, repository, admin):
        service.record(admin, _details("succeeded"))

        repository.save.assert_called_once()

    def test_unknown_booking(self, service, repository, booking_repository, owner):
        booking_repository.find_by_id.return_value = None

        with pytest.raises(ResourceNotFoundException):
            service.record(owner, _details("succeeded"))

        repository.save.assert_not_called()


class TestPaymentQueries:
    def test_succeeded_gcash_payment(self, repository, create_payment):
        repository.list_by_xendit_reference.return_value = [
            create_payment(status=PaymentStatus.SUCCEEDED)
        ]

        payment = PaymentQueryService(repository).find_succeeded_gcash("demo-gcash-1")

        assert payment is not None
        repository.list_by_xendit_reference.assert_called_once_with("demo-gcash-1")

    def test_later_unpaid_record_does_not_hide_succeeded_one(
        self, repository, create_payment
    ):
        repository.list_by_xendit_reference.return_value = [
            create_payment(payment_id="PAY-RETRY", status=PaymentStatus.PROCESSING),
            create_payment(payment_id="PAY-PAID", status=PaymentStatus.SUCCEEDED),
        ]

        payment = PaymentQueryService(repository).find_succeeded_gcash("demo-gcash-1")

        assert str(payment.id) == "PAY-PAID"

    @pytest.mark.parametrize(
        ("method", "status"),
        [
            (PaymentMethod.GCASH, PaymentStatus.PROCESSING),
            (PaymentMethod.CARD, PaymentStatus.SUCCEEDED),
        ],
    )
    def test_other_payments_do_not_verify(self, repository, create_payment, method, status):
        repository.list_by_xendit_reference.return_value = [
            create_payment(method=method, status=status)
        ]

        assert PaymentQueryService(repository).find_succeeded_gcash("ref") is None

    def test_unknown_reference(self, repository):
        repository.list_by_xendit_reference.return_value = []

        assert PaymentQueryService(repository).find_succeeded_gcash("ref") is None
