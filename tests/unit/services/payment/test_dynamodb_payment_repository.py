from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from services.payment.domain.enum import PaymentStatus
from services.payment.infrastructure.dynamodb_payment_repository import (
    DynamoDBPaymentRepository,
)
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)


def _conditional_check_failed() -> ClientError:
    return ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException", "Message": "failed"}},
        "PutItem",
    )


@pytest.fixture
def table():
    return MagicMock()


@pytest.fixture
def repository(table):
    with patch(
        "services.payment.infrastructure.dynamodb_payment_repository.get_table",
        return_value=table,
    ):
        yield DynamoDBPaymentRepository()


class TestSave:
    def test_xendit_reference_is_the_lookup_key(self, repository, table, create_payment):
        repository.save(create_payment(reference_id="demo-gcash-1"))

        item = table.put_item.call_args.kwargs["Item"]
        assert item["GSI3PK"] == "XENDIT_REF#demo-gcash-1"
        assert item["GSI1PK"] == "USER#USR-OWNER"
        assert item["amount"] == "5000"

    def test_stripe_intent_is_the_lookup_key(self, repository, table, create_payment):
        repository.save(create_payment(payment_intent_id="pi_123"))

        item = table.put_item.call_args.kwargs["Item"]
        assert item["GSI3PK"] == "STRIPE_PI#pi_123"
        assert item["stripe_payment_intent_id"] == "pi_123"

    def test_anonymous_payment_has_no_user_index(self, repository, table, create_payment):
        repository.save(create_payment(user_id=None))

        item = table.put_item.call_args.kwargs["Item"]
        assert "GSI1PK" not in item
        assert "GSI3PK" not in item

    def test_duplicate(self, repository, table, create_payment):
        table.put_item.side_effect = _conditional_check_failed()

        with pytest.raises(DuplicateResourceException):
            repository.save(create_payment())


class TestLookup:
    def test_reads_item_after_index_hit(self, repository, table, create_payment):
        payment = create_payment(reference_id="demo-gcash-1")
        table.query.return_value = {"Items": [{"payment_id": "PAY-TEST00000001"}]}
        table.get_item.return_value = {"Item": repository._to_item(payment)}

        found = repository.find_by_xendit_reference("demo-gcash-1")

        assert found.id == payment.id
        assert found.xendit.reference_id == "demo-gcash-1"
        assert table.get_item.call_args.kwargs["ConsistentRead"] is True

    def test_lists_every_payment_for_a_reference(self, repository, table, create_payment):
        retried = create_payment(payment_id="PAY-RETRY", reference_id="demo-gcash-1")
        paid = create_payment(payment_id="PAY-PAID", reference_id="demo-gcash-1")
        table.query.return_value = {
            "Items": [repository._to_item(retried), repository._to_item(paid)]
        }

        found = repository.list_by_xendit_reference("demo-gcash-1")

        assert [str(p.id) for p in found] == ["PAY-RETRY", "PAY-PAID"]
        kwargs = table.query.call_args.kwargs
        assert kwargs["IndexName"] == "GSI3"
        assert "Limit" not in kwargs

    def test_no_match(self, repository, table):
        table.query.return_value = {"Items": []}

        assert repository.find_by_stripe_intent("pi_404") is None
        table.get_item.assert_not_called()


class TestUpdate:
    def test_conditioned_on_previous_status(self, repository, table, create_payment):
        payment = create_payment()
        payment.succeed()

        repository.update(payment, expected_status=PaymentStatus.PROCESSING)

        item = table.put_item.call_args.kwargs["Item"]
        assert item["status"] == "succeeded"
        assert "paid_at" in item

    def test_status_changed_meanwhile(self, repository, table, create_payment):
        table.put_item.side_effect = _conditional_check_failed()

        with pytest.raises(OptimisticLockException):
            repository.update(create_payment(), expected_status=PaymentStatus.PROCESSING)
