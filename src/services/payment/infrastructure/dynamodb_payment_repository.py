from decimal import Decimal

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.payment.domain.entity import Payment
from services.payment.domain.enum import PaymentMethod, PaymentStatus
from services.payment.domain.repository import PaymentRepository
from services.payment.domain.value_object import (
    PaymentId,
    StripeReference,
    XenditReference,
)
from services.shared.domain import Currency, IsoDateTime, Money
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)
from services.shared.infrastructure import get_table, query_all

PAYMENTS_GSI_PK = "PAYMENTS"

_STRIPE_ATTRIBUTES = {
    "payment_intent_id": "stripe_payment_intent_id",
    "customer_id": "stripe_customer_id",
    "receipt_url": "receipt_url",
}
_XENDIT_ATTRIBUTES = {
    "charge_id": "xendit_charge_id",
    "reference_id": "xendit_reference_id",
    "checkout_url": "xendit_checkout_url",
    "channel_code": "xendit_channel_code",
    "redirect_success_url": "xendit_redirect_success_url",
    "redirect_failure_url": "xendit_redirect_failure_url",
}


def payment_key(payment_id: PaymentId) -> dict:
    return {"PK": f"PAYMENT#{payment_id}", "SK": "PAYMENT"}


def _provider_lookup_key(payment: Payment) -> str | None:
    """GSI3 partition that finds a payment from the provider's callback"""
    if payment.xendit.reference_id:
        return f"XENDIT_REF#{payment.xendit.reference_id}"
    if payment.stripe.payment_intent_id:
        return f"STRIPE_PI#{payment.stripe.payment_intent_id}"
    return None


class DynamoDBPaymentRepository(PaymentRepository):
    """PaymentRepository backed by the single table

    Payment item: PK=PAYMENT#<id> SK=PAYMENT
      GSI1  USER#<user_id> / PAYMENT#<created_at>
      GSI2  PAYMENTS / <created_at>
      GSI3  XENDIT_REF#<reference_id> or STRIPE_PI#<intent_id> / <created_at>
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table = get_table(table_name)

    def save(self, payment: Payment) -> None:
        try:
            self.table.put_item(
                Item=self._to_item(payment),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Payment already exists: {payment.id}"
                )
            raise

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        response = self.table.get_item(Key=payment_key(payment_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def list_by_user(self, user_id: str) -> list[Payment]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"USER#{user_id}")
            & Key("GSI1SK").begins_with("PAYMENT#"),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def list_all(self) -> list[Payment]:
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(PAYMENTS_GSI_PK),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def find_by_xendit_reference(self, reference_id: str) -> Payment | None:
        return self._find_by_lookup_key(f"XENDIT_REF#{reference_id}")

    def list_by_xendit_reference(self, reference_id: str) -> list[Payment]:
        items = query_all(
            self.table,
            IndexName="GSI3",
            KeyConditionExpression=Key("GSI3PK").eq(f"XENDIT_REF#{reference_id}"),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def find_by_stripe_intent(self, payment_intent_id: str) -> Payment | None:
        return self._find_by_lookup_key(f"STRIPE_PI#{payment_intent_id}")

    def update(self, payment: Payment, expected_status: PaymentStatus) -> None:
        try:
            self.table.put_item(
                Item=self._to_item(payment),
                ConditionExpression=Attr("status").eq(expected_status.value),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Payment status conflict: "
                    f"expected {expected_status.value}, "
                    f"payment_id={payment.id}"
                )
            raise

    def _find_by_lookup_key(self, lookup_key: str) -> Payment | None:
        """Most recent payment carrying the provider reference"""
        response = self.table.query(
            IndexName="GSI3",
            KeyConditionExpression=Key("GSI3PK").eq(lookup_key),
            ScanIndexForward=False,
            Limit=1,
        )
        items = response.get("Items", [])
        if not items:
            return None
        # GSI reads are eventually consistent; re-read the item itself
        return self.find_by_id(PaymentId(value=items[0]["payment_id"]))

    def _to_item(self, payment: Payment) -> dict:
        item = {
            **payment_key(payment.id),
            "entity_type": "PAYMENT",
            "payment_id": str(payment.id),
            "booking_id": payment.booking_id,
            "method": payment.method.value,
            "amount": str(payment.amount.amount),
            "currency": str(payment.amount.currency),
            "status": payment.status.value,
            "created_at": str(payment.created_at),
            "GSI2PK": PAYMENTS_GSI_PK,
            "GSI2SK": str(payment.created_at),
        }
        if payment.user_id:
            item["user_id"] = payment.user_id
            item["GSI1PK"] = f"USER#{payment.user_id}"
            item["GSI1SK"] = f"PAYMENT#{payment.created_at}"
        lookup_key = _provider_lookup_key(payment)
        if lookup_key:
            item["GSI3PK"] = lookup_key
            item["GSI3SK"] = str(payment.created_at)
        for field_name, attribute in _STRIPE_ATTRIBUTES.items():
            value = getattr(payment.stripe, field_name)
            if value:
                item[attribute] = value
        for field_name, attribute in _XENDIT_ATTRIBUTES.items():
            value = getattr(payment.xendit, field_name)
            if value:
                item[attribute] = value
        if payment.transaction_id:
            item["transaction_id"] = payment.transaction_id
        if payment.paid_at:
            item["paid_at"] = str(payment.paid_at)
        return item

    def _to_entity(self, item: dict) -> Payment:
        """Convert a DynamoDB item into the aggregate"""
        paid_at = item.get("paid_at")
        return Payment(
            id=PaymentId(value=item["payment_id"]),
            booking_id=item["booking_id"],
            user_id=item.get("user_id"),
            method=PaymentMethod(item["method"]),
            amount=Money(
                amount=Decimal(item["amount"]),
                currency=Currency(item["currency"]),
            ),
            status=PaymentStatus(item["status"]),
            stripe=StripeReference(
                **{f: item.get(a) for f, a in _STRIPE_ATTRIBUTES.items()}
            ),
            xendit=XenditReference(
                **{f: item.get(a) for f, a in _XENDIT_ATTRIBUTES.items()}
            ),
            transaction_id=item.get("transaction_id"),
            paid_at=IsoDateTime.from_string(paid_at) if paid_at else None,
            created_at=IsoDateTime.from_string(item["created_at"]),
        )
