import os
from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

import boto3
from botocore.exceptions import ClientError

from services.shared.domain.exception import DomainException

T = TypeVar("T")

# DynamoDB rejects transactions with more than 100 actions
MAX_TRANSACT_ITEMS = 100

# another writer touched one of the items, or a condition no longer holds
CONFLICT_REASONS = frozenset({"ConditionalCheckFailed", "TransactionConflict"})


def get_table(table_name: str | None = None):
    """Resolve the single application table"""
    name = table_name or os.getenv("TABLE_NAME")
    dynamodb = boto3.resource("dynamodb")
    return dynamodb.Table(name)


def query_all(table, **kwargs: Any) -> list[dict]:
    """Run a query and follow LastEvaluatedKey until every page is read"""
    items: list[dict] = []
    while True:
        response = table.query(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key


def chunked(values: Iterable[T], size: int) -> Iterator[list[T]]:
    chunk: list[T] = []
    for value in values:
        chunk.append(value)
        if len(chunk) == size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def transact_write(
    table,
    actions: list[dict],
    on_condition_failure: DomainException,
) -> None:
    """Run TransactWriteItems against the table

    ``actions`` are ``{"Put"|"Update"|"Delete"|"ConditionCheck": {...}}``
    entries without ``TableName``. When any condition fails, or a concurrent write
    conflicts with one of the items, the whole transaction is rolled back by
    DynamoDB and ``on_condition_failure`` is raised.
    """
    if len(actions) > MAX_TRANSACT_ITEMS:
        raise ValueError(
            f"Transaction has {len(actions)} actions, limit is {MAX_TRANSACT_ITEMS}"
        )

    transact_items = []
    for action in actions:
        ((operation, params),) = action.items()
        transact_items.append({operation: {"TableName": table.name, **params}})

    try:
        table.meta.client.transact_write_items(TransactItems=transact_items)
    except ClientError as e:
        error = e.response["Error"]
        if error["Code"] == "TransactionCanceledException":
            reasons = e.response.get("CancellationReasons") or []
            message = error.get("Message", "")
            if any(r.get("Code") in CONFLICT_REASONS for r in reasons) or any(
                code in message for code in CONFLICT_REASONS
            ):
                raise on_condition_failure from e
        raise
