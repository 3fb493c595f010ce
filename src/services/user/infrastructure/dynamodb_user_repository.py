from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.shared.domain import IsoDateTime
from services.shared.domain.exception import (
    DuplicateResourceException,
    ResourceNotFoundException,
)
from services.shared.infrastructure import get_table, query_all, transact_write
from services.user.domain.entity import User
from services.user.domain.repository import UserRepository
from services.user.domain.value_object import Email, UserId

USERS_GSI_PK = "USERS"


def user_key(user_id: UserId) -> dict:
    return {"PK": f"USER#{user_id}", "SK": "PROFILE"}


def email_key(email: Email) -> dict:
    return {"PK": f"EMAIL#{email}", "SK": "EMAIL"}


def google_key(google_id: str) -> dict:
    return {"PK": f"GOOGLE#{google_id}", "SK": "GOOGLE"}


class DynamoDBUserRepository(UserRepository):
    """UserRepository backed by the single table

    Profile item: PK=USER#<id> SK=PROFILE (GSI2 USERS / <created_at>)
    Uniqueness items EMAIL#<email> and GOOGLE#<google_id> point at the
    profile and are written in the same transaction.
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table = get_table(table_name)

    def save(self, user: User) -> None:
        actions = [
            {
                "Put": {
                    "Item": self._to_item(user),
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            },
            {
                "Put": {
                    "Item": {**email_key(user.email), "user_id": str(user.id)},
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            },
        ]
        if user.google_id:
            actions.append(
                {
                    "Put": {
                        "Item": {**google_key(user.google_id), "user_id": str(user.id)},
                        "ConditionExpression": "attribute_not_exists(PK)",
                    }
                }
            )
        transact_write(
            self.table,
            actions,
            DuplicateResourceException("Email is already registered"),
        )

    def find_by_id(self, user_id: UserId) -> User | None:
        response = self.table.get_item(Key=user_key(user_id), ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_email(self, email: Email) -> User | None:
        return self._follow_pointer(email_key(email))

    def find_by_google_id(self, google_id: str) -> User | None:
        return self._follow_pointer(google_key(google_id))

    def list_all(self) -> list[User]:
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(USERS_GSI_PK),
            ScanIndexForward=False,
        )
        return [self._to_entity(item) for item in items]

    def set_admin(self, user: User) -> None:
        try:
            self.table.update_item(
                Key=user_key(user.id),
                UpdateExpression="SET is_admin = :is_admin",
                ExpressionAttributeValues={":is_admin": user.is_admin},
                ConditionExpression=Attr("PK").exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ResourceNotFoundException(f"User not found: {user.id}")
            raise

    def _follow_pointer(self, key: dict) -> User | None:
        response = self.table.get_item(Key=key, ConsistentRead=True)
        item = response.get("Item")
        if not item:
            return None
        return self.find_by_id(UserId(value=item["user_id"]))

    def _to_item(self, user: User) -> dict:
        item = {
            **user_key(user.id),
            "entity_type": "USER",
            "user_id": str(user.id),
            "email": str(user.email),
            "full_name": user.full_name,
            "is_oauth_user": user.is_oauth_user,
            "is_admin": user.is_admin,
            "created_at": str(user.created_at),
            "GSI2PK": USERS_GSI_PK,
            "GSI2SK": str(user.created_at),
        }
        optional = {
            "password_hash": user.password_hash,
            "mobile_no": user.mobile_no,
            "google_id": user.google_id,
            "profile_picture": user.profile_picture,
        }
        item.update({k: v for k, v in optional.items() if v})
        return item

    def _to_entity(self, item: dict) -> User:
        return User(
            id=UserId(value=item["user_id"]),
            email=Email(item["email"]),
            full_name=item["full_name"],
            password_hash=item.get("password_hash"),
            mobile_no=item.get("mobile_no"),
            google_id=item.get("google_id"),
            profile_picture=item.get("profile_picture"),
            is_oauth_user=bool(item.get("is_oauth_user", False)),
            is_admin=bool(item.get("is_admin", False)),
            created_at=IsoDateTime.from_string(item["created_at"]),
        )
