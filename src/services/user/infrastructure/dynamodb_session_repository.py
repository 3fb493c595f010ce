from datetime import datetime, timezone

from services.shared.domain import IsoDateTime
from services.shared.infrastructure import get_table
from services.user.domain.entity import Session
from services.user.domain.repository import SessionRepository
from services.user.domain.value_object import SessionId, UserId


def session_key(session_id: SessionId) -> dict:
    return {"PK": f"SESSION#{session_id}", "SK": "SESSION"}


class DynamoDBSessionRepository(SessionRepository):
    """Sessions expire through the table's ``expires_at`` TTL (epoch seconds)"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table = get_table(table_name)

    def save(self, session: Session) -> None:
        self.table.put_item(
            Item={
                **session_key(session.id),
                "entity_type": "SESSION",
                "session_id": str(session.id),
                "user_id": str(session.user_id),
                "email": session.email,
                "is_admin": session.is_admin,
                "expires_at": session.expires_at.to_epoch_seconds(),
            }
        )

    def find_by_id(self, session_id: SessionId) -> Session | None:
        response = self.table.get_item(Key=session_key(session_id))
        item = response.get("Item")
        if not item:
            return None
        session = Session(
            id=SessionId(value=item["session_id"]),
            user_id=UserId(value=item["user_id"]),
            email=item["email"],
            is_admin=bool(item.get("is_admin", False)),
            expires_at=IsoDateTime(
                value=datetime.fromtimestamp(int(item["expires_at"]), tz=timezone.utc)
            ),
        )
        if session.is_expired():
            return None
        return session

    def delete(self, session_id: SessionId) -> None:
        self.table.delete_item(Key=session_key(session_id))
