from services.shared.domain import Entity, IsoDateTime
from services.user.domain.value_object import SessionId, UserId


class Session(Entity[SessionId]):
    """Server-side login session (DynamoDB TTL removes it eventually)"""

    def __init__(
        self,
        id: SessionId,
        user_id: UserId,
        email: str,
        is_admin: bool,
        expires_at: IsoDateTime,
    ) -> None:
        super().__init__(id)
        self._user_id = user_id
        self._email = email
        self._is_admin = is_admin
        self._expires_at = expires_at

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def email(self) -> str:
        return self._email

    @property
    def is_admin(self) -> bool:
        return self._is_admin

    @property
    def expires_at(self) -> IsoDateTime:
        return self._expires_at

    def is_expired(self, now: IsoDateTime | None = None) -> bool:
        """TTL deletion lags, so expiry is checked on every read"""
        return not (now or IsoDateTime.now()).is_before(self._expires_at)
