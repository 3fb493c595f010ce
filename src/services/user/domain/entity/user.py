from services.shared.domain import AggregateRoot, IsoDateTime
from services.shared.domain.exception import BusinessRuleViolationException
from services.user.domain.value_object import Email, UserId


class User(AggregateRoot[UserId]):
    """Registered user (password or Google account)"""

    def __init__(
        self,
        id: UserId,
        email: Email,
        full_name: str,
        password_hash: str | None = None,
        mobile_no: str | None = None,
        google_id: str | None = None,
        profile_picture: str | None = None,
        is_oauth_user: bool = False,
        is_admin: bool = False,
        created_at: IsoDateTime | None = None,
    ) -> None:
        super().__init__(id)
        self._email = email
        self._full_name = full_name.strip()
        self._password_hash = password_hash
        self._mobile_no = mobile_no
        self._google_id = google_id
        self._profile_picture = profile_picture
        self._is_oauth_user = is_oauth_user
        self._is_admin = is_admin
        self._created_at = created_at or IsoDateTime.now()

        if not self._full_name:
            raise BusinessRuleViolationException("Full name is required")
        if not self._is_oauth_user and not self._password_hash:
            raise BusinessRuleViolationException("A password is required")

    @property
    def email(self) -> Email:
        return self._email

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def mobile_no(self) -> str | None:
        return self._mobile_no

    @property
    def google_id(self) -> str | None:
        return self._google_id

    @property
    def profile_picture(self) -> str | None:
        return self._profile_picture

    @property
    def is_oauth_user(self) -> bool:
        return self._is_oauth_user

    @property
    def is_admin(self) -> bool:
        return self._is_admin

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def can_use_password(self) -> bool:
        return self._password_hash is not None

    def grant_admin(self) -> None:
        self._is_admin = True
