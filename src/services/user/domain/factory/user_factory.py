from dataclasses import dataclass
from datetime import timedelta

from services.shared.domain import IsoDateTime
from services.user.domain.entity import Session, User
from services.user.domain.value_object import Email, SessionId, UserId


@dataclass(frozen=True)
class GoogleProfile:
    """The subset of Google's userinfo response we keep"""

    google_id: str
    email: str
    name: str
    picture: str | None = None
    email_verified: bool = False


class UserFactory:
    """Factory for users and their sessions"""

    def create_with_password(
        self,
        email: str,
        password_hash: str,
        full_name: str,
        mobile_no: str | None = None,
    ) -> User:
        return User(
            id=UserId.generate(),
            email=Email(email),
            full_name=full_name,
            password_hash=password_hash,
            mobile_no=mobile_no,
        )

    def create_from_google(self, profile: GoogleProfile) -> User:
        return User(
            id=UserId.generate(),
            email=Email(profile.email),
            full_name=profile.name or profile.email,
            google_id=profile.google_id,
            profile_picture=profile.picture,
            is_oauth_user=True,
        )

    def create_session(self, user: User, ttl_seconds: int) -> Session:
        return Session(
            id=SessionId.generate(),
            user_id=user.id,
            email=str(user.email),
            is_admin=user.is_admin,
            expires_at=IsoDateTime.now().plus(timedelta(seconds=ttl_seconds)),
        )
