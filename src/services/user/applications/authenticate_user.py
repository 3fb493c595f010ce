from dataclasses import dataclass

from services.shared.domain.exception import (
    AuthenticationException,
    ResourceNotFoundException,
)
from services.shared.utils.principal import Principal
from services.user.domain.entity import Session, User
from services.user.domain.factory import UserFactory
from services.user.domain.repository import SessionRepository, UserRepository
from services.user.domain.value_object import Email, SessionId, UserId
from services.user.infrastructure.password_hasher import PasswordHasher
from services.user.infrastructure.token_service import TokenService

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    session: Session


class AuthenticationService:
    """Password login, sessions and access tokens"""

    def __init__(
        self,
        repository: UserRepository,
        session_repository: SessionRepository,
        factory: UserFactory,
        hasher: PasswordHasher,
        token_service: TokenService,
        session_ttl_seconds: int,
    ) -> None:
        self._repository = repository
        self._session_repository = session_repository
        self._factory = factory
        self._hasher = hasher
        self._token_service = token_service
        self._session_ttl_seconds = session_ttl_seconds

    def login(self, email: str, password: str) -> LoginResult:
        try:
            user = self._repository.find_by_email(Email(email))
        except ValueError:
            user = None
        if user is None:
            raise AuthenticationException(INVALID_CREDENTIALS)
        if not user.can_use_password:
            raise AuthenticationException(
                "This account uses Google sign-in; log in with Google instead"
            )
        if not self._hasher.verify(user.password_hash, password):
            raise AuthenticationException(INVALID_CREDENTIALS)
        return LoginResult(
            user=user,
            access_token=self._token_service.issue(user),
            session=self.open_session(user),
        )

    def open_session(self, user: User) -> Session:
        session = self._factory.create_session(user, self._session_ttl_seconds)
        self._session_repository.save(session)
        return session

    def logout(self, session_id: str | None) -> None:
        if session_id:
            self._session_repository.delete(SessionId(value=session_id))

    def current_user(self, principal: Principal) -> User:
        user = self._repository.find_by_id(UserId(value=principal.user_id))
        if user is None:
            raise ResourceNotFoundException("User not found")
        return user

    def session_user(self, principal: Principal) -> tuple[User, str]:
        """The caller's profile plus a freshly issued access token"""
        user = self.current_user(principal)
        return user, self._token_service.issue(user)
