from services.shared.domain.exception import DuplicateResourceException
from services.user.domain.entity import User
from services.user.domain.factory import UserFactory
from services.user.domain.repository import UserRepository
from services.user.domain.value_object import Email
from services.user.infrastructure.password_hasher import PasswordHasher

MIN_PASSWORD_LENGTH = 8


class RegisterUserService:
    def __init__(
        self,
        repository: UserRepository,
        factory: UserFactory,
        hasher: PasswordHasher,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._hasher = hasher

    def register(
        self,
        email: str,
        password: str,
        full_name: str,
        mobile_no: str | None = None,
    ) -> User:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if self._repository.find_by_email(Email(email)) is not None:
            raise DuplicateResourceException("Email is already registered")

        user = self._factory.create_with_password(
            email=email,
            password_hash=self._hasher.hash(password),
            full_name=full_name,
            mobile_no=mobile_no,
        )
        self._repository.save(user)
        return user
