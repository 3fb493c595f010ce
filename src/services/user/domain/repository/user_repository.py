from abc import abstractmethod

from services.shared.domain import Repository
from services.user.domain.entity import User
from services.user.domain.value_object import Email, UserId


class UserRepository(Repository[User, UserId]):
    """User repository; e-mail addresses and Google ids are unique"""

    @abstractmethod
    def save(self, user: User) -> None:
        """DuplicateResourceException when the e-mail is taken"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, user_id: UserId) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_email(self, email: Email) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_google_id(self, google_id: str) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[User]:
        raise NotImplementedError

    @abstractmethod
    def set_admin(self, user: User) -> None:
        raise NotImplementedError
