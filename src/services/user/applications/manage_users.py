from services.shared.domain.exception import ResourceNotFoundException
from services.user.domain.entity import User
from services.user.domain.repository import UserRepository
from services.user.domain.value_object import UserId


class UserAdminService:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def list_users(self) -> list[User]:
        return self._repository.list_all()

    def set_as_admin(self, user_id: UserId) -> User:
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException(f"User not found: {user_id}")
        if not user.is_admin:
            user.grant_admin()
            self._repository.set_admin(user)
        return user
