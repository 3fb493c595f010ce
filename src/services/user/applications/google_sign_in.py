from services.shared.domain.exception import (
    AuthenticationException,
    DuplicateResourceException,
)
from services.user.domain.entity import User
from services.user.domain.factory import UserFactory
from services.user.domain.repository import UserRepository
from services.user.domain.value_object import Email
from services.user.infrastructure.google_oauth import GoogleOAuthClient


class GoogleSignInService:
    """Sign in (or sign up) with a Google account"""

    def __init__(
        self,
        client: GoogleOAuthClient,
        repository: UserRepository,
        factory: UserFactory,
    ) -> None:
        self._client = client
        self._repository = repository
        self._factory = factory

    def authorization_url(self, state: str) -> str:
        return self._client.authorization_url(state)

    def sign_in(self, code: str) -> tuple[User, bool]:
        """Returns the user and whether the account was just created

        Accounts are matched on the Google id only. An address that is already
        registered with a password is never taken over by a Google login.
        """
        profile = self._client.fetch_profile(code)
        if not profile.email_verified:
            raise AuthenticationException("Google e-mail address is not verified")

        user = self._repository.find_by_google_id(profile.google_id)
        if user is not None:
            return user, False
        if self._repository.find_by_email(Email(profile.email)) is not None:
            raise DuplicateResourceException(
                "An account with this e-mail already exists. Sign in with your password."
            )

        user = self._factory.create_from_google(profile)
        self._repository.save(user)
        return user, True
