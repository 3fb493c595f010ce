from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from services.shared.config import get_secret
from services.shared.domain.exception import AuthenticationException
from services.shared.utils.principal import Principal
from services.user.domain.entity import User

ALGORITHM = "HS256"


class TokenService:
    """HS256 access tokens signed with ``JWT_SECRET``"""

    def __init__(self, ttl_minutes: int) -> None:
        self._ttl = timedelta(minutes=ttl_minutes)

    def issue(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "email": str(user.email),
            "is_admin": user.is_admin,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(claims, get_secret("JWT_SECRET"), algorithm=ALGORITHM)

    def decode(self, token: str) -> Principal:
        try:
            claims = jwt.decode(token, get_secret("JWT_SECRET"), algorithms=[ALGORITHM])
        except JWTError as e:
            raise AuthenticationException("Invalid or expired token") from e
        user_id = claims.get("sub")
        if not user_id:
            raise AuthenticationException("Invalid or expired token")
        return Principal(
            user_id=user_id,
            email=claims.get("email", ""),
            is_admin=bool(claims.get("is_admin", False)),
        )
