from .email import Email
from .session_id import SessionId
from .user_id import UserId

__all__ = ["Email", "SessionId", "UserId"]
