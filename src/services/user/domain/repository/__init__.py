from .session_repository import SessionRepository as SessionRepository
from .user_repository import UserRepository as UserRepository
