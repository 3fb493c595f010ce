from .entity import Session as Session
from .entity import User as User
from .factory import GoogleProfile as GoogleProfile
from .factory import UserFactory as UserFactory
from .repository import SessionRepository as SessionRepository
from .repository import UserRepository as UserRepository
from .value_object import Email as Email
from .value_object import SessionId as SessionId
from .value_object import UserId as UserId
