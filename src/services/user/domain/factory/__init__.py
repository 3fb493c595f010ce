from .user_factory import GoogleProfile as GoogleProfile
from .user_factory import UserFactory as UserFactory
