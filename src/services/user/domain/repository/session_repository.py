from abc import abstractmethod

from services.shared.domain import Repository
from services.user.domain.entity import Session
from services.user.domain.value_object import SessionId


class SessionRepository(Repository[Session, SessionId]):
    @abstractmethod
    def save(self, session: Session) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, session_id: SessionId) -> Session | None:
        """Expired sessions are reported as absent"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: SessionId) -> None:
        raise NotImplementedError
