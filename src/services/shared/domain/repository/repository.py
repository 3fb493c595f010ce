from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Repository base class

    - Abstracts persistence of an aggregate
    """

    @abstractmethod
    def save(self, aggregate: T) -> None:
        """Persist the aggregate"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """Look the aggregate up by its ID"""
        raise NotImplementedError
