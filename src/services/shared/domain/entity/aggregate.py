from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """AggregateRoot base class

    - Child entities are reached only through the aggregate root
    - Transaction boundary = aggregate boundary
    """

    def __init__(self, id: ID) -> None:
        super().__init__(id)
        self._domain_events: list = []

    def add_domain_event(self, event: object) -> None:
        """Record a domain event"""
        self._domain_events.append(event)

    def flush_domain_events(self) -> list:
        """Return and clear the recorded domain events"""
        events = self._domain_events.copy()
        self._domain_events.clear()
        return events
