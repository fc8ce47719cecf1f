"""
Event Command Repository Interface - CQRS Write Side

Finders here lock the row (SELECT ... FOR UPDATE) and must run inside a
unit of work, so the check-then-set sequence of a transition is serialized.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.event_hub.domain.entity.event_entity import Event


class IEventCommandRepo(ABC):
    @abstractmethod
    async def save(self, *, event: Event) -> Event:
        """Insert or update; returns the event with its id populated."""
        pass

    @abstractmethod
    async def get_by_id_for_update(self, *, event_id: int) -> Optional[Event]:
        pass

    @abstractmethod
    async def get_by_id_and_initiator_for_update(
        self, *, event_id: int, initiator_id: int
    ) -> Optional[Event]:
        pass
