"""
Event Query Repository Interface - CQRS Read Side
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.value_object.event_predicate import EventField, EventPredicate
from src.service.event_hub.domain.value_object.page_request import PageRequest


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[Event]:
        pass

    @abstractmethod
    async def get_by_id_and_initiator(
        self, *, event_id: int, initiator_id: int
    ) -> Optional[Event]:
        pass

    @abstractmethod
    async def get_by_id_and_state(self, *, event_id: int, state: EventState) -> Optional[Event]:
        pass

    @abstractmethod
    async def list_by_initiator(self, *, initiator_id: int, page: PageRequest) -> List[Event]:
        """One page of the initiator's events, ordered by id."""
        pass

    @abstractmethod
    async def query(
        self,
        *,
        predicate: EventPredicate,
        page: PageRequest,
        order_by: EventField = EventField.ID,
    ) -> List[Event]:
        """One page of events matching `predicate`; MATCH_ALL means unfiltered."""
        pass
