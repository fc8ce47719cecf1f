"""Event Hub Domain Enums"""

from src.service.event_hub.domain.enum.actor import Actor
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.enum.event_state_action import EventStateAction
from src.service.event_hub.domain.enum.sort_type import SortType

__all__ = ['Actor', 'EventState', 'EventStateAction', 'SortType']
