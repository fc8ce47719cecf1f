from datetime import datetime
from typing import Optional

import attrs

from src.service.event_hub.domain.enum.event_state import EventState


@attrs.frozen
class EventFilter:
    """Optional constraints; a field left as None or empty adds nothing."""

    initiator_ids: tuple[int, ...] = ()
    category_ids: tuple[int, ...] = ()
    states: tuple[EventState, ...] = ()
    paid: Optional[bool] = None
    state: Optional[EventState] = None
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None
