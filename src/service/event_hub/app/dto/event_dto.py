"""Read projections of an Event, enriched with a view count."""

from datetime import datetime
from typing import Optional

import attrs

from src.service.event_hub.domain.entity.category_entity import Category
from src.service.event_hub.domain.entity.location_entity import Location
from src.service.event_hub.domain.entity.user_entity import UserShort
from src.service.event_hub.domain.enum.event_state import EventState


@attrs.define(frozen=True)
class EventFullDto:
    id: int
    title: str
    annotation: str
    description: str
    initiator: UserShort
    category: Category
    location: Location
    paid: bool
    event_date: datetime
    created_on: datetime
    published_on: Optional[datetime]
    participant_limit: int
    request_moderation: bool
    confirmed_requests: int
    state: EventState
    views: int = 0


@attrs.define(frozen=True)
class EventShortDto:
    id: int
    title: str
    annotation: str
    initiator: UserShort
    category: Category
    paid: bool
    event_date: datetime
    confirmed_requests: int
    views: int = 0
