"""
Test helpers

Builders for domain objects with sensible defaults; override only what a
test cares about.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from unittest.mock import AsyncMock

import attrs

from src.service.event_hub.domain.entity.category_entity import Category
from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.domain.entity.location_entity import Location
from src.service.event_hub.domain.entity.user_entity import User, UserShort
from src.service.event_hub.domain.enum.event_state import EventState


CONCERTS = Category(id=1, name='Concerts')
THEATRE = Category(id=2, name='Theatre')
ANN = User(id=7, name='Ann', email='ann@example.com')
RIVERSIDE = Location(id=3, lat=55.754167, lon=37.62)


def build_event(**overrides: Any) -> Event:
    now = datetime.now(timezone.utc)
    fields: dict[str, Any] = {
        'id': 1,
        'title': 'Jazz night',
        'annotation': 'An evening of live jazz at the riverside',
        'description': 'Three bands, two sets each, open bar from 19:00.',
        'event_date': now + timedelta(days=10),
        'category': CONCERTS,
        'initiator': UserShort(id=ANN.id, name=ANN.name),
        'location': RIVERSIDE,
        'created_on': now - timedelta(days=1),
        'state': EventState.PENDING,
    }
    fields.update(overrides)
    return Event(**fields)


def build_published_event(*, published_on: Optional[datetime] = None, **overrides: Any) -> Event:
    published_on = published_on or datetime.now(timezone.utc) - timedelta(hours=12)
    return build_event(state=EventState.PUBLISHED, published_on=published_on, **overrides)


class FakeUnitOfWork:
    """
    Stands in for SqlAlchemyUnitOfWork: records commit/rollback and exposes
    AsyncMock command repos.
    """

    def __init__(self, *, event: Optional[Event] = None) -> None:
        self.event_command_repo = AsyncMock()
        self.event_command_repo.get_by_id_for_update = AsyncMock(return_value=event)
        self.event_command_repo.get_by_id_and_initiator_for_update = AsyncMock(return_value=event)
        self.event_command_repo.save = AsyncMock(
            side_effect=lambda *, event: event if event.id is not None else _with_id(event, 101)
        )
        self.location_command_repo = AsyncMock()
        self.location_command_repo.resolve = AsyncMock(return_value=RIVERSIDE)
        self.committed = False
        self.rolled_back = False

    async def __aenter__(self) -> 'FakeUnitOfWork':
        return self

    async def __aexit__(self, *args: Any) -> None:
        if not self.committed:
            self.rolled_back = True

    async def commit(self) -> None:
        self.committed = True


def _with_id(event: Event, event_id: int) -> Event:
    return attrs.evolve(event, id=event_id)
