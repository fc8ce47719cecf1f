"""
Event Command Repository Implementation - CQRS Write Side

Shares the unit of work's session; the locking finders hold a row lock
until the unit of work commits or rolls back.
"""

from typing import Optional

import attrs
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.driven_adapter.model.event_model import EventModel
from src.service.event_hub.driven_adapter.repo.event_model_mapper import (
    copy_event_to_model,
    model_to_event,
)


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def save(self, *, event: Event) -> Event:
        if event.id is None:
            model = copy_event_to_model(event, EventModel(confirmed_requests=0))
            self.session.add(model)
        else:
            model = await self.session.get(EventModel, event.id)
            if model is None:
                raise LookupError(f'Event {event.id} vanished before save')
            copy_event_to_model(event, model)

        await self.session.flush()
        return attrs.evolve(event, id=model.id)

    @Logger.io
    async def get_by_id_for_update(self, *, event_id: int) -> Optional[Event]:
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == event_id)
            .with_for_update(of=EventModel)
        )
        model = result.scalar_one_or_none()
        return model_to_event(model) if model else None

    @Logger.io
    async def get_by_id_and_initiator_for_update(
        self, *, event_id: int, initiator_id: int
    ) -> Optional[Event]:
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == event_id, EventModel.initiator_id == initiator_id)
            .with_for_update(of=EventModel)
        )
        model = result.scalar_one_or_none()
        return model_to_event(model) if model else None
