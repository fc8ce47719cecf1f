"""
Event Query Repository Implementation - CQRS Read Side
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.value_object.event_predicate import EventField, EventPredicate
from src.service.event_hub.domain.value_object.page_request import PageRequest
from src.service.event_hub.driven_adapter.model.event_model import EventModel
from src.service.event_hub.driven_adapter.repo.event_model_mapper import model_to_event
from src.service.event_hub.driven_adapter.repo.predicate_sql_compiler import (
    column_for,
    compile_predicate,
)


def build_query_statement(
    *, predicate: EventPredicate, page: PageRequest, order_by: EventField = EventField.ID
) -> Select:
    stmt = select(EventModel)
    where = compile_predicate(predicate)
    if where is not None:
        stmt = stmt.where(where)
    order_columns = [column_for(order_by)]
    if order_by != EventField.ID:
        order_columns.append(EventModel.id)
    return stmt.order_by(*order_columns).offset(page.offset).limit(page.limit)


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    async def _first(self, stmt: Select) -> Optional[Event]:
        async with self._get_session() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            return model_to_event(model) if model else None

    async def _all(self, stmt: Select) -> List[Event]:
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [model_to_event(model) for model in result.scalars().all()]

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[Event]:
        return await self._first(select(EventModel).where(EventModel.id == event_id))

    @Logger.io
    async def get_by_id_and_initiator(
        self, *, event_id: int, initiator_id: int
    ) -> Optional[Event]:
        return await self._first(
            select(EventModel).where(
                EventModel.id == event_id, EventModel.initiator_id == initiator_id
            )
        )

    @Logger.io
    async def get_by_id_and_state(self, *, event_id: int, state: EventState) -> Optional[Event]:
        return await self._first(
            select(EventModel).where(EventModel.id == event_id, EventModel.state == state.value)
        )

    @Logger.io
    async def list_by_initiator(self, *, initiator_id: int, page: PageRequest) -> List[Event]:
        return await self._all(
            select(EventModel)
            .where(EventModel.initiator_id == initiator_id)
            .order_by(EventModel.id)
            .offset(page.offset)
            .limit(page.limit)
        )

    @Logger.io
    async def query(
        self,
        *,
        predicate: EventPredicate,
        page: PageRequest,
        order_by: EventField = EventField.ID,
    ) -> List[Event]:
        return await self._all(
            build_query_statement(predicate=predicate, page=page, order_by=order_by)
        )
