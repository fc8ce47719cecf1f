from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.dto.event_dto import EventFullDto
from src.service.event_hub.app.dto.request_context import RequestContext
from src.service.event_hub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_hub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_hub.app.mapper.event_mapper import to_full_dto
from src.service.event_hub.app.service.view_stats_aggregator import ViewStatsAggregator
from src.service.event_hub.domain.enum.event_state import EventState


class GetEventUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        user_query_repo: IUserQueryRepo,
        view_stats_aggregator: ViewStatsAggregator,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.user_query_repo = user_query_repo
        self.view_stats_aggregator = view_stats_aggregator

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        view_stats_aggregator: ViewStatsAggregator = Depends(
            Provide[Container.view_stats_aggregator]
        ),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            user_query_repo=user_query_repo,
            view_stats_aggregator=view_stats_aggregator,
        )

    @Logger.io
    async def get_by_owner(self, *, owner_id: int, event_id: int) -> EventFullDto:
        if not await self.user_query_repo.exists(user_id=owner_id):
            raise NotFoundError(f'User with id={owner_id} was not found')

        event = await self.event_query_repo.get_by_id_and_initiator(
            event_id=event_id, initiator_id=owner_id
        )
        if not event:
            raise NotFoundError(f'Event with id={event_id} was not found')
        return to_full_dto(event)

    @Logger.io
    async def get_published(self, *, event_id: int, context: RequestContext) -> EventFullDto:
        event = await self.event_query_repo.get_by_id_and_state(
            event_id=event_id, state=EventState.PUBLISHED
        )
        if not event:
            raise NotFoundError(f'Event with id={event_id} was not found')

        now = datetime.now(timezone.utc)
        self.view_stats_aggregator.schedule_hit(context=context, timestamp=now)
        views = await self.view_stats_aggregator.views_for_event(
            request_path=context.path, event=event, now=now
        )
        return to_full_dto(event, views=views)
