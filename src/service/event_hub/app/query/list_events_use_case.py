from datetime import datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.dto.event_dto import EventFullDto, EventShortDto
from src.service.event_hub.app.dto.request_context import RequestContext
from src.service.event_hub.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_hub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_hub.app.mapper.event_mapper import to_full_dto, to_short_dto, to_short_dtos
from src.service.event_hub.app.service.view_stats_aggregator import ViewStatsAggregator
from src.service.event_hub.domain.enum.sort_type import SortType
from src.service.event_hub.domain.event_filter_builder import EventFilterBuilder
from src.service.event_hub.domain.value_object.event_filter import EventFilter
from src.service.event_hub.domain.value_object.event_predicate import EventField
from src.service.event_hub.domain.value_object.page_request import PageRequest


class ListEventsUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        user_query_repo: IUserQueryRepo,
        view_stats_aggregator: ViewStatsAggregator,
        filter_builder: Optional[EventFilterBuilder] = None,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.user_query_repo = user_query_repo
        self.view_stats_aggregator = view_stats_aggregator
        self.filter_builder = filter_builder or EventFilterBuilder()

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
    async def list_by_owner(self, *, owner_id: int, page: PageRequest) -> List[EventShortDto]:
        Logger.base.info(f'📋 [LIST_BY_OWNER] Loading events for user {owner_id}')
        if not await self.user_query_repo.exists(user_id=owner_id):
            raise NotFoundError(f'User with id={owner_id} was not found')

        events = await self.event_query_repo.list_by_initiator(initiator_id=owner_id, page=page)

        Logger.base.info(f'✅ [LIST_BY_OWNER] Found {len(events)} events for user {owner_id}')
        return [to_short_dto(event) for event in events]

    @Logger.io
    async def list_for_admin(
        self, *, event_filter: EventFilter, page: PageRequest
    ) -> List[EventFullDto]:
        predicate = self.filter_builder.build(event_filter)
        events = await self.event_query_repo.query(predicate=predicate, page=page)

        Logger.base.info(f'🛡️ [LIST_FOR_ADMIN] Found {len(events)} events')
        return [to_full_dto(event) for event in events]

    @Logger.io
    async def search_published(
        self,
        *,
        event_filter: EventFilter,
        page: PageRequest,
        context: RequestContext,
        text: Optional[str] = None,
        only_available: bool = False,
        sort: Optional[SortType] = None,
    ) -> List[EventShortDto]:
        """
        Public search over published events.

        Without a date range only upcoming events are returned. Views come from
        the stats collector and fall back to zero when it is unreachable.
        """
        now = datetime.now(timezone.utc)
        predicate = self.filter_builder.build(
            event_filter,
            text=text,
            only_available=only_available,
            published_only=True,
            now=now,
        )

        self.view_stats_aggregator.schedule_hit(context=context, timestamp=now)

        order_by = EventField.EVENT_DATE if sort == SortType.EVENT_DATE else EventField.ID
        events = await self.event_query_repo.query(
            predicate=predicate, page=page, order_by=order_by
        )
        if not events:
            return []

        views = await self.view_stats_aggregator.views_for_events(
            request_path=context.path, events=events, now=now
        )
        results = to_short_dtos(events, views=views)
        if sort == SortType.VIEWS:
            results = sorted(results, key=lambda dto: dto.views)

        Logger.base.info(f'🔎 [SEARCH_PUBLISHED] Found {len(results)} events')
        return results
