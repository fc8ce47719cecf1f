"""Public read-only endpoints: /events"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.query.get_event_use_case import GetEventUseCase
from src.service.event_hub.app.query.list_events_use_case import ListEventsUseCase
from src.service.event_hub.domain.enum.sort_type import SortType
from src.service.event_hub.domain.value_object.event_filter import EventFilter
from src.service.event_hub.domain.value_object.page_request import PageRequest
from src.service.event_hub.driving_adapter.http_controller.query_param import (
    parse_int_list,
    parse_query_datetime,
    request_context,
)
from src.service.event_hub.driving_adapter.http_controller.schema.event_schema import (
    EventFullResponse,
    EventShortResponse,
)


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def search_events(
    request: Request,
    text: Optional[str] = None,
    categories: Optional[List[str]] = Query(None),
    paid: Optional[bool] = None,
    range_start: Optional[str] = Query(None, alias='rangeStart'),
    range_end: Optional[str] = Query(None, alias='rangeEnd'),
    only_available: bool = Query(False, alias='onlyAvailable'),
    sort: Optional[str] = None,
    from_: int = Query(0, ge=0, alias='from'),
    size: int = Query(10, ge=1),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventShortResponse]:
    event_filter = EventFilter(
        category_ids=parse_int_list(categories, name='categories'),
        paid=paid,
        range_start=parse_query_datetime(range_start, name='rangeStart'),
        range_end=parse_query_datetime(range_end, name='rangeEnd'),
    )
    events = await use_case.search_published(
        event_filter=event_filter,
        page=PageRequest(from_=from_, size=size),
        context=request_context(request),
        text=text,
        only_available=only_available,
        sort=SortType.from_str(sort) if sort else None,
    )
    return [EventShortResponse.from_dto(event) for event in events]


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: int,
    request: Request,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventFullResponse:
    event = await use_case.get_published(event_id=event_id, context=request_context(request))
    return EventFullResponse.from_dto(event)
