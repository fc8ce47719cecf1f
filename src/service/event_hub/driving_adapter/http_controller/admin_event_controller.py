"""Moderation endpoints: /admin/events"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.command.update_event_use_case import UpdateEventUseCase
from src.service.event_hub.app.query.list_events_use_case import ListEventsUseCase
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.value_object.event_filter import EventFilter
from src.service.event_hub.domain.value_object.page_request import PageRequest
from src.service.event_hub.driving_adapter.http_controller.query_param import (
    parse_int_list,
    parse_query_datetime,
    split_csv,
)
from src.service.event_hub.driving_adapter.http_controller.schema.event_schema import (
    EventFullResponse,
    UpdateEventRequest,
)


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    users: Optional[List[str]] = Query(None),
    states: Optional[List[str]] = Query(None),
    categories: Optional[List[str]] = Query(None),
    range_start: Optional[str] = Query(None, alias='rangeStart'),
    range_end: Optional[str] = Query(None, alias='rangeEnd'),
    from_: int = Query(0, ge=0, alias='from'),
    size: int = Query(10, ge=1),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventFullResponse]:
    event_filter = EventFilter(
        initiator_ids=parse_int_list(users, name='users'),
        category_ids=parse_int_list(categories, name='categories'),
        states=tuple(EventState.from_str(state) for state in split_csv(states)),
        range_start=parse_query_datetime(range_start, name='rangeStart'),
        range_end=parse_query_datetime(range_end, name='rangeEnd'),
    )
    events = await use_case.list_for_admin(
        event_filter=event_filter, page=PageRequest(from_=from_, size=size)
    )
    return [EventFullResponse.from_dto(event) for event in events]


@router.patch('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_event(
    event_id: int,
    request: UpdateEventRequest,
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventFullResponse:
    event = await use_case.update_by_admin(event_id=event_id, update=request.to_update())
    return EventFullResponse.from_dto(event)
