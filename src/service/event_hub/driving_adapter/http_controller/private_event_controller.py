"""Events managed by their initiator: /users/{user_id}/events"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.command.create_event_use_case import CreateEventUseCase
from src.service.event_hub.app.command.update_event_use_case import UpdateEventUseCase
from src.service.event_hub.app.query.get_event_use_case import GetEventUseCase
from src.service.event_hub.app.query.list_events_use_case import ListEventsUseCase
from src.service.event_hub.domain.value_object.page_request import PageRequest
from src.service.event_hub.driving_adapter.http_controller.schema.event_schema import (
    EventFullResponse,
    EventShortResponse,
    NewEventRequest,
    UpdateEventRequest,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    user_id: int,
    request: NewEventRequest,
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventFullResponse:
    event = await use_case.create(owner_id=user_id, spec=request.to_spec())
    return EventFullResponse.from_dto(event)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    user_id: int,
    from_: int = Query(0, ge=0, alias='from'),
    size: int = Query(10, ge=1),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventShortResponse]:
    events = await use_case.list_by_owner(
        owner_id=user_id, page=PageRequest(from_=from_, size=size)
    )
    return [EventShortResponse.from_dto(event) for event in events]


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    user_id: int,
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventFullResponse:
    event = await use_case.get_by_owner(owner_id=user_id, event_id=event_id)
    return EventFullResponse.from_dto(event)


@router.patch('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_event(
    user_id: int,
    event_id: int,
    request: UpdateEventRequest,
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventFullResponse:
    event = await use_case.update_by_owner(
        owner_id=user_id, event_id=event_id, update=request.to_update()
    )
    return EventFullResponse.from_dto(event)
