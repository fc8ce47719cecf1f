from typing import Mapping

from src.service.event_hub.app.dto.event_dto import EventFullDto, EventShortDto
from src.service.event_hub.domain.entity.event_entity import Event


def to_full_dto(event: Event, *, views: int = 0) -> EventFullDto:
    assert event.id is not None
    return EventFullDto(
        id=event.id,
        title=event.title,
        annotation=event.annotation,
        description=event.description,
        initiator=event.initiator,
        category=event.category,
        location=event.location,
        paid=event.paid,
        event_date=event.event_date,
        created_on=event.created_on,
        published_on=event.published_on,
        participant_limit=event.participant_limit,
        request_moderation=event.request_moderation,
        confirmed_requests=event.confirmed_requests,
        state=event.state,
        views=views,
    )


def to_short_dto(event: Event, *, views: int = 0) -> EventShortDto:
    assert event.id is not None
    return EventShortDto(
        id=event.id,
        title=event.title,
        annotation=event.annotation,
        initiator=event.initiator,
        category=event.category,
        paid=event.paid,
        event_date=event.event_date,
        confirmed_requests=event.confirmed_requests,
        views=views,
    )


def to_short_dtos(events: list[Event], *, views: Mapping[int, int]) -> list[EventShortDto]:
    return [to_short_dto(event, views=views.get(event.id or 0, 0)) for event in events]
