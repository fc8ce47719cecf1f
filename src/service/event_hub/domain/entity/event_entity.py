from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.event_hub.domain.entity.category_entity import Category
from src.service.event_hub.domain.entity.location_entity import Location
from src.service.event_hub.domain.entity.user_entity import UserShort
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.enum.event_state_action import EventStateAction


def transition_conflict(target: EventState, current: EventState) -> ConflictError:
    return ConflictError(f'You cannot {target} event when current status {current}')


@attrs.define
class Event:
    title: str
    annotation: str
    description: str
    event_date: datetime
    category: Category
    initiator: UserShort
    location: Location
    created_on: datetime
    paid: bool = False
    participant_limit: int = 0
    request_moderation: bool = True
    confirmed_requests: int = 0
    state: EventState = EventState.PENDING
    published_on: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        title: str,
        annotation: str,
        description: str,
        event_date: datetime,
        category: Category,
        initiator: UserShort,
        location: Location,
        paid: bool,
        participant_limit: int,
        request_moderation: bool,
        now: datetime,
    ) -> 'Event':
        return cls(
            title=title,
            annotation=annotation,
            description=description,
            event_date=event_date,
            category=category,
            initiator=initiator,
            location=location,
            created_on=now,
            paid=paid,
            participant_limit=participant_limit,
            request_moderation=request_moderation,
            confirmed_requests=0,
            state=EventState.PENDING,
        )

    @property
    def is_published(self) -> bool:
        return self.state == EventState.PUBLISHED

    @property
    def has_free_seats(self) -> bool:
        return self.participant_limit == 0 or self.confirmed_requests < self.participant_limit

    @Logger.io
    def publish(self, *, now: datetime) -> 'Event':
        if self.state != EventState.PENDING:
            raise transition_conflict(EventState.PUBLISHED, self.state)
        return attrs.evolve(
            self,
            state=EventState.PUBLISHED,
            published_on=self.published_on or now,
        )

    @Logger.io
    def reject(self) -> 'Event':
        if self.state in (EventState.PUBLISHED, EventState.CANCELED):
            raise transition_conflict(EventState.CANCELED, self.state)
        return attrs.evolve(self, state=EventState.CANCELED)

    @Logger.io
    def cancel_review(self) -> 'Event':
        if self.is_published:
            raise transition_conflict(EventState.CANCELED, self.state)
        return attrs.evolve(self, state=EventState.CANCELED)

    @Logger.io
    def send_to_review(self) -> 'Event':
        if self.is_published:
            raise transition_conflict(EventState.PENDING, self.state)
        return attrs.evolve(self, state=EventState.PENDING)

    def apply_action(self, action: EventStateAction, *, now: datetime) -> 'Event':
        if action == EventStateAction.PUBLISH_EVENT:
            return self.publish(now=now)
        if action == EventStateAction.REJECT_EVENT:
            return self.reject()
        if action == EventStateAction.CANCEL_REVIEW:
            return self.cancel_review()
        return self.send_to_review()
