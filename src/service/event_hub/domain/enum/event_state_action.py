from enum import StrEnum

from src.platform.exception.exceptions import ValidationError
from src.service.event_hub.domain.enum.event_state import EventState


class EventStateAction(StrEnum):
    SEND_TO_REVIEW = 'SEND_TO_REVIEW'
    CANCEL_REVIEW = 'CANCEL_REVIEW'
    PUBLISH_EVENT = 'PUBLISH_EVENT'
    REJECT_EVENT = 'REJECT_EVENT'

    @property
    def target_state(self) -> EventState:
        return _TARGET_STATES[self]

    @classmethod
    def from_str(cls, value: str) -> 'EventStateAction':
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValidationError(f'Unknown state action: {value}')


_TARGET_STATES = {
    EventStateAction.SEND_TO_REVIEW: EventState.PENDING,
    EventStateAction.CANCEL_REVIEW: EventState.CANCELED,
    EventStateAction.PUBLISH_EVENT: EventState.PUBLISHED,
    EventStateAction.REJECT_EVENT: EventState.CANCELED,
}
