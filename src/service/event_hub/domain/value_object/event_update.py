"""
Partial update of an event

Every field defaults to UNSET, so "not sent" is distinct from any real value.
A field is only written back to the event when it is present.
"""

from datetime import datetime
from typing import Any, Optional, TypeVar, Union

import attrs

from src.service.event_hub.domain.enum.event_state_action import EventStateAction
from src.service.event_hub.domain.value_object.location_descriptor import LocationDescriptor


class _Unset:
    _instance: Optional['_Unset'] = None

    def __new__(cls) -> '_Unset':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNSET'

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

_T = TypeVar('_T')
Maybe = Union[_T, _Unset]


def is_set(value: Any) -> bool:
    return value is not UNSET


@attrs.frozen
class EventUpdate:
    title: Maybe[str] = UNSET
    annotation: Maybe[str] = UNSET
    description: Maybe[str] = UNSET
    participant_limit: Maybe[int] = UNSET
    paid: Maybe[bool] = UNSET
    request_moderation: Maybe[bool] = UNSET
    event_date: Maybe[datetime] = UNSET
    category_id: Maybe[int] = UNSET
    location: Maybe[LocationDescriptor] = UNSET
    state_action: Maybe[EventStateAction] = UNSET

    @classmethod
    def from_values(cls, **values: Any) -> 'EventUpdate':
        """Build an update where None means "leave unchanged"."""
        return cls(**{key: value for key, value in values.items() if value is not None})

    def content_changes(self) -> dict[str, Any]:
        """Plain fields that map one-to-one onto Event attributes."""
        fields = (
            'title',
            'annotation',
            'description',
            'participant_limit',
            'paid',
            'request_moderation',
        )
        return {name: getattr(self, name) for name in fields if is_set(getattr(self, name))}
