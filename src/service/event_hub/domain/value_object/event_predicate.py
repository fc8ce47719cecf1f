"""
Composable event predicates

A predicate is either MATCH_ALL or a conjunction of clauses. Each clause is a
pure function over an Event; the SQL adapter compiles the same tree into a
WHERE clause so both sides agree on what matches.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any, Callable, Optional, Union

import attrs

from src.service.event_hub.domain.entity.event_entity import Event


class EventField(StrEnum):
    ID = 'id'
    INITIATOR_ID = 'initiator_id'
    CATEGORY_ID = 'category_id'
    STATE = 'state'
    PAID = 'paid'
    EVENT_DATE = 'event_date'
    PUBLISHED_ON = 'published_on'
    ANNOTATION = 'annotation'
    DESCRIPTION = 'description'
    CONFIRMED_REQUESTS = 'confirmed_requests'
    PARTICIPANT_LIMIT = 'participant_limit'


_READERS: dict[EventField, Callable[[Event], Any]] = {
    EventField.ID: lambda event: event.id,
    EventField.INITIATOR_ID: lambda event: event.initiator.id,
    EventField.CATEGORY_ID: lambda event: event.category.id,
    EventField.STATE: lambda event: event.state,
    EventField.PAID: lambda event: event.paid,
    EventField.EVENT_DATE: lambda event: event.event_date,
    EventField.PUBLISHED_ON: lambda event: event.published_on,
    EventField.ANNOTATION: lambda event: event.annotation,
    EventField.DESCRIPTION: lambda event: event.description,
    EventField.CONFIRMED_REQUESTS: lambda event: event.confirmed_requests,
    EventField.PARTICIPANT_LIMIT: lambda event: event.participant_limit,
}


def field_value(event: Event, field: EventField) -> Any:
    return _READERS[field](event)


@attrs.frozen
class InSet:
    field: EventField
    values: frozenset[Any] = attrs.field(converter=frozenset)

    def matches(self, event: Event) -> bool:
        return field_value(event, self.field) in self.values


@attrs.frozen
class Equals:
    field: EventField
    value: Any

    def matches(self, event: Event) -> bool:
        return field_value(event, self.field) == self.value


@attrs.frozen
class InRange:
    """Inclusive on both ends; a missing bound is open."""

    field: EventField
    lower: Optional[datetime] = None
    upper: Optional[datetime] = None

    def matches(self, event: Event) -> bool:
        value = field_value(event, self.field)
        if value is None:
            return False
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True


@attrs.frozen
class ContainsText:
    """Case-insensitive substring match against any of the given fields."""

    fields: tuple[EventField, ...]
    text: str

    def matches(self, event: Event) -> bool:
        needle = self.text.lower()
        return any(
            needle in (field_value(event, field) or '').lower() for field in self.fields
        )


@attrs.frozen
class HasFreeSeats:
    def matches(self, event: Event) -> bool:
        return event.has_free_seats


Clause = Union[InSet, Equals, InRange, ContainsText, HasFreeSeats]


@attrs.frozen
class EventPredicate:
    clauses: tuple[Clause, ...] = ()

    @property
    def is_match_all(self) -> bool:
        return not self.clauses

    def matches(self, event: Event) -> bool:
        return all(clause.matches(event) for clause in self.clauses)

    def and_(self, clause: Clause) -> 'EventPredicate':
        return EventPredicate(clauses=(*self.clauses, clause))

    def filter(self, events: list[Event]) -> list[Event]:
        return [event for event in events if self.matches(event)]


MATCH_ALL = EventPredicate()
