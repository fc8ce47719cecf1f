"""
Compiles an EventPredicate into a SQLAlchemy WHERE clause over EventModel

Each clause type has the same meaning here as its in-memory `matches`.
"""

from enum import Enum
from typing import Any, Optional

from sqlalchemy import ColumnElement, and_, func, or_

from src.service.event_hub.domain.value_object.event_predicate import (
    Clause,
    ContainsText,
    Equals,
    EventField,
    EventPredicate,
    HasFreeSeats,
    InRange,
    InSet,
)
from src.service.event_hub.driven_adapter.model.event_model import EventModel


_COLUMNS: dict[EventField, Any] = {
    EventField.ID: EventModel.id,
    EventField.INITIATOR_ID: EventModel.initiator_id,
    EventField.CATEGORY_ID: EventModel.category_id,
    EventField.STATE: EventModel.state,
    EventField.PAID: EventModel.paid,
    EventField.EVENT_DATE: EventModel.event_date,
    EventField.PUBLISHED_ON: EventModel.published_on,
    EventField.ANNOTATION: EventModel.annotation,
    EventField.DESCRIPTION: EventModel.description,
    EventField.CONFIRMED_REQUESTS: EventModel.confirmed_requests,
    EventField.PARTICIPANT_LIMIT: EventModel.participant_limit,
}


def column_for(field: EventField) -> Any:
    return _COLUMNS[field]


def _sql_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def compile_clause(clause: Clause) -> ColumnElement[bool]:
    if isinstance(clause, InSet):
        values = sorted(_sql_value(value) for value in clause.values)
        return column_for(clause.field).in_(values)

    if isinstance(clause, Equals):
        return column_for(clause.field) == _sql_value(clause.value)

    if isinstance(clause, InRange):
        column = column_for(clause.field)
        bounds = []
        if clause.lower is not None:
            bounds.append(column >= clause.lower)
        if clause.upper is not None:
            bounds.append(column <= clause.upper)
        return and_(*bounds) if bounds else column.is_not(None)

    if isinstance(clause, ContainsText):
        needle = clause.text.lower()
        return or_(
            *(
                func.lower(column_for(field)).contains(needle, autoescape=True)
                for field in clause.fields
            )
        )

    if isinstance(clause, HasFreeSeats):
        return or_(
            EventModel.participant_limit == 0,
            EventModel.confirmed_requests < EventModel.participant_limit,
        )

    raise TypeError(f'Unsupported predicate clause: {type(clause).__name__}')


def compile_predicate(predicate: EventPredicate) -> Optional[ColumnElement[bool]]:
    """None for MATCH_ALL, so callers can skip the WHERE entirely."""
    if predicate.is_match_all:
        return None
    return and_(*(compile_clause(clause) for clause in predicate.clauses))
