from datetime import datetime
from typing import Optional

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.value_object.event_filter import EventFilter
from src.service.event_hub.domain.value_object.event_predicate import (
    MATCH_ALL,
    ContainsText,
    Equals,
    EventField,
    EventPredicate,
    HasFreeSeats,
    InRange,
    InSet,
)


def ensure_range_is_ordered(
    range_start: Optional[datetime], range_end: Optional[datetime]
) -> None:
    if range_start is not None and range_end is not None and range_start > range_end:
        raise ValidationError("'rangeStart' must be before 'rangeEnd'")


class EventFilterBuilder:
    """Turns an EventFilter into one EventPredicate, AND-ing every populated field."""

    @Logger.io
    def build(
        self,
        event_filter: EventFilter,
        *,
        text: Optional[str] = None,
        only_available: bool = False,
        published_only: bool = False,
        now: Optional[datetime] = None,
    ) -> EventPredicate:
        """
        Args:
            event_filter: membership, equality and date-range constraints
            text: free-text term matched against annotation or description
            only_available: keep events with free seats (or no limit)
            published_only: force state = PUBLISHED; with no date range the
                lower bound defaults to `now`
            now: reference time for the default lower bound
        """
        ensure_range_is_ordered(event_filter.range_start, event_filter.range_end)

        predicate = MATCH_ALL
        if event_filter.initiator_ids:
            predicate = predicate.and_(InSet(EventField.INITIATOR_ID, event_filter.initiator_ids))
        if event_filter.category_ids:
            predicate = predicate.and_(InSet(EventField.CATEGORY_ID, event_filter.category_ids))
        if event_filter.states:
            predicate = predicate.and_(InSet(EventField.STATE, event_filter.states))
        if event_filter.paid is not None:
            predicate = predicate.and_(Equals(EventField.PAID, event_filter.paid))
        if event_filter.state is not None:
            predicate = predicate.and_(Equals(EventField.STATE, event_filter.state))
        if published_only:
            predicate = predicate.and_(Equals(EventField.STATE, EventState.PUBLISHED))

        range_start, range_end = event_filter.range_start, event_filter.range_end
        if published_only and range_start is None and range_end is None:
            if now is None:
                raise ValueError('now is required to default the public date range')
            range_start = now
        if range_start is not None or range_end is not None:
            predicate = predicate.and_(
                InRange(EventField.EVENT_DATE, lower=range_start, upper=range_end)
            )

        if text is not None and text.strip():
            predicate = predicate.and_(
                ContainsText((EventField.ANNOTATION, EventField.DESCRIPTION), text)
            )
        if only_available:
            predicate = predicate.and_(HasFreeSeats())

        return predicate
