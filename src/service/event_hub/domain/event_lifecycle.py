"""
Event lifecycle rules shared by the owner and admin update paths

- Role gate: each actor may only send its own state actions
- Date rule: the event must start more than N hours after the reference moment
- Partial update: only present fields overwrite the event, in a fixed order
  (content, date, category, location, state action)
"""

from datetime import datetime, timedelta
from typing import Optional

import attrs

from src.platform.exception.exceptions import ConflictError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.event_hub.domain.entity.category_entity import Category
from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.domain.entity.location_entity import Location
from src.service.event_hub.domain.enum.actor import Actor
from src.service.event_hub.domain.enum.event_state_action import EventStateAction
from src.service.event_hub.domain.value_object.event_update import EventUpdate, is_set


ALLOWED_ACTIONS: dict[Actor, frozenset[EventStateAction]] = {
    Actor.OWNER: frozenset({EventStateAction.CANCEL_REVIEW, EventStateAction.SEND_TO_REVIEW}),
    Actor.ADMIN: frozenset({EventStateAction.PUBLISH_EVENT, EventStateAction.REJECT_EVENT}),
}


def ensure_action_allowed(actor: Actor, action: EventStateAction) -> None:
    allowed = ALLOWED_ACTIONS[actor]
    if action not in allowed:
        names = ', '.join(sorted(str(item) for item in allowed))
        raise ConflictError(f'Wrong status. Status should be one of: [{names}]')


def ensure_event_date_far_enough(
    event_date: datetime, *, reference: datetime, hours: int, reference_name: str = 'current'
) -> None:
    if event_date <= reference + timedelta(hours=hours):
        raise ValidationError(
            f'Event date and time cannot be earlier than {hours} hours '
            f'from the {reference_name} moment.'
        )


def ensure_not_published(event: Event) -> None:
    if event.is_published:
        raise ConflictError('Event state is Published')


@Logger.io
def apply_update(
    event: Event,
    update: EventUpdate,
    *,
    actor: Actor,
    min_hours: int,
    now: datetime,
    category: Optional[Category] = None,
    location: Optional[Location] = None,
) -> Event:
    """
    Apply a partial update on behalf of `actor` and return the new event.

    Owners can never touch a published event. Admins may still edit a
    published event's content; moving its date is checked against both now
    and the publication moment.

    Args:
        category: already resolved from update.category_id, if it was set
        location: already resolved from update.location, if it was set

    Raises:
        ConflictError: owner edits a published event, action outside the
            actor's role, or a transition not allowed from the current state
        ValidationError: event date too close
    """
    if actor == Actor.OWNER:
        ensure_not_published(event)
    if is_set(update.state_action):
        ensure_action_allowed(actor, update.state_action)

    changes = update.content_changes()

    # Admins may move the date of a published event; it stays bounded by now and published_on
    if is_set(update.event_date):
        ensure_event_date_far_enough(update.event_date, reference=now, hours=min_hours)
        if event.is_published and event.published_on is not None:
            ensure_event_date_far_enough(
                update.event_date,
                reference=event.published_on,
                hours=min_hours,
                reference_name='published',
            )
        changes['event_date'] = update.event_date

    if is_set(update.category_id):
        if category is None:
            raise ValueError('category must be resolved before applying the update')
        changes['category'] = category

    if is_set(update.location):
        if location is None:
            raise ValueError('location must be resolved before applying the update')
        changes['location'] = location

    updated = attrs.evolve(event, **changes)

    if is_set(update.state_action):
        updated = updated.apply_action(update.state_action, now=now)
    return updated
