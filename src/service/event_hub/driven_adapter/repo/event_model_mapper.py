from src.service.event_hub.domain.entity.category_entity import Category
from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.domain.entity.location_entity import Location
from src.service.event_hub.domain.entity.user_entity import UserShort
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.driven_adapter.model.event_model import EventModel


def model_to_event(model: EventModel) -> Event:
    return Event(
        id=model.id,
        title=model.title,
        annotation=model.annotation,
        description=model.description,
        event_date=model.event_date,
        created_on=model.created_on,
        published_on=model.published_on,
        paid=model.paid,
        participant_limit=model.participant_limit,
        request_moderation=model.request_moderation,
        confirmed_requests=model.confirmed_requests,
        state=EventState(model.state),
        initiator=UserShort(id=model.initiator.id, name=model.initiator.name),
        category=Category(id=model.category.id, name=model.category.name),
        location=Location(id=model.location.id, lat=model.location.lat, lon=model.location.lon),
    )


def copy_event_to_model(event: Event, model: EventModel) -> EventModel:
    """Write every mutable column; confirmed_requests is owned elsewhere and left alone."""
    assert event.location.id is not None, 'location must be resolved before saving'
    model.title = event.title
    model.annotation = event.annotation
    model.description = event.description
    model.event_date = event.event_date
    model.created_on = event.created_on
    model.published_on = event.published_on
    model.paid = event.paid
    model.participant_limit = event.participant_limit
    model.request_moderation = event.request_moderation
    model.state = event.state.value
    model.initiator_id = event.initiator.id
    model.category_id = event.category.id
    model.location_id = event.location.id
    return model
