from datetime import datetime, timezone

import pytest

from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.driven_adapter.model.category_model import CategoryModel
from src.service.event_hub.driven_adapter.model.event_model import EventModel
from src.service.event_hub.driven_adapter.model.location_model import LocationModel
from src.service.event_hub.driven_adapter.model.user_model import UserModel
from src.service.event_hub.driven_adapter.repo.event_model_mapper import (
    copy_event_to_model,
    model_to_event,
)
from test.service.event_hub.helpers import build_published_event


@pytest.mark.unit
class TestEventModelMapper:
    def test_round_trip_through_model(self) -> None:
        event = build_published_event(id=9, confirmed_requests=0)
        model = copy_event_to_model(event, EventModel(id=9, confirmed_requests=0))
        model.initiator = UserModel(id=event.initiator.id, name=event.initiator.name, email='a@b.c')
        model.category = CategoryModel(id=event.category.id, name=event.category.name)
        model.location = LocationModel(
            id=event.location.id, lat=event.location.lat, lon=event.location.lon
        )

        assert model_to_event(model) == event

    def test_copy_leaves_confirmed_requests_alone(self) -> None:
        event = build_published_event(id=9, confirmed_requests=3)
        model = EventModel(id=9, confirmed_requests=12)

        copy_event_to_model(event, model)

        assert model.confirmed_requests == 12
        assert model.state == EventState.PUBLISHED.value

    def test_state_string_becomes_enum(self) -> None:
        event = build_published_event(id=9, published_on=datetime(2030, 1, 1, tzinfo=timezone.utc))
        model = copy_event_to_model(event, EventModel(id=9, confirmed_requests=0))
        model.initiator = UserModel(id=7, name='Ann', email='a@b.c')
        model.category = CategoryModel(id=1, name='Concerts')
        model.location = LocationModel(id=3, lat=1.0, lon=2.0)

        assert model_to_event(model).state is EventState.PUBLISHED
