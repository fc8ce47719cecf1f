from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from src.service.event_hub.app.dto.event_dto import EventFullDto, EventShortDto
from src.service.event_hub.domain.enum.event_state_action import EventStateAction
from src.service.event_hub.domain.value_object.event_update import EventUpdate
from src.service.event_hub.domain.value_object.location_descriptor import LocationDescriptor
from src.service.event_hub.domain.value_object.new_event_spec import NewEventSpec


DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'


def parse_wire_datetime(value: Any) -> Any:
    """Wire datetimes ("yyyy-MM-dd HH:mm:ss") are UTC wall-clock times."""
    if isinstance(value, str):
        try:
            return datetime.strptime(value, DATETIME_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            raise ValueError(f"Datetime must use the format 'yyyy-MM-dd HH:mm:ss': {value}")
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_wire_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATETIME_FORMAT)


class LocationSchema(BaseModel):
    lat: float
    lon: float

    def to_descriptor(self) -> LocationDescriptor:
        return LocationDescriptor(lat=self.lat, lon=self.lon)


class NewEventRequest(BaseModel):
    title: str = Field(min_length=3, max_length=120)
    annotation: str = Field(min_length=20, max_length=2000)
    description: str = Field(min_length=20, max_length=7000)
    category: int
    event_date: datetime
    location: LocationSchema
    paid: bool = False
    participant_limit: int = Field(default=0, ge=0)
    request_moderation: bool = True

    @field_validator('title', 'annotation', 'description')
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('must not be blank')
        return value

    @field_validator('event_date', mode='before')
    @classmethod
    def parse_event_date(cls, value: Any) -> Any:
        return parse_wire_datetime(value)

    def to_spec(self) -> NewEventSpec:
        return NewEventSpec(
            title=self.title,
            annotation=self.annotation,
            description=self.description,
            category_id=self.category,
            event_date=self.event_date,
            location=self.location.to_descriptor(),
            paid=self.paid,
            participant_limit=self.participant_limit,
            request_moderation=self.request_moderation,
        )

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            'example': {
                'title': 'Jazz night',
                'annotation': 'An evening of live jazz at the riverside',
                'description': 'Three bands, two sets each, open bar from 19:00.',
                'category': 1,
                'eventDate': '2030-06-01 19:00:00',
                'location': {'lat': 55.754167, 'lon': 37.62},
                'paid': True,
                'participantLimit': 120,
                'requestModeration': False,
            }
        }


class UpdateEventRequest(BaseModel):
    """Every field is optional; null or missing leaves the event unchanged."""

    title: Optional[str] = Field(default=None, min_length=3, max_length=120)
    annotation: Optional[str] = Field(default=None, min_length=20, max_length=2000)
    description: Optional[str] = Field(default=None, min_length=20, max_length=7000)
    category: Optional[int] = None
    event_date: Optional[datetime] = None
    location: Optional[LocationSchema] = None
    paid: Optional[bool] = None
    participant_limit: Optional[int] = Field(default=None, ge=0)
    request_moderation: Optional[bool] = None
    state_action: Optional[str] = None

    @field_validator('event_date', mode='before')
    @classmethod
    def parse_event_date(cls, value: Any) -> Any:
        return parse_wire_datetime(value)

    def to_update(self) -> EventUpdate:
        """
        Raises:
            ValidationError: state_action names no known action
        """
        return EventUpdate.from_values(
            title=self.title,
            annotation=self.annotation,
            description=self.description,
            participant_limit=self.participant_limit,
            paid=self.paid,
            request_moderation=self.request_moderation,
            event_date=self.event_date,
            category_id=self.category,
            location=self.location.to_descriptor() if self.location else None,
            state_action=(
                EventStateAction.from_str(self.state_action) if self.state_action else None
            ),
        )

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            'example': {
                'annotation': 'Moved to the larger hall, same line-up',
                'participantLimit': 200,
                'stateAction': 'SEND_TO_REVIEW',
            }
        }


class CategoryResponse(BaseModel):
    id: int
    name: str


class UserShortResponse(BaseModel):
    id: int
    name: str


class EventShortResponse(BaseModel):
    id: int
    title: str
    annotation: str
    initiator: UserShortResponse
    category: CategoryResponse
    paid: bool
    event_date: datetime
    confirmed_requests: int
    views: int

    @field_serializer('event_date')
    def serialize_event_date(self, value: datetime) -> Optional[str]:
        return format_wire_datetime(value)

    @classmethod
    def from_dto(cls, dto: EventShortDto) -> 'EventShortResponse':
        return cls(
            id=dto.id,
            title=dto.title,
            annotation=dto.annotation,
            initiator=UserShortResponse(id=dto.initiator.id, name=dto.initiator.name),
            category=CategoryResponse(id=dto.category.id, name=dto.category.name),
            paid=dto.paid,
            event_date=dto.event_date,
            confirmed_requests=dto.confirmed_requests,
            views=dto.views,
        )

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class EventFullResponse(BaseModel):
    id: int
    title: str
    annotation: str
    description: str
    initiator: UserShortResponse
    category: CategoryResponse
    location: LocationSchema
    paid: bool
    event_date: datetime
    created_on: datetime
    published_on: Optional[datetime] = None
    participant_limit: int
    request_moderation: bool
    confirmed_requests: int
    state: str
    views: int

    @field_serializer('event_date', 'created_on', 'published_on')
    def serialize_datetimes(self, value: Optional[datetime]) -> Optional[str]:
        return format_wire_datetime(value)

    @classmethod
    def from_dto(cls, dto: EventFullDto) -> 'EventFullResponse':
        return cls(
            id=dto.id,
            title=dto.title,
            annotation=dto.annotation,
            description=dto.description,
            initiator=UserShortResponse(id=dto.initiator.id, name=dto.initiator.name),
            category=CategoryResponse(id=dto.category.id, name=dto.category.name),
            location=LocationSchema(lat=dto.location.lat, lon=dto.location.lon),
            paid=dto.paid,
            event_date=dto.event_date,
            created_on=dto.created_on,
            published_on=dto.published_on,
            participant_limit=dto.participant_limit,
            request_moderation=dto.request_moderation,
            confirmed_requests=dto.confirmed_requests,
            state=dto.state.value,
            views=dto.views,
        )

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            'example': {
                'id': 1,
                'title': 'Jazz night',
                'annotation': 'An evening of live jazz at the riverside',
                'description': 'Three bands, two sets each, open bar from 19:00.',
                'initiator': {'id': 3, 'name': 'Ann'},
                'category': {'id': 1, 'name': 'Concerts'},
                'location': {'lat': 55.754167, 'lon': 37.62},
                'paid': True,
                'eventDate': '2030-06-01 19:00:00',
                'createdOn': '2030-05-01 10:00:00',
                'publishedOn': '2030-05-02 09:30:00',
                'participantLimit': 120,
                'requestModeration': False,
                'confirmedRequests': 14,
                'state': 'PUBLISHED',
                'views': 250,
            }
        }
