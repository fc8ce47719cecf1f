"""
Unit tests for CreateEventUseCase

Flow: date rule (2h) -> owner -> category -> location (in the UoW) -> save.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.service.event_hub.app.command.create_event_use_case import CreateEventUseCase
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.value_object.location_descriptor import LocationDescriptor
from src.service.event_hub.domain.value_object.new_event_spec import NewEventSpec
from test.service.event_hub.helpers import ANN, CONCERTS, RIVERSIDE, FakeUnitOfWork


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def user_query_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=ANN)
    return repo


@pytest.fixture
def category_query_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=CONCERTS)
    return repo


@pytest.fixture
def use_case(
    uow: FakeUnitOfWork, user_query_repo: AsyncMock, category_query_repo: AsyncMock
) -> CreateEventUseCase:
    return CreateEventUseCase(
        uow=uow,  # type: ignore[arg-type]
        user_query_repo=user_query_repo,
        category_query_repo=category_query_repo,
    )


def _spec(event_date: datetime) -> NewEventSpec:
    return NewEventSpec(
        title='Jazz night',
        annotation='An evening of live jazz at the riverside',
        description='Three bands, two sets each, open bar from 19:00.',
        category_id=CONCERTS.id,
        event_date=event_date,
        location=LocationDescriptor(lat=RIVERSIDE.lat, lon=RIVERSIDE.lon),
        participant_limit=120,
    )


@pytest.mark.unit
class TestCreateEventUseCase:
    @pytest.mark.asyncio
    async def test_create_event_success(
        self, use_case: CreateEventUseCase, uow: FakeUnitOfWork, now: datetime
    ) -> None:
        # Act
        result = await use_case.create(owner_id=ANN.id, spec=_spec(now + timedelta(hours=3)))

        # Assert
        assert result.id == 101
        assert result.state == EventState.PENDING
        assert result.initiator.id == ANN.id
        assert result.category == CONCERTS
        assert result.location == RIVERSIDE
        assert result.confirmed_requests == 0
        assert result.published_on is None
        assert result.views == 0
        assert result.request_moderation is True
        assert result.paid is False
        uow.location_command_repo.resolve.assert_awaited_once_with(
            descriptor=LocationDescriptor(lat=RIVERSIDE.lat, lon=RIVERSIDE.lon)
        )
        assert uow.committed

    @pytest.mark.asyncio
    async def test_create_event_fail__date_too_close(
        self, use_case: CreateEventUseCase, user_query_repo: AsyncMock, now: datetime
    ) -> None:
        with pytest.raises(ValidationError, match='earlier than 2 hours'):
            await use_case.create(owner_id=ANN.id, spec=_spec(now + timedelta(hours=1)))

        # the date is checked before any lookup
        user_query_repo.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_event_fail__owner_not_found(
        self,
        use_case: CreateEventUseCase,
        user_query_repo: AsyncMock,
        uow: FakeUnitOfWork,
        now: datetime,
    ) -> None:
        user_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match='User with id=7 was not found'):
            await use_case.create(owner_id=ANN.id, spec=_spec(now + timedelta(hours=3)))
        uow.event_command_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_event_fail__category_not_found(
        self,
        use_case: CreateEventUseCase,
        category_query_repo: AsyncMock,
        uow: FakeUnitOfWork,
        now: datetime,
    ) -> None:
        category_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError, match='Category with id=1 was not found'):
            await use_case.create(owner_id=ANN.id, spec=_spec(now + timedelta(hours=3)))
        uow.event_command_repo.save.assert_not_awaited()
