"""
Unit tests for UpdateEventUseCase

Both paths lock the event through the unit of work, apply the partial update
and state action, then save and commit. Failures roll back.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ConflictError, NotFoundError, ValidationError
from src.service.event_hub.app.command.update_event_use_case import UpdateEventUseCase
from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.domain.enum.event_state import EventState
from src.service.event_hub.domain.enum.event_state_action import EventStateAction
from src.service.event_hub.domain.value_object.event_update import EventUpdate
from src.service.event_hub.domain.value_object.location_descriptor import LocationDescriptor
from test.service.event_hub.helpers import (
    ANN,
    RIVERSIDE,
    THEATRE,
    FakeUnitOfWork,
    build_event,
    build_published_event,
)


@pytest.fixture
def user_query_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.exists = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def category_query_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=THEATRE)
    return repo


def _use_case(
    event: Event | None, user_query_repo: AsyncMock, category_query_repo: AsyncMock
) -> tuple[UpdateEventUseCase, FakeUnitOfWork]:
    uow = FakeUnitOfWork(event=event)
    use_case = UpdateEventUseCase(
        uow=uow,  # type: ignore[arg-type]
        user_query_repo=user_query_repo,
        category_query_repo=category_query_repo,
    )
    return use_case, uow


@pytest.mark.unit
class TestUpdateByOwner:
    @pytest.mark.asyncio
    async def test_partial_update_keeps_absent_fields(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        # Arrange
        event = build_event(id=5)
        use_case, uow = _use_case(event, user_query_repo, category_query_repo)

        # Act
        result = await use_case.update_by_owner(
            owner_id=ANN.id, event_id=5, update=EventUpdate(title='Blues night')
        )

        # Assert
        assert result.title == 'Blues night'
        assert result.annotation == event.annotation
        assert result.event_date == event.event_date
        uow.event_command_repo.get_by_id_and_initiator_for_update.assert_awaited_once_with(
            event_id=5, initiator_id=ANN.id
        )
        uow.event_command_repo.save.assert_awaited_once()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_owner_not_found(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        user_query_repo.exists.return_value = False
        use_case, uow = _use_case(build_event(), user_query_repo, category_query_repo)

        with pytest.raises(NotFoundError, match='User with id=7 was not found'):
            await use_case.update_by_owner(owner_id=ANN.id, event_id=1, update=EventUpdate())
        uow.event_command_repo.get_by_id_and_initiator_for_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_event_of_other_owner_not_found(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        use_case, uow = _use_case(None, user_query_repo, category_query_repo)

        with pytest.raises(NotFoundError, match='Event with id=9 was not found'):
            await use_case.update_by_owner(owner_id=ANN.id, event_id=9, update=EventUpdate())
        assert uow.rolled_back

    @pytest.mark.asyncio
    async def test_published_event_is_immutable(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        use_case, uow = _use_case(build_published_event(), user_query_repo, category_query_repo)

        with pytest.raises(ConflictError, match='Event state is Published'):
            await use_case.update_by_owner(
                owner_id=ANN.id, event_id=1, update=EventUpdate(category_id=THEATRE.id)
            )
        # the gate runs before any reference is resolved
        category_query_repo.get_by_id.assert_not_awaited()
        uow.event_command_repo.save.assert_not_awaited()
        assert uow.rolled_back

    @pytest.mark.asyncio
    async def test_category_and_location_are_resolved(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        use_case, uow = _use_case(build_event(), user_query_repo, category_query_repo)
        descriptor = LocationDescriptor(lat=RIVERSIDE.lat, lon=RIVERSIDE.lon)

        result = await use_case.update_by_owner(
            owner_id=ANN.id,
            event_id=1,
            update=EventUpdate(category_id=THEATRE.id, location=descriptor),
        )

        assert result.category == THEATRE
        assert result.location == RIVERSIDE
        uow.location_command_repo.resolve.assert_awaited_once_with(descriptor=descriptor)

    @pytest.mark.asyncio
    async def test_missing_category_is_not_found(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        category_query_repo.get_by_id.return_value = None
        use_case, _ = _use_case(build_event(), user_query_repo, category_query_repo)

        with pytest.raises(NotFoundError, match='Category with id=2 was not found'):
            await use_case.update_by_owner(
                owner_id=ANN.id, event_id=1, update=EventUpdate(category_id=THEATRE.id)
            )

    @pytest.mark.asyncio
    async def test_cancel_review(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        use_case, _ = _use_case(build_event(), user_query_repo, category_query_repo)

        result = await use_case.update_by_owner(
            owner_id=ANN.id,
            event_id=1,
            update=EventUpdate(state_action=EventStateAction.CANCEL_REVIEW),
        )

        assert result.state == EventState.CANCELED

    @pytest.mark.asyncio
    async def test_owner_date_rule_is_one_hour(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock, now: datetime
    ) -> None:
        use_case, _ = _use_case(build_event(), user_query_repo, category_query_repo)

        with pytest.raises(ValidationError, match='earlier than 1 hours'):
            await use_case.update_by_owner(
                owner_id=ANN.id,
                event_id=1,
                update=EventUpdate(event_date=now + timedelta(minutes=30)),
            )


@pytest.mark.unit
class TestUpdateByAdmin:
    @pytest.mark.asyncio
    async def test_publish_pending_event(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        use_case, uow = _use_case(build_event(id=5), user_query_repo, category_query_repo)

        result = await use_case.update_by_admin(
            event_id=5, update=EventUpdate(state_action=EventStateAction.PUBLISH_EVENT)
        )

        assert result.state == EventState.PUBLISHED
        assert result.published_on is not None
        uow.event_command_repo.get_by_id_for_update.assert_awaited_once_with(event_id=5)
        assert uow.committed

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'action,state',
        [
            (EventStateAction.PUBLISH_EVENT, EventState.CANCELED),
            (EventStateAction.PUBLISH_EVENT, EventState.PUBLISHED),
            (EventStateAction.REJECT_EVENT, EventState.PUBLISHED),
            (EventStateAction.REJECT_EVENT, EventState.CANCELED),
        ],
    )
    async def test_illegal_transition_is_conflict(
        self,
        action: EventStateAction,
        state: EventState,
        user_query_repo: AsyncMock,
        category_query_repo: AsyncMock,
    ) -> None:
        event = build_event(state=state)
        use_case, uow = _use_case(event, user_query_repo, category_query_repo)

        with pytest.raises(ConflictError, match='You cannot'):
            await use_case.update_by_admin(event_id=1, update=EventUpdate(state_action=action))
        uow.event_command_repo.save.assert_not_awaited()
        assert uow.rolled_back

    @pytest.mark.asyncio
    async def test_event_not_found(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock
    ) -> None:
        use_case, _ = _use_case(None, user_query_repo, category_query_repo)

        with pytest.raises(NotFoundError, match='Event with id=3 was not found'):
            await use_case.update_by_admin(event_id=3, update=EventUpdate())

    @pytest.mark.asyncio
    async def test_admin_date_rule_is_two_hours(
        self, user_query_repo: AsyncMock, category_query_repo: AsyncMock, now: datetime
    ) -> None:
        use_case, _ = _use_case(build_event(), user_query_repo, category_query_repo)

        with pytest.raises(ValidationError, match='earlier than 2 hours'):
            await use_case.update_by_admin(
                event_id=1, update=EventUpdate(event_date=now + timedelta(minutes=90))
            )
