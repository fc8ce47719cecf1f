"""
Update Event Use Case

Owner and admin edits share one flow inside a unit of work:
1. Lock the event row (SELECT ... FOR UPDATE)
2. Resolve the referenced category and location, if they changed
3. Apply the partial update and state action against the locked state
4. Save and commit

A concurrent edit of the same event waits on the row lock and is then
evaluated against the committed result, so it either applies or conflicts.
"""

from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.event_hub_metrics import metrics
from src.service.event_hub.app.dto.event_dto import EventFullDto
from src.service.event_hub.app.interface.i_category_query_repo import ICategoryQueryRepo
from src.service.event_hub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_hub.app.mapper.event_mapper import to_full_dto
from src.service.event_hub.domain.entity.category_entity import Category
from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.domain.entity.location_entity import Location
from src.service.event_hub.domain.enum.actor import Actor
from src.service.event_hub.domain.event_lifecycle import apply_update, ensure_not_published
from src.service.event_hub.domain.value_object.event_update import EventUpdate, is_set


class UpdateEventUseCase:
    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        user_query_repo: IUserQueryRepo,
        category_query_repo: ICategoryQueryRepo,
    ) -> None:
        self.uow = uow
        self.user_query_repo = user_query_repo
        self.category_query_repo = category_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        category_query_repo: ICategoryQueryRepo = Depends(
            Provide[Container.category_query_repo]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            user_query_repo=user_query_repo,
            category_query_repo=category_query_repo,
        )

    @Logger.io
    async def update_by_owner(
        self, *, owner_id: int, event_id: int, update: EventUpdate
    ) -> EventFullDto:
        if not await self.user_query_repo.exists(user_id=owner_id):
            raise NotFoundError(f'User with id={owner_id} was not found')

        async with self.uow:
            event = await self.uow.event_command_repo.get_by_id_and_initiator_for_update(
                event_id=event_id, initiator_id=owner_id
            )
            if not event:
                raise NotFoundError(f'Event with id={event_id} was not found')
            ensure_not_published(event)

            updated = await self._apply(
                event, update, actor=Actor.OWNER, min_hours=settings.OWNER_UPDATE_MIN_HOURS
            )
            saved = await self.uow.event_command_repo.save(event=updated)
            await self.uow.commit()

        Logger.base.info(f'✏️ [UPDATE_BY_OWNER] Event {event_id} updated by user {owner_id}')
        return to_full_dto(saved)

    @Logger.io
    async def update_by_admin(self, *, event_id: int, update: EventUpdate) -> EventFullDto:
        async with self.uow:
            event = await self.uow.event_command_repo.get_by_id_for_update(event_id=event_id)
            if not event:
                raise NotFoundError(f'Event with id={event_id} was not found')

            updated = await self._apply(
                event, update, actor=Actor.ADMIN, min_hours=settings.ADMIN_UPDATE_MIN_HOURS
            )
            saved = await self.uow.event_command_repo.save(event=updated)
            await self.uow.commit()

        Logger.base.info(f'🛡️ [UPDATE_BY_ADMIN] Event {event_id} now {saved.state}')
        return to_full_dto(saved)

    async def _apply(
        self, event: Event, update: EventUpdate, *, actor: Actor, min_hours: int
    ) -> Event:
        category: Optional[Category] = None
        if is_set(update.category_id):
            category = await self.category_query_repo.get_by_id(category_id=update.category_id)
            if not category:
                raise NotFoundError(f'Category with id={update.category_id} was not found')

        location: Optional[Location] = None
        if is_set(update.location):
            location = await self.uow.location_command_repo.resolve(descriptor=update.location)

        try:
            updated = apply_update(
                event,
                update,
                actor=actor,
                min_hours=min_hours,
                now=datetime.now(timezone.utc),
                category=category,
                location=location,
            )
        except ConflictError:
            if is_set(update.state_action):
                metrics.record_transition(
                    actor=actor, action=update.state_action, result='conflict'
                )
            raise

        if is_set(update.state_action):
            metrics.record_transition(actor=actor, action=update.state_action, result='applied')
        return updated
