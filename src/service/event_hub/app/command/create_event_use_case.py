from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.dto.event_dto import EventFullDto
from src.service.event_hub.app.interface.i_category_query_repo import ICategoryQueryRepo
from src.service.event_hub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_hub.app.mapper.event_mapper import to_full_dto
from src.service.event_hub.domain.entity.event_entity import Event
from src.service.event_hub.domain.event_lifecycle import ensure_event_date_far_enough
from src.service.event_hub.domain.value_object.new_event_spec import NewEventSpec


class CreateEventUseCase:
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
    async def create(self, *, owner_id: int, spec: NewEventSpec) -> EventFullDto:
        """
        Create a PENDING event for `owner_id`.

        Raises:
            ValidationError: event date is not far enough in the future
            NotFoundError: owner or category does not exist
        """
        now = datetime.now(timezone.utc)
        ensure_event_date_far_enough(
            spec.event_date, reference=now, hours=settings.OWNER_CREATE_MIN_HOURS
        )

        user = await self.user_query_repo.get_by_id(user_id=owner_id)
        if not user:
            raise NotFoundError(f'User with id={owner_id} was not found')

        category = await self.category_query_repo.get_by_id(category_id=spec.category_id)
        if not category:
            raise NotFoundError(f'Category with id={spec.category_id} was not found')

        async with self.uow:
            location = await self.uow.location_command_repo.resolve(descriptor=spec.location)
            event = Event.create(
                title=spec.title,
                annotation=spec.annotation,
                description=spec.description,
                event_date=spec.event_date,
                category=category,
                initiator=user.to_short(),
                location=location,
                paid=spec.paid,
                participant_limit=spec.participant_limit,
                request_moderation=spec.request_moderation,
                now=now,
            )
            saved = await self.uow.event_command_repo.save(event=event)
            await self.uow.commit()

        Logger.base.info(f'✅ [CREATE_EVENT] Event {saved.id} created by user {owner_id}')
        return to_full_dto(saved)
