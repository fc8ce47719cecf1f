"""
Unit of Work - one database transaction per command use case

- UoW owns the session lifecycle and commit/rollback
- Command repositories share the UoW session, so a locked read and the
  following save run inside the same transaction
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.event_hub.app.interface.i_event_command_repo import IEventCommandRepo
    from src.service.event_hub.app.interface.i_location_command_repo import (
        ILocationCommandRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            event = await uow.event_command_repo.get_by_id_for_update(event_id=...)
            ...
            await uow.event_command_repo.save(event=event)
            await uow.commit()
    """

    event_command_repo: IEventCommandRepo
    location_command_repo: ILocationCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self._session_cm: AsyncContextManager[AsyncSession] | None = None
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.event_hub.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from src.service.event_hub.driven_adapter.repo.location_command_repo_impl import (
            LocationCommandRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        self.event_command_repo = EventCommandRepoImpl(session=self.session)
        self.location_command_repo = LocationCommandRepoImpl(session=self.session)

        await super().__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._session_cm is not None:
                await self._session_cm.__aexit__(*args)
            self._session_cm = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
