from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_hub.domain.entity.user_entity import User
from src.service.event_hub.driven_adapter.model.user_model import UserModel


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def get_by_id(self, *, user_id: int) -> Optional[User]:
        async with self._get_session() as session:
            model = await session.get(UserModel, user_id)
            if not model:
                return None
            return User(id=model.id, name=model.name, email=model.email)

    @Logger.io
    async def exists(self, *, user_id: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(select(exists().where(UserModel.id == user_id)))
            return bool(result.scalar())
