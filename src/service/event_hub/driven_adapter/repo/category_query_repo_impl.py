from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.interface.i_category_query_repo import ICategoryQueryRepo
from src.service.event_hub.domain.entity.category_entity import Category
from src.service.event_hub.driven_adapter.model.category_model import CategoryModel


class CategoryQueryRepoImpl(ICategoryQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def get_by_id(self, *, category_id: int) -> Optional[Category]:
        async with self._get_session() as session:
            model = await session.get(CategoryModel, category_id)
            return Category(id=model.id, name=model.name) if model else None
