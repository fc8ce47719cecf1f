from abc import ABC, abstractmethod
from typing import Optional

from src.service.event_hub.domain.entity.category_entity import Category


class ICategoryQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, category_id: int) -> Optional[Category]:
        pass
