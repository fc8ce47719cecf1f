from abc import ABC, abstractmethod
from typing import Optional

from src.service.event_hub.domain.entity.user_entity import User


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def exists(self, *, user_id: int) -> bool:
        pass
