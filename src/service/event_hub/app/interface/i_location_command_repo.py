from abc import ABC, abstractmethod

from src.service.event_hub.domain.entity.location_entity import Location
from src.service.event_hub.domain.value_object.location_descriptor import LocationDescriptor


class ILocationCommandRepo(ABC):
    @abstractmethod
    async def resolve(self, *, descriptor: LocationDescriptor) -> Location:
        """Find the stored location with these coordinates, creating it if absent."""
        pass
