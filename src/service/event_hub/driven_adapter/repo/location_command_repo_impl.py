from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.event_hub.app.interface.i_location_command_repo import ILocationCommandRepo
from src.service.event_hub.domain.entity.location_entity import Location
from src.service.event_hub.domain.value_object.location_descriptor import LocationDescriptor
from src.service.event_hub.driven_adapter.model.location_model import LocationModel


class LocationCommandRepoImpl(ILocationCommandRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def resolve(self, *, descriptor: LocationDescriptor) -> Location:
        # ON CONFLICT keeps concurrent resolutions of the same point on one row
        await self.session.execute(
            insert(LocationModel)
            .values(lat=descriptor.lat, lon=descriptor.lon)
            .on_conflict_do_nothing(index_elements=['lat', 'lon'])
        )
        result = await self.session.execute(
            select(LocationModel).where(
                LocationModel.lat == descriptor.lat, LocationModel.lon == descriptor.lon
            )
        )
        model = result.scalar_one()
        return Location(id=model.id, lat=model.lat, lon=model.lon)
