"""
City use cases: list, insert, delete.

The service owns the transaction: repositories flush, the service commits once
the whole operation succeeded. Any app-level error raised before the commit
leaves the session rolled back (see db_error_handler) or untouched.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cityevents.exceptions.base import BadRequestError, NotFoundError
from cityevents.repositories.city_repository import CityRepository
from cityevents.schemas.city_schema import CityCreate, CityOut

logger = logging.getLogger(__name__)


class CityService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.cities = CityRepository(db)

    async def find_all(self) -> list[CityOut]:
        cities = await self.cities.find_all_sorted()
        return [CityOut.model_validate(city) for city in cities]

    async def insert(self, data: CityCreate) -> CityOut:
        city = await self.cities.create_city(name=data.name)
        await self.db.commit()

        logger.info("city.insert.success", extra={"city_id": city.id})
        return CityOut.model_validate(city)

    async def delete(self, city_id: int) -> None:
        """
        Delete a city that hosts no events.

        Order of checks:
          1. unknown id                  -> NotFoundError (404)
          2. city still hosts events     -> BadRequestError (400), nothing deleted
          3. DB rejects the delete (FK)  -> IntegrityConflictError (400), rolled back

        Raises:
            NotFoundError, BadRequestError, IntegrityConflictError
        """
        if not await self.cities.exists(city_id):
            logger.info("city.delete.not_found", extra={"city_id": city_id})
            raise NotFoundError("Resource not found")

        event_count = await self.cities.count_events(city_id)
        if event_count:
            logger.info(
                "city.delete.has_events",
                extra={"city_id": city_id, "event_count": event_count},
            )
            raise BadRequestError("The city has one or more event(s)")

        await self.cities.delete(city_id)
        await self.db.commit()

        logger.info("city.delete.success", extra={"city_id": city_id})
