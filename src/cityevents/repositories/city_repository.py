"""
City repository: sorted listing and the dependent-event check used before a delete.
"""

import logging

from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from cityevents.models.city import City
from cityevents.models.event import Event
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

# Byte-order collation per dialect, so "Belo Horizonte" sorts before "Belém"
# everywhere. SQLite already compares with BINARY.
BYTE_ORDER_COLLATIONS = {
    "postgresql": "C",
}


def sorted_by_name(dialect_name: str) -> Select:
    name = City.name
    collation = BYTE_ORDER_COLLATIONS.get(dialect_name)
    if collation:
        name = name.collate(collation)
    return select(City).order_by(name)


class CityRepository(BaseRepository[City]):
    """
    Repository for City entity operations.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(City, db)

    async def find_all_sorted(self) -> list[City]:
        """
        All cities ordered by name ascending, compared byte by byte
        independent of the database's default collation.
        """
        dialect_name = self.db.get_bind().dialect.name
        async with self._read_guard("list_sorted", dialect=dialect_name):
            result = await self.db.execute(sorted_by_name(dialect_name))
            return list(result.scalars().all())

    async def create_city(self, name: str) -> City:
        return await self.create(name=name)

    async def count_events(self, city_id: int) -> int:
        """
        Number of events hosted by a city.

        Runs `SELECT count(events.id) WHERE city_id = :id` instead of loading
        `City.events`, so checking for dependents never materialises the collection.
        """
        async with self._read_guard("count_events", city_id=city_id):
            count = await self.db.scalar(
                select(func.count(Event.id)).where(Event.city_id == city_id)
            ) or 0

        logger.debug("repo.city.event_count", extra={"city_id": city_id, "event_count": count})
        return count
