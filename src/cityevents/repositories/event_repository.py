"""
Event repository.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cityevents.models.event import Event
from .base_repository import BaseRepository, is_storable_id

logger = logging.getLogger(__name__)


class EventRepository(BaseRepository[Event]):
    """
    Repository for Event entity operations.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Event, db)

    async def get_with_city(self, event_id: int) -> Event | None:
        """
        Load an event together with its city (selectinload), so the city can be
        read after the session is done with it.
        """
        if not is_storable_id(event_id):
            return None
        async with self._read_guard("load", id=event_id):
            result = await self.db.execute(
                select(Event)
                .where(Event.id == event_id)
                .options(selectinload(Event.city))
            )
            return result.scalar_one_or_none()

