"""
Event use cases.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cityevents.exceptions.base import NotFoundError
from cityevents.repositories.city_repository import CityRepository
from cityevents.repositories.event_repository import EventRepository
from cityevents.schemas.event_schema import EventOut, EventUpdate

logger = logging.getLogger(__name__)


class EventService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.events = EventRepository(db)
        self.cities = CityRepository(db)

    async def update(self, event_id: int, data: EventUpdate) -> EventOut:
        """
        Replace every mutable field of an event (no partial update).

        The body's `id` is ignored; `event_id` from the path identifies the row.

        Raises:
            NotFoundError: the event does not exist, or `cityId` names no city.
        """
        event = await self.events.get_with_city(event_id)
        if event is None:
            logger.info("event.update.not_found", extra={"event_id": event_id})
            raise NotFoundError("Resource not found")

        city = await self.cities.get_by_id(data.city_id)
        if city is None:
            logger.info(
                "event.update.city_not_found",
                extra={"event_id": event_id, "city_id": data.city_id},
            )
            raise NotFoundError("Resource not found", fields=["cityId"])

        event.name = data.name
        event.date = data.date
        event.url = data.url
        event.city = city

        event = await self.events.save(event)
        await self.db.commit()

        logger.info("event.update.success", extra={"event_id": event.id, "city_id": event.city_id})
        return EventOut.model_validate(event)
