from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cityevents.database.session import get_async_session
from cityevents.services.city_service import CityService
from cityevents.services.event_service import EventService


def get_city_service(db: AsyncSession = Depends(get_async_session)) -> CityService:
    return CityService(db)


def get_event_service(db: AsyncSession = Depends(get_async_session)) -> EventService:
    return EventService(db)
