from .city_service import CityService
from .event_service import EventService

__all__ = ["CityService", "EventService"]
