"""
Repository layer: data access for cities and events.

Usage:
    from cityevents.repositories import CityRepository, EventRepository
"""

from .base_repository import BaseRepository
from .city_repository import CityRepository
from .event_repository import EventRepository

__all__ = [
    "BaseRepository",
    "CityRepository",
    "EventRepository",
]
