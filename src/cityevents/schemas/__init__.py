from .city_schema import CityCreate, CityOut
from .event_schema import EventUpdate, EventOut

__all__ = ["CityCreate", "CityOut", "EventUpdate", "EventOut"]
