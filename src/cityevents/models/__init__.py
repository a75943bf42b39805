"""
Single import point for the ORM models.

Importing this package registers every model on `Base.metadata`, which is
what `create_all()` needs:

    from cityevents.models import City, Event
"""

from .city import City
from .event import Event

__all__ = [
    "City",
    "Event",
]
