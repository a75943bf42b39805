import datetime

from sqlalchemy import String, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cityevents.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .city import City


class Event(Base):
    """
    SQLAlchemy model for an Event.

    Every event belongs to exactly one city.
    """
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Calendar date only (no time component), serialized as ISO-8601 "YYYY-MM-DD"
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    url: Mapped[str] = mapped_column(String(500), nullable=False)

    # RESTRICT: the database refuses to delete a city that still has events
    city_id: Mapped[int] = mapped_column(
        ForeignKey("cities.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    # Many-to-One: each event belongs to a single city
    city: Mapped["City"] = relationship(
        "City",
        back_populates="events"
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id!r}, name={self.name!r}, date={self.date!r}, city_id={self.city_id!r})>"
