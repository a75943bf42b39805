from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cityevents.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .event import Event


class City(Base):
    """
    SQLAlchemy model for a City.

    A city hosts many events. It cannot be removed while any event still
    references it (FK is RESTRICT and CityService checks it first).
    """
    __tablename__ = "cities"

    # Integer primary key assigned by the database on insert
    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # --- Relationships ---

    # One-to-Many: a city hosts many events.
    # Never iterated by the service layer; dependents are counted with
    # CityRepository.count_events() instead of loading the collection.
    events: Mapped[list["Event"]] = relationship(
        "Event",
        back_populates="city",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<City(id={self.id!r}, name={self.name!r})>"
