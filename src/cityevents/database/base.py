"""
Declarative base shared by the City and Event models.

`Base.metadata` is what `create_all()` (app startup, tests) walks, so every
model module must be imported before the schema is created; `cityevents.models`
does that on import.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Deterministic constraint names; the FK name shows up in Postgres diagnostics
# (e.g. "fk_events_city_id_cities") and in mapped integrity errors.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
