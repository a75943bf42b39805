"""
Schema creation and the reference city/event dataset.

The dataset is what the HTTP integration tests are written against:
  - cities 1..10, inserted in id order (names deliberately not alphabetical)
  - events 1..4 live in cities 1, 2 and 4
  - city 5 (Manaus) and city 7 (Goiânia) own no events
"""

import datetime
import logging

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from cityevents.database.base import Base
from cityevents.models import City, Event

logger = logging.getLogger(__name__)


SEED_CITIES: list[tuple[int, str]] = [
    (1, "São Paulo"),
    (2, "Brasília"),
    (3, "Fortaleza"),
    (4, "Salvador"),
    (5, "Manaus"),
    (6, "Curitiba"),
    (7, "Goiânia"),
    (8, "Belém"),
    (9, "Belo Horizonte"),
    (10, "Porto Alegre"),
]

SEED_EVENTS: list[tuple[int, str, datetime.date, str, int]] = [
    (1, "Feira do Software", datetime.date(2021, 5, 16), "https://feiradosoftware.com", 1),
    (2, "CCXP", datetime.date(2021, 4, 13), "https://ccxp.com.br", 1),
    (3, "Congresso Linux", datetime.date(2021, 5, 23), "https://congressolinux.com.br", 2),
    (4, "Turismo Nordeste", datetime.date(2021, 6, 2), "https://turismonordeste.com.br", 4),
]


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_reference_data(session: AsyncSession) -> bool:
    """
    Insert the reference dataset unless the cities table already has rows.

    Returns:
        True if rows were inserted, False if the table was already populated.
    """
    existing = (await session.execute(select(func.count(City.id)))).scalar() or 0
    if existing:
        logger.info("seed.skipped", extra={"existing_cities": existing})
        return False

    session.add_all(City(id=city_id, name=name) for city_id, name in SEED_CITIES)
    await session.flush()

    session.add_all(
        Event(id=event_id, name=name, date=date, url=url, city_id=city_id)
        for event_id, name, date, url, city_id in SEED_EVENTS
    )
    await session.flush()

    # explicit ids do not advance Postgres sequences; realign them so inserts keep working
    if session.bind.dialect.name == "postgresql":
        for table in ("cities", "events"):
            await session.execute(
                text(f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), (SELECT MAX(id) FROM {table}))")
            )

    await session.commit()

    logger.info(
        "seed.loaded",
        extra={"cities": len(SEED_CITIES), "events": len(SEED_EVENTS)},
    )
    return True
