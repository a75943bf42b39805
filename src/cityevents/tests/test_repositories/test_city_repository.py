import logging

import pytest
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from cityevents.exceptions.base import RepositoryError
from cityevents.repositories.city_repository import sorted_by_name
from cityevents.tests.test_fixtures.data import (
    DEPENDENT_CITY_ID,
    INDEPENDENT_CITY_ID,
    NON_EXISTING_ID,
)


@pytest.mark.asyncio
class TestCityRepositoryListing:

    async def test_find_all_sorted_by_name(self, city_repository):
        """
        Behavior:
                - The ten reference cities come back ordered by name.
                - Binary collation puts "Belo Horizonte" before "Belém" before "Brasília".
        """
        cities = await city_repository.find_all_sorted()
        names = [c.name for c in cities]

        assert names[:3] == ["Belo Horizonte", "Belém", "Brasília"]
        assert names[-1] == "São Paulo"
        assert len(names) == 10

    async def test_find_all_sorted_includes_new_city(self, city_repository):
        await city_repository.create_city("Aracaju")

        cities = await city_repository.find_all_sorted()

        assert cities[0].name == "Aracaju"
        assert len(cities) == 11


@pytest.mark.asyncio
class TestCityRepositoryEvents:

    async def test_count_events(self, city_repository):
        assert await city_repository.count_events(DEPENDENT_CITY_ID) == 2
        assert await city_repository.count_events(INDEPENDENT_CITY_ID) == 0

    async def test_count_events_unknown_city_is_zero(self, city_repository):
        assert await city_repository.count_events(NON_EXISTING_ID) == 0

    async def test_count_events_failure_logs_dotted_event(self, city_repository, monkeypatch, caplog):
        """
        Behavior:
                - A driver failure while counting becomes RepositoryError.
                - The log event keeps the dotted `repo.<action>.failed` shape.
        """
        async def _broken_scalar(*args, **kwargs):
            raise RuntimeError("connection lost")

        monkeypatch.setattr(AsyncSession, "scalar", _broken_scalar)

        with caplog.at_level(logging.ERROR, logger="cityevents.repositories"):
            with pytest.raises(RepositoryError) as exc_info:
                await city_repository.count_events(DEPENDENT_CITY_ID)

        assert exc_info.value.message == "Failed to count events City"
        assert "repo.count_events.failed" in [r.getMessage() for r in caplog.records]


@pytest.mark.asyncio
class TestEventRepository:

    async def test_get_with_city_loads_relationship(self, event_repository):
        event = await event_repository.get_with_city(1)

        assert event is not None
        assert event.name == "Feira do Software"
        assert event.city.id == DEPENDENT_CITY_ID
        assert event.city.name == "São Paulo"

    async def test_get_with_city_missing(self, event_repository):
        assert await event_repository.get_with_city(NON_EXISTING_ID) is None


class TestSortedByName:

    def test_postgres_orders_by_byte_collation(self):
        sql = str(sorted_by_name("postgresql").compile(dialect=postgresql.dialect()))

        assert 'ORDER BY cities.name COLLATE "C"' in sql

    def test_sqlite_keeps_default_binary_order(self):
        sql = str(sorted_by_name("sqlite").compile(dialect=sqlite.dialect()))

        assert sql.rstrip().endswith("ORDER BY cities.name")
        assert "COLLATE" not in sql
