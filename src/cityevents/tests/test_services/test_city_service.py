import pytest

from cityevents.exceptions.base import (
    BadRequestError,
    DuplicateError,
    IntegrityConflictError,
    NotFoundError,
)
from cityevents.repositories.city_repository import CityRepository
from cityevents.schemas.city_schema import CityCreate, CityOut
from cityevents.tests.test_fixtures.data import (
    DEPENDENT_CITY_ID,
    INDEPENDENT_CITY_ID,
    NON_EXISTING_ID,
)


@pytest.mark.asyncio
class TestCityServiceFindAll:

    async def test_returns_dtos_sorted_by_name(self, city_service):
        cities = await city_service.find_all()

        assert all(isinstance(c, CityOut) for c in cities)
        assert [c.name for c in cities][:3] == ["Belo Horizonte", "Belém", "Brasília"]


@pytest.mark.asyncio
class TestCityServiceInsert:

    async def test_insert_commits_and_returns_new_id(self, city_service, session_maker):
        """
        Behavior:
                - insert() returns a DTO with a fresh id.
                - The row is visible from a different session, so it was committed.
        """
        created = await city_service.insert(CityCreate(name="Recife"))

        assert created.id > 10
        assert created.name == "Recife"

        async with session_maker() as other:
            assert await CityRepository(other).exists(created.id)

    async def test_insert_same_name_twice_is_allowed(self, city_service):
        # city names are not unique
        first = await city_service.insert(CityCreate(name="Recife"))
        second = await city_service.insert(CityCreate(name="Recife"))

        assert first.id != second.id

    async def test_unique_violation_maps_to_duplicate(self, city_service, monkeypatch):
        """
        Behavior:
                - Re-inserting an existing primary key surfaces as DuplicateError.

        Importance:
                - Confirms the mapper path for unique violations through the service.
        """
        async def _create_with_existing_id(name):
            return await city_service.cities.create(id=DEPENDENT_CITY_ID, name=name)

        monkeypatch.setattr(city_service.cities, "create_city", _create_with_existing_id)

        with pytest.raises(DuplicateError) as exc_info:
            await city_service.insert(CityCreate(name="Clone"))

        assert exc_info.value.http_status() == 409


@pytest.mark.asyncio
class TestCityServiceDelete:

    async def test_delete_independent_city(self, city_service, session_maker):
        await city_service.delete(INDEPENDENT_CITY_ID)

        async with session_maker() as other:
            assert not await CityRepository(other).exists(INDEPENDENT_CITY_ID)

    async def test_delete_unknown_city_raises_not_found(self, city_service):
        with pytest.raises(NotFoundError) as exc_info:
            await city_service.delete(NON_EXISTING_ID)

        assert exc_info.value.message == "Resource not found"

    async def test_delete_dependent_city_raises_bad_request(self, city_service, session_maker):
        """
        Behavior:
                - A city hosting events is refused with BadRequestError.
                - The city and its events are left untouched.
        """
        with pytest.raises(BadRequestError) as exc_info:
            await city_service.delete(DEPENDENT_CITY_ID)

        assert exc_info.value.message == "The city has one or more event(s)"
        assert exc_info.value.http_status() == 400

        async with session_maker() as other:
            repo = CityRepository(other)
            assert await repo.exists(DEPENDENT_CITY_ID)
            assert await repo.count_events(DEPENDENT_CITY_ID) == 2

    async def test_delete_rejected_by_database_raises_integrity_conflict(
        self, city_service, session_maker, monkeypatch
    ):
        """
        Behavior:
                - Pretend the event check found nothing (an event was attached concurrently).
                - The FK still blocks the delete; IntegrityConflictError is raised and
                  nothing is removed.
        """
        async def _no_events(city_id):
            return 0

        monkeypatch.setattr(city_service.cities, "count_events", _no_events)

        with pytest.raises(IntegrityConflictError):
            await city_service.delete(DEPENDENT_CITY_ID)

        async with session_maker() as other:
            assert await CityRepository(other).exists(DEPENDENT_CITY_ID)
