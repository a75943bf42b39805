from typing import List

from fastapi import APIRouter, Depends, Response, status

from cityevents.api.dependencies import get_city_service
from cityevents.schemas.city_schema import CityCreate, CityOut
from cityevents.services.city_service import CityService

router = APIRouter(prefix="/cities", tags=["Cities"])


@router.get("", response_model=List[CityOut])
async def list_cities(service: CityService = Depends(get_city_service)):
    """All cities, sorted by name."""
    return await service.find_all()


@router.post("", response_model=CityOut, status_code=status.HTTP_201_CREATED)
async def create_city(payload: CityCreate, service: CityService = Depends(get_city_service)):
    return await service.insert(payload)


@router.delete("/{city_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_city(city_id: int, service: CityService = Depends(get_city_service)):
    """
    404 when the city does not exist, 400 when it still hosts events.
    """
    await service.delete(city_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
