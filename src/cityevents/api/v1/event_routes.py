from fastapi import APIRouter, Depends

from cityevents.api.dependencies import get_event_service
from cityevents.schemas.event_schema import EventOut, EventUpdate
from cityevents.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["Events"])


@router.put("/{event_id}", response_model=EventOut)
async def update_event(
    event_id: int,
    payload: EventUpdate,
    service: EventService = Depends(get_event_service),
):
    """Full replace of an event; 404 when the event or its city does not exist."""
    return await service.update(event_id, payload)
