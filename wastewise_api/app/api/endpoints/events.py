"""Community event endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from wastewise_api.app.api.deps import get_storage
from wastewise_api.app.core.errors import NotFoundError
from wastewise_api.app.schemas.event import Event
from wastewise_api.app.services.storage import Storage

router = APIRouter()


@router.get("", response_model=List[Event])
async def list_upcoming_events(storage: Storage = Depends(get_storage)) -> List[Event]:
    """Events scheduled after now, soonest first."""
    return await storage.get_upcoming_events()


@router.get("/{event_id}", response_model=Event)
async def get_event(event_id: int, storage: Storage = Depends(get_storage)) -> Event:
    event = await storage.get_event(event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event
