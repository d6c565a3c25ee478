"""Disposal and recycling center lookups."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from wastewise_api.app.api.deps import get_settings, get_storage
from wastewise_api.app.core.config import Settings
from wastewise_api.app.core.errors import NotFoundError
from wastewise_api.app.schemas.disposal_center import DisposalCenter
from wastewise_api.app.services.storage import Storage

router = APIRouter()


@router.get("", response_model=List[DisposalCenter])
async def list_disposal_centers(
    type: Optional[str] = Query(None),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius: Optional[float] = Query(None, gt=0),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> List[DisposalCenter]:
    """List centers, filtered by **type** and, with coordinates, by distance."""
    return await storage.get_nearby_disposal_centers(
        latitude,
        longitude,
        radius if radius is not None else settings.default_radius_km,
        type,
    )


@router.get("/{center_id}", response_model=DisposalCenter)
async def get_disposal_center(center_id: int, storage: Storage = Depends(get_storage)) -> DisposalCenter:
    center = await storage.get_disposal_center(center_id)
    if center is None:
        raise NotFoundError("Disposal center not found")
    return center
