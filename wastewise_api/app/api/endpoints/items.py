"""
Listing endpoints.

Browsing is public.  Creating, editing and deleting listings requires
a session, and only the owner may edit or delete.  Fetching a single
listing counts as a view.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from wastewise_api.app.api.deps import get_settings, get_storage
from wastewise_api.app.core.config import Settings
from wastewise_api.app.core.errors import NotFoundError
from wastewise_api.app.core.security import get_current_user_id
from wastewise_api.app.core.validation import validate_item_create, validate_item_patch
from wastewise_api.app.schemas.item import Item, ItemPatch
from wastewise_api.app.services.storage import Storage

router = APIRouter()


async def _owned_item(storage: Storage, item_id: int, user_id: int) -> Item:
    item = await storage.get_item(item_id)
    if item is None:
        raise NotFoundError("Item not found")
    if item.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only modify your own items")
    return item


@router.post("", response_model=Item, status_code=status.HTTP_201_CREATED)
async def create_item(
    payload: Dict[str, Any] = Body(...),
    current_user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> Item:
    """Create a listing owned by the signed-in user.

    ``userId`` defaults to the session user and must match it when
    given.
    """
    if "userId" not in payload and "user_id" not in payload:
        payload["userId"] = current_user_id
    data = validate_item_create(payload).unwrap()
    if data.user_id != current_user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only list items as yourself")
    return await storage.create_item(data)


@router.get("", response_model=List[Item])
async def list_items(
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius: Optional[float] = Query(None, gt=0),
    category: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
) -> List[Item]:
    """List available listings.

    - **latitude**, **longitude**: when both are given, only listings
      within **radius** km (default from settings) are returned.
    - **category**: exact match; ``All`` disables the filter.
    """
    return await storage.get_nearby_items(
        latitude,
        longitude,
        radius if radius is not None else settings.default_radius_km,
        category,
    )


@router.get("/{item_id}", response_model=Item)
async def get_item(item_id: int, storage: Storage = Depends(get_storage)) -> Item:
    """Fetch a listing and count the view."""
    item = await storage.record_item_view(item_id)
    if item is None:
        raise NotFoundError("Item not found")
    return item


@router.patch("/{item_id}", response_model=Item)
async def update_item(
    item_id: int,
    payload: Dict[str, Any] = Body(...),
    current_user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> Item:
    """Edit a listing (owner only).  Counters cannot be edited."""
    await _owned_item(storage, item_id, current_user_id)
    changes = validate_item_patch(payload).unwrap()
    updated = await storage.update_item(item_id, ItemPatch(**changes.model_dump(exclude_unset=True)))
    if updated is None:
        raise NotFoundError("Item not found")
    return updated


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    current_user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> Response:
    await _owned_item(storage, item_id, current_user_id)
    await storage.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
