"""
User endpoints.

Public profile lookups, a user's listings and (for the signed-in user
only) the enriched chat list shown on the messaging page.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from wastewise_api.app.api.deps import get_chat_view_service, get_storage
from wastewise_api.app.core.errors import NotFoundError
from wastewise_api.app.core.security import get_current_user_id
from wastewise_api.app.schemas.chat import EnrichedChat
from wastewise_api.app.schemas.item import Item
from wastewise_api.app.schemas.user import UserPublic
from wastewise_api.app.services.chat_view_service import ChatViewService
from wastewise_api.app.services.storage import Storage

router = APIRouter()


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(user_id: int, storage: Storage = Depends(get_storage)) -> UserPublic:
    user = await storage.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user.public()


@router.get("/{user_id}/items", response_model=List[Item])
async def list_user_items(user_id: int, storage: Storage = Depends(get_storage)) -> List[Item]:
    """List every listing owned by a user, whatever its status."""
    return await storage.get_items_by_user_id(user_id)


@router.get("/{user_id}/chats", response_model=List[EnrichedChat])
async def list_user_chats(
    user_id: int,
    current_user_id: int = Depends(get_current_user_id),
    chat_views: ChatViewService = Depends(get_chat_view_service),
) -> List[EnrichedChat]:
    """List the signed-in user's chats, most recently active first."""
    if user_id != current_user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return await chat_views.build_enriched_chats(user_id)
