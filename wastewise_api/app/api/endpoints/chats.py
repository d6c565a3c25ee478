"""
Chat endpoints.

``POST /chats`` is idempotent per participant pair and listing: asking
for an existing chat returns it with 200, a new chat is returned with
201 and counts as an inquiry on the listing.  Only participants can
read a chat and its messages.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from wastewise_api.app.api.deps import get_storage
from wastewise_api.app.core.errors import NotFoundError
from wastewise_api.app.core.security import get_current_user_id
from wastewise_api.app.core.validation import validate_chat_create
from wastewise_api.app.schemas.chat import Chat
from wastewise_api.app.schemas.message import Message
from wastewise_api.app.services.storage import Storage

router = APIRouter()


async def participant_chat(storage: Storage, chat_id: int, user_id: int) -> Chat:
    """Return the chat if ``user_id`` takes part in it, else raise 404/403."""
    chat = await storage.get_chat(chat_id)
    if chat is None:
        raise NotFoundError("Chat not found")
    if not chat.has_participant(user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a participant of this chat")
    return chat


@router.post("", response_model=Chat, status_code=status.HTTP_201_CREATED)
async def create_chat(
    response: Response,
    payload: Dict[str, Any] = Body(...),
    current_user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> Chat:
    """Open a chat with another user, or return the existing one."""
    if "userId1" not in payload and "user_id1" not in payload:
        payload["userId1"] = current_user_id
    data = validate_chat_create(payload).unwrap()
    if current_user_id not in data.participants():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only open chats you take part in")

    other_id = data.user_id2 if data.user_id1 == current_user_id else data.user_id1
    if await storage.get_user(other_id) is None:
        raise NotFoundError("User not found")
    if data.item_id is not None and await storage.get_item(data.item_id) is None:
        raise NotFoundError("Item not found")

    chat, created = await storage.find_or_create_chat(data)
    if not created:
        response.status_code = status.HTTP_200_OK
    return chat


@router.get("/{chat_id}", response_model=Chat)
async def get_chat(
    chat_id: int,
    current_user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> Chat:
    return await participant_chat(storage, chat_id, current_user_id)


@router.get("/{chat_id}/messages", response_model=List[Message])
async def list_chat_messages(
    chat_id: int,
    current_user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> List[Message]:
    """Messages of a chat, oldest first."""
    await participant_chat(storage, chat_id, current_user_id)
    return await storage.get_messages_by_chat_id(chat_id)
