"""
Message endpoints.

Messages are always sent as the signed-in user into a chat they take
part in.  Sending a message bumps the chat's ``lastMessageAt``.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status

from wastewise_api.app.api.deps import get_storage
from wastewise_api.app.api.endpoints.chats import participant_chat
from wastewise_api.app.core.security import get_current_user_id
from wastewise_api.app.core.validation import validate_message_create
from wastewise_api.app.schemas.message import Message
from wastewise_api.app.services.storage import Storage

router = APIRouter()


@router.post("", response_model=Message, status_code=status.HTTP_201_CREATED)
async def create_message(
    payload: Dict[str, Any] = Body(...),
    current_user_id: int = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> Message:
    if "senderId" not in payload and "sender_id" not in payload:
        payload["senderId"] = current_user_id
    data = validate_message_create(payload).unwrap()
    if data.sender_id != current_user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only send messages as yourself")
    await participant_chat(storage, data.chat_id, current_user_id)
    return await storage.create_message(data)
