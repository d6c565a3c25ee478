"""Pydantic models for chats between two users."""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, model_validator

from .base import CamelModel, UtcDatetime
from .item import ItemSummary
from .message import Message
from .user import UserProjection


class ChatCreate(CamelModel):
    user_id1: int = Field(..., gt=0)
    user_id2: int = Field(..., gt=0)
    item_id: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def distinct_participants(self):
        if self.user_id1 == self.user_id2:
            raise ValueError("a chat needs two different participants")
        return self

    def participants(self) -> frozenset:
        return frozenset((self.user_id1, self.user_id2))


class Chat(ChatCreate):
    id: int
    last_message_at: Optional[datetime] = None

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user_id1, self.user_id2)

    def other_participant(self, user_id: int) -> int:
        return self.user_id2 if self.user_id1 == user_id else self.user_id1


class ChatPatch(CamelModel):
    model_config = ConfigDict(extra="forbid")

    item_id: Optional[int] = Field(None, gt=0)
    last_message_at: Optional[UtcDatetime] = None


class EnrichedChat(Chat):
    """A chat with its last message, counterpart and related listing."""

    last_message: Optional[Message] = None
    other_user: Optional[UserProjection] = None
    item: Optional[ItemSummary] = None
