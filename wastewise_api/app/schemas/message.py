"""Pydantic models for chat messages."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class MessageCreate(CamelModel):
    chat_id: int = Field(..., gt=0)
    sender_id: int = Field(..., gt=0)
    content: str = Field(..., min_length=1, examples=["Is this still available?"])


class Message(MessageCreate):
    id: int
    created_at: datetime
