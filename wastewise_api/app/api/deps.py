"""Shared FastAPI dependencies for the endpoint modules."""

from fastapi import Request

from ..core.config import Settings
from ..services.chat_view_service import ChatViewService
from ..services.storage import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_chat_view_service(request: Request) -> ChatViewService:
    return ChatViewService(request.app.state.storage)
