"""
Top-level API router.

Aggregates the domain routers.  Auth routes (``/register``,
``/login``, ``/logout``, ``/user``) sit directly under the API prefix;
every other domain gets its own prefix.
"""

from fastapi import APIRouter

from .endpoints import auth, chats, disposal_centers, events, items, messages, users

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(items.router, prefix="/items", tags=["items"])
router.include_router(chats.router, prefix="/chats", tags=["chats"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
router.include_router(disposal_centers.router, prefix="/disposal-centers", tags=["disposal-centers"])
router.include_router(events.router, prefix="/events", tags=["events"])


@router.get("/health", tags=["health"])
async def health() -> dict:
    return {"status": "ok"}
