"""
Authentication endpoints.

Registration and login establish a cookie session holding the user
id; logout clears it.  Usernames are unique: the storage facade checks
and creates under one lock.  Responses never include the password.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from wastewise_api.app.api.deps import get_storage
from wastewise_api.app.core.errors import NotFoundError
from wastewise_api.app.core.security import (
    get_current_user,
    login_session,
    logout_session,
    verify_password,
)
from wastewise_api.app.core.validation import (
    validate_login,
    validate_user_create,
    validate_user_patch,
)
from wastewise_api.app.schemas.user import User, UserPatch, UserPublic
from wastewise_api.app.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def register(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    storage: Storage = Depends(get_storage),
) -> UserPublic:
    """Create an account and sign it in.

    Returns 400 with field errors for malformed payloads and 400
    ``Username already exists`` when the username is taken.
    """
    data = validate_user_create(payload).unwrap()
    user = await storage.register_user(data)
    login_session(request, user.id)
    logger.info("Registered user %s", user.username)
    return user.public()


@router.post("/login", response_model=UserPublic)
async def login(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    storage: Storage = Depends(get_storage),
) -> UserPublic:
    """Verify a username and password and start a session."""
    result = validate_login(payload)
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required",
        )
    credentials = result.value
    user = await storage.get_user_by_username(credentials.username)
    if user is None or not verify_password(credentials.password, user.password):
        logger.info("Failed login for %s", credentials.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    login_session(request, user.id)
    return user.public()


@router.post("/logout")
async def logout(request: Request, user: User = Depends(get_current_user)) -> Dict[str, str]:
    logout_session(request)
    return {"message": "Logged out successfully"}


@router.get("/user", response_model=UserPublic)
async def current_user(user: User = Depends(get_current_user)) -> UserPublic:
    """Return the signed-in user."""
    return user.public()


@router.patch("/user", response_model=UserPublic)
async def update_profile(
    payload: Dict[str, Any] = Body(...),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> UserPublic:
    """Update profile fields of the signed-in user.

    Counters and credentials cannot be changed here; unknown fields
    are rejected.
    """
    profile = validate_user_patch(payload).unwrap()
    patch = UserPatch(**profile.model_dump(exclude_unset=True))
    updated = await storage.update_user(user.id, patch)
    if updated is None:
        raise NotFoundError("User not found")
    return updated.public()
