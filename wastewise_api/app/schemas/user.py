"""
Pydantic models for user data.

``UserCreate`` is the registration payload, ``User`` the stored
record (carrying the password hash), ``UserPublic`` what the API
returns.  The password field never leaves the service: every response
goes through ``UserPublic``.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from .base import CamelModel, reject_null


class UserBase(CamelModel):
    username: str = Field(..., min_length=1, examples=["alice"])
    name: str = Field(..., min_length=1, examples=["Alice Green"])
    email: str = Field(..., min_length=1, examples=["alice@example.com"])
    phone: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = Field(None, examples=["San Francisco, CA"])
    profile_image: Optional[str] = None


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(..., min_length=1)


class UserStats(CamelModel):
    green_points: int = 0
    items_shared: int = 0
    items_recycled: int = 0
    donations_made: int = 0
    co2_saved: float = 0.0


class UserPublic(UserBase, UserStats):
    """User as returned by the API."""

    id: int
    created_at: datetime


class User(UserPublic):
    """Stored user record.  ``password`` holds the PBKDF2 hash."""

    password: str

    def public(self) -> UserPublic:
        return UserPublic.model_validate(self.model_dump(exclude={"password"}))


class UserProjection(CamelModel):
    """Public fields of a chat counterpart."""

    id: int
    name: str
    profile_image: Optional[str] = None


class UserPatch(CamelModel):
    """Partial update of a stored user.  Unset fields are left untouched."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    profile_image: Optional[str] = None
    password: Optional[str] = None
    green_points: Optional[int] = None
    items_shared: Optional[int] = None
    items_recycled: Optional[int] = None
    donations_made: Optional[int] = None
    co2_saved: Optional[float] = None


class ProfileUpdate(CamelModel):
    """Fields a user may change on their own profile."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    profile_image: Optional[str] = None

    @field_validator("name", "email")
    @classmethod
    def required_on_user(cls, value):
        return reject_null(value)


class LoginData(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

