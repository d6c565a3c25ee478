"""
Pydantic models for listings (items offered for sale or donation).

A listing's ``price`` only means something when ``type`` is ``sell``;
donations always carry ``price = None`` regardless of what the client
sent.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from .base import CamelModel, UtcDatetime, reject_null

ItemType = Literal["sell", "donate"]
ItemStatus = Literal["available", "reserved", "completed"]


class ItemBase(CamelModel):
    user_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, examples=["Office Chair"])
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, examples=["furniture"])
    type: ItemType
    price: Optional[float] = Field(None, ge=0)
    images: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    location: str = Field(..., min_length=1)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    expiry_date: Optional[UtcDatetime] = None
    status: ItemStatus = "available"

    @model_validator(mode="after")
    def drop_donation_price(self):
        if self.type == "donate":
            self.price = None
        return self


class ItemCreate(ItemBase):
    """Schema for creating a listing."""


class Item(ItemBase):
    """Stored listing."""

    id: int
    views: int = 0
    inquiries: int = 0
    created_at: datetime


class ItemSummary(CamelModel):
    """Listing fields shown next to a chat."""

    id: int
    title: str
    images: List[str] = Field(default_factory=list)


class ListingUpdate(CamelModel):
    """Fields an owner may change through the API."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    type: Optional[ItemType] = None
    price: Optional[float] = Field(None, ge=0)
    images: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    location: Optional[str] = Field(None, min_length=1)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    expiry_date: Optional[UtcDatetime] = None
    status: Optional[ItemStatus] = None

    @field_validator(
        "title", "description", "category", "type", "images", "tags", "location", "status"
    )
    @classmethod
    def required_on_item(cls, value):
        return reject_null(value)


class ItemPatch(ListingUpdate):
    """Partial update of a stored listing, counters included."""

    views: Optional[int] = Field(None, ge=0)
    inquiries: Optional[int] = Field(None, ge=0)

    @field_validator("views", "inquiries")
    @classmethod
    def counters_not_null(cls, value):
        return reject_null(value)
