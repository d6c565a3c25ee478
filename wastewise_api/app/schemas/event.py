"""
Pydantic models for community events.

Events (collection drives, clean-ups, workshops) are standalone
reference data with a scheduled ``date`` and an optional GreenPoints
reward for attendees.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel, UtcDatetime


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, examples=["E-Waste Collection Drive"])
    description: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, examples=["collection_drive"])
    date: UtcDatetime = Field(..., examples=["2025-09-01T10:00:00Z"])
    location: str = Field(..., min_length=1)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    green_points_reward: Optional[int] = Field(None, ge=0)
    image: Optional[str] = None


class Event(EventCreate):
    id: int
