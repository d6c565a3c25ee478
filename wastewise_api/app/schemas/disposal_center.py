"""
Pydantic models for disposal and recycling centers.

Centers are reference data: they are seeded at startup and never
updated through the API.  ``type`` is a free-form category such as
``e-waste``, ``furniture``, ``clothes``, ``plastics`` or ``food``.
"""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class DisposalCenterCreate(CamelModel):
    name: str = Field(..., min_length=1, examples=["GreenTech Recycling Center"])
    description: Optional[str] = None
    type: str = Field(..., min_length=1, examples=["e-waste"])
    address: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    open_hours: Optional[str] = Field(None, examples=["9AM - 6PM"])
    accepted_items: List[str] = Field(default_factory=list)
    contact_info: Optional[str] = None
    image: Optional[str] = None


class DisposalCenter(DisposalCenterCreate):
    id: int
