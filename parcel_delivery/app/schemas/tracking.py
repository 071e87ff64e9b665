"""
Tracking event Pydantic schemas.

One field set is used for request, storage and response:
parcel_id, status, location, remarks, updated_by, updated_at.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class TrackingEventCreate(BaseModel):
    """Schema for POST /tracking. Unknown fields are rejected."""
    parcel_id: int = Field(..., description="Parcel the event belongs to")
    status: str = Field(..., min_length=1, max_length=50, description="Delivery status label")
    location: Optional[str] = Field(None, max_length=255)
    remarks: Optional[str] = Field(None, max_length=500)
    updated_by: Optional[str] = Field(None, max_length=255, description="Email of the reporter")

    class Config:
        extra = "forbid"


class TrackingEventResponse(BaseModel):
    id: int
    parcel_id: int
    status: str
    location: Optional[str]
    remarks: Optional[str]
    updated_by: Optional[str]
    updated_at: datetime

    class Config:
        from_attributes = True


class TrackingEventCreated(BaseModel):
    message: str
    id: int
