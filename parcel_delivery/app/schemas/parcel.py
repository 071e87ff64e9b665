"""
Parcel Pydantic schemas.

Defines request and response models for parcel management.
"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional, Dict, Any
from parcel_delivery.app.models.enums import ParcelStatus, PaymentStatus


class ParcelCreate(BaseModel):
    """
    Schema for creating a new parcel.

    Unknown fields are accepted and kept under ``details``. Status fields
    are owned by the server and cannot be set here.
    """
    created_by: EmailStr = Field(..., description="Email of the sender creating the parcel")
    title: str = Field(..., min_length=1, max_length=200, description="Parcel title")
    tracking_id: Optional[str] = Field(None, max_length=100, description="Client-generated tracking code")
    parcel_type: Optional[str] = Field(None, max_length=50, description="document / non-document")
    weight: Optional[float] = Field(None, ge=0, description="Weight in kilograms")
    cost: Optional[float] = Field(None, ge=0, description="Delivery cost")
    sender_name: Optional[str] = Field(None, max_length=200)
    sender_region: Optional[str] = Field(None, max_length=100)
    sender_address: Optional[str] = Field(None, max_length=500)
    receiver_name: Optional[str] = Field(None, max_length=200)
    receiver_region: Optional[str] = Field(None, max_length=100)
    receiver_address: Optional[str] = Field(None, max_length=500)

    class Config:
        extra = "allow"

    @property
    def details(self) -> Dict[str, Any]:
        extra = dict(self.model_extra or {})
        for server_field in ("id", "status", "payment_status", "created_at"):
            extra.pop(server_field, None)
        return extra


class ParcelResponse(BaseModel):
    """Schema for parcel response."""
    id: int
    created_by: str
    tracking_id: Optional[str]
    title: str
    parcel_type: Optional[str]
    weight: Optional[float]
    cost: Optional[float]
    sender_name: Optional[str]
    sender_region: Optional[str]
    sender_address: Optional[str]
    receiver_name: Optional[str]
    receiver_region: Optional[str]
    receiver_address: Optional[str]
    details: Dict[str, Any]
    status: ParcelStatus
    payment_status: PaymentStatus
    created_at: datetime

    class Config:
        from_attributes = True
