"""
Rider application Pydantic schemas.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional, Dict, Any
from parcel_delivery.app.models.enums import RiderApplicationStatus


class RiderApplicationCreate(BaseModel):
    """
    Schema for POST /rider-application.

    New applications always start as pending. Fields without a column
    (bike model, NID, ...) are kept under ``details``.
    """
    email: EmailStr = Field(..., description="Applicant email")
    name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    region: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    status: RiderApplicationStatus = RiderApplicationStatus.PENDING

    class Config:
        extra = "allow"

    @field_validator("status")
    @classmethod
    def must_start_pending(cls, value: RiderApplicationStatus) -> RiderApplicationStatus:
        if value != RiderApplicationStatus.PENDING:
            raise ValueError("New rider applications must be pending")
        return value

    @property
    def details(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class RiderApplicationResponse(BaseModel):
    id: int
    email: str
    name: Optional[str]
    phone: Optional[str]
    region: Optional[str]
    district: Optional[str]
    details: Dict[str, Any]
    status: RiderApplicationStatus
    created_at: datetime

    class Config:
        from_attributes = True


class RiderStatusUpdate(BaseModel):
    """
    Schema for PATCH /riders/{id}/status.

    ``email`` names the user promoted on activation; the application's
    own email is used when it is omitted.
    """
    status: RiderApplicationStatus
    email: Optional[EmailStr] = None


class RiderStatusUpdateResponse(BaseModel):
    """
    Composite result of a status change.

    ``role_promoted`` is None when no promotion was attempted, False when
    no user matched the email and True when the user became a rider.
    """
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")
    role_promoted: Optional[bool] = Field(None, alias="rolePromoted")

    class Config:
        populate_by_name = True
