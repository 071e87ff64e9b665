"""
User Pydantic schemas.

Defines request and response schemas for user and role endpoints.
"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional, Dict, Any
from parcel_delivery.app.models.enums import UserRole


class UserCreate(BaseModel):
    """
    Schema for POST /users.

    Only ``email`` is required. Every other field sent by the client
    (name, photo URL, ...) is stored as the user's profile. Roles cannot
    be chosen at sign-up.
    """
    email: EmailStr = Field(..., description="User email address")

    class Config:
        extra = "allow"

    @property
    def profile(self) -> Dict[str, Any]:
        extra = dict(self.model_extra or {})
        extra.pop("role", None)
        return extra


class UserResponse(BaseModel):
    """Schema for user search results."""
    id: int
    email: str
    role: Optional[UserRole] = None
    profile: Dict[str, Any] = {}
    created_at: datetime
    last_log_in: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoleResponse(BaseModel):
    """Schema for GET /users/{email}/role."""
    role: UserRole


class RoleUpdate(BaseModel):
    """
    Schema for PATCH /users/{id}/role.

    ``role`` is a plain string so that illegal values reach the service
    and are answered with 400 rather than a schema error.
    """
    role: str = Field(..., description="New role: admin or user")


class RoleUpdateResponse(BaseModel):
    """Schema for role change response."""
    message: str
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")

    class Config:
        populate_by_name = True
