"""
User and Role API Endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_delivery.app.db.session import get_db
from parcel_delivery.app.schemas.common import UpsertResult
from parcel_delivery.app.schemas.user import (
    UserCreate, UserResponse, RoleResponse, RoleUpdate, RoleUpdateResponse
)
from parcel_delivery.app.services import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/search", response_model=List[UserResponse])
async def search_users(
    email: Optional[str] = Query(None, description="Part of an email, case-insensitive"),
    db: AsyncSession = Depends(get_db)
):
    """
    Search users by partial email (at most 10 results).

    Returns 400 when the query is missing.
    """
    users = await user_service.search_users(db, email)
    return [UserResponse.model_validate(user) for user in users]


@router.get("/{email}/role", response_model=RoleResponse)
async def get_user_role(
    email: str = Path(..., description="User email"),
    db: AsyncSession = Depends(get_db)
):
    """
    Get a user's role. Users without an explicit role are ``user``.
    """
    role = await user_service.get_role(db, email)
    return RoleResponse(role=role)


@router.patch("/{user_id}/role", response_model=RoleUpdateResponse)
async def update_user_role(
    role_data: RoleUpdate,
    user_id: int = Path(..., description="User ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Set a user's role to ``admin`` or ``user``.

    Any other value is rejected with 400 and nothing is written.
    """
    matched, modified = await user_service.set_role(db, user_id, role_data.role)
    return RoleUpdateResponse(
        message=f"User role updated to {role_data.role}",
        matched_count=matched,
        modified_count=modified
    )


@router.post("", response_model=UpsertResult)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Register a user on first sign-in.

    Existing users are left unchanged and reported with ``insertedId: false``.
    """
    user_id = await user_service.upsert_user(db, user_data.email, user_data.profile)

    if user_id is None:
        return UpsertResult(message="User already exists", inserted_id=False)

    return UpsertResult(message="User created", inserted_id=user_id)
