"""
Parcel Management API Endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_delivery.app.db.session import get_db
from parcel_delivery.app.core.dependencies import get_current_identity
from parcel_delivery.app.core.jwt import Identity
from parcel_delivery.app.schemas.common import InsertResult, DeleteResult
from parcel_delivery.app.schemas.parcel import ParcelCreate, ParcelResponse
from parcel_delivery.app.services import parcel_service

router = APIRouter(prefix="/parcels", tags=["Parcels"])


@router.get("", response_model=List[ParcelResponse])
async def list_parcels(
    email: Optional[str] = Query(None, description="Only parcels created by this email"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """
    List parcels, newest first (authenticated).
    """
    parcels = await parcel_service.list_parcels(db, created_by=email)
    return [ParcelResponse.model_validate(p) for p in parcels]


@router.get("/{parcel_id}", response_model=ParcelResponse)
async def get_parcel(
    parcel_id: int = Path(..., description="Parcel ID"),
    db: AsyncSession = Depends(get_db)
):
    parcel = await parcel_service.get_parcel(db, parcel_id)
    return ParcelResponse.model_validate(parcel)


@router.post("", response_model=InsertResult)
async def create_parcel(
    parcel_data: ParcelCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a parcel. It starts ``pending`` and ``unpaid``.
    """
    parcel_id = await parcel_service.create_parcel(db, parcel_data)
    return InsertResult(inserted_id=parcel_id)


@router.delete("/{parcel_id}", response_model=DeleteResult)
async def delete_parcel(
    parcel_id: int = Path(..., description="Parcel ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a parcel permanently. Returns 404 if there was nothing to delete.
    """
    deleted = await parcel_service.delete_parcel(db, parcel_id)
    return DeleteResult(deleted_count=deleted)
