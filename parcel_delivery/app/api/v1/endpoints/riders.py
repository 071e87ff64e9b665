"""
Rider Application API Endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_delivery.app.db.session import get_db
from parcel_delivery.app.models.enums import RiderApplicationStatus
from parcel_delivery.app.schemas.common import InsertResult
from parcel_delivery.app.schemas.rider import (
    RiderApplicationCreate, RiderApplicationResponse,
    RiderStatusUpdate, RiderStatusUpdateResponse
)
from parcel_delivery.app.services.rider_service import RiderService

router = APIRouter(tags=["Riders"])


@router.post("/rider-application", response_model=InsertResult, status_code=status.HTTP_201_CREATED)
async def submit_rider_application(
    application_data: RiderApplicationCreate,
    db: AsyncSession = Depends(get_db)
):
    application_id = await RiderService.submit_application(db, application_data)
    return InsertResult(inserted_id=application_id)


@router.get("/riders/pending", response_model=List[RiderApplicationResponse])
async def list_pending_riders(db: AsyncSession = Depends(get_db)):
    applications = await RiderService.list_by_status(db, RiderApplicationStatus.PENDING)
    return [RiderApplicationResponse.model_validate(a) for a in applications]


@router.get("/riders/active", response_model=List[RiderApplicationResponse])
async def list_active_riders(db: AsyncSession = Depends(get_db)):
    applications = await RiderService.list_by_status(db, RiderApplicationStatus.ACTIVE)
    return [RiderApplicationResponse.model_validate(a) for a in applications]


@router.patch("/riders/{application_id}/status", response_model=RiderStatusUpdateResponse)
async def update_rider_status(
    status_data: RiderStatusUpdate,
    application_id: int = Path(..., description="Rider application ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Change a rider application's status.

    Activating an application promotes the user with the given email
    (or the applicant's email) to ``rider`` in the same transaction.
    ``rolePromoted`` tells whether that user existed.
    """
    outcome = await RiderService.update_status(
        db,
        application_id=application_id,
        new_status=status_data.status,
        email=status_data.email
    )
    return RiderStatusUpdateResponse(
        matched_count=outcome.matched_count,
        modified_count=outcome.modified_count,
        role_promoted=outcome.role_promoted
    )
