"""
Parcel Tracking API Endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_delivery.app.db.session import get_db
from parcel_delivery.app.schemas.tracking import (
    TrackingEventCreate, TrackingEventResponse, TrackingEventCreated
)
from parcel_delivery.app.services import tracking_service

router = APIRouter(prefix="/tracking", tags=["Tracking"])


@router.post("", response_model=TrackingEventCreated, status_code=status.HTTP_201_CREATED)
async def add_tracking_event(
    event_data: TrackingEventCreate,
    db: AsyncSession = Depends(get_db)
):
    event_id = await tracking_service.append_event(db, event_data)
    return TrackingEventCreated(message="Tracking update saved", id=event_id)


@router.get("/{parcel_id}", response_model=List[TrackingEventResponse])
async def get_parcel_tracking(
    parcel_id: int = Path(..., description="Parcel ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Tracking history of a parcel, oldest event first.
    """
    events = await tracking_service.list_events(db, parcel_id)
    return [TrackingEventResponse.model_validate(e) for e in events]
