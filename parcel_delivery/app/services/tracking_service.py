"""
Tracking event log. Events are only ever appended.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from parcel_delivery.app.core.emails import normalize_email
from parcel_delivery.app.models.tracking_event import TrackingEvent
from parcel_delivery.app.schemas.tracking import TrackingEventCreate
from parcel_delivery.app.services.audit import log_event, AuditAction


async def append_event(db: AsyncSession, event_data: TrackingEventCreate) -> int:
    """
    Append a tracking event; ``updated_at`` is assigned by the server.

    Returns:
        ID of the new event
    """
    event = TrackingEvent(
        parcel_id=event_data.parcel_id,
        status=event_data.status,
        location=event_data.location,
        remarks=event_data.remarks,
        updated_by=normalize_email(event_data.updated_by),
    )
    db.add(event)
    await db.flush()

    await log_event(
        db,
        action=AuditAction.TRACKING_EVENT_ADDED,
        actor_email=event.updated_by,
        target_type="parcel",
        target_id=event.parcel_id,
        metadata={"event_id": event.id, "status": event.status},
        commit=False
    )
    await db.commit()

    return event.id


async def list_events(db: AsyncSession, parcel_id: int) -> list[TrackingEvent]:
    """A parcel's events, oldest first."""
    result = await db.execute(
        select(TrackingEvent)
        .where(TrackingEvent.parcel_id == parcel_id)
        .order_by(TrackingEvent.updated_at, TrackingEvent.id)
    )
    return list(result.scalars().all())
