"""
Tracking event database model.
"""

from sqlalchemy import Column, Integer, String, DateTime
from parcel_delivery.app.core.clock import utcnow
from parcel_delivery.app.db.session import Base


class TrackingEvent(Base):
    """
    Append-only status event for a parcel.

    Events are never updated or deleted; the parcel's history is the
    ordered list of its events.
    """
    __tablename__ = "tracking_events"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    parcel_id = Column(Integer, nullable=False, index=True)

    status = Column(String(50), nullable=False)
    location = Column(String(255), nullable=True)
    remarks = Column(String(500), nullable=True)
    updated_by = Column(String(255), nullable=True)

    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<TrackingEvent(id={self.id}, parcel_id={self.parcel_id}, status='{self.status}')>"
