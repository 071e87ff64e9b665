"""
Audit Log Database Model.

Tracks state changes on parcels, payments, rider applications and roles.
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON
from parcel_delivery.app.core.clock import utcnow
from parcel_delivery.app.db.session import Base


class AuditLog(Base):
    """
    Audit log model.

    Events logged:
    - PARCEL_CREATED / PARCEL_DELETED
    - PAYMENT_RECORDED
    - RIDER_APPLICATION_SUBMITTED / RIDER_STATUS_CHANGED
    - ROLE_CHANGED (for privilege escalation detection)
    - TRACKING_EVENT_ADDED
    - USER_CREATED
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Who performed the action (None when the request is anonymous)
    actor_email = Column(String(255), index=True, nullable=True)

    # What action was performed
    action = Column(String(100), nullable=False, index=True)

    # What was acted upon
    target_type = Column(String(50), nullable=True)
    target_id = Column(Integer, index=True, nullable=True)

    # Additional context (JSON for flexibility)
    meta_data = Column(JSON, nullable=True)

    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog(id={self.id}, action='{self.action}', target={self.target_type}:{self.target_id})>"
