"""
Rider application database model.
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum, JSON
from parcel_delivery.app.core.clock import utcnow
from parcel_delivery.app.db.session import Base
from parcel_delivery.app.models.enums import RiderApplicationStatus, enum_values


class RiderApplication(Base):
    """
    A user's request to become a delivery rider.

    Activating an application promotes the user with the same email to
    the RIDER role (see rider_service).
    """
    __tablename__ = "rider_applications"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), nullable=False, index=True)

    name = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    region = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    details = Column(JSON, nullable=False, default=dict)

    status = Column(
        Enum(RiderApplicationStatus, values_callable=enum_values, name="rider_application_status"),
        default=RiderApplicationStatus.PENDING, nullable=False, index=True
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<RiderApplication(id={self.id}, email='{self.email}', status='{self.status}')>"
