"""
Parcel database model.

A parcel is the aggregate root for payments and tracking events.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Enum, JSON
from parcel_delivery.app.core.clock import utcnow
from parcel_delivery.app.db.session import Base
from parcel_delivery.app.models.enums import ParcelStatus, PaymentStatus, enum_values


class Parcel(Base):
    """
    Parcel model.

    ``payment_status`` is only ever written by the payment recorder through
    a conditional update (UNPAID → PAID). Request fields without a column
    are kept in ``details``.
    """
    __tablename__ = "parcels"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Ownership
    created_by = Column(String(255), nullable=False, index=True)

    # Parcel identification
    tracking_id = Column(String(100), nullable=True, index=True)
    title = Column(String(200), nullable=False)
    parcel_type = Column(String(50), nullable=True)
    weight = Column(Float, nullable=True)
    cost = Column(Float, nullable=True)

    # Parties
    sender_name = Column(String(200), nullable=True)
    sender_region = Column(String(100), nullable=True)
    sender_address = Column(String(500), nullable=True)
    receiver_name = Column(String(200), nullable=True)
    receiver_region = Column(String(100), nullable=True)
    receiver_address = Column(String(500), nullable=True)

    details = Column(JSON, nullable=False, default=dict)

    # Status
    status = Column(
        Enum(ParcelStatus, values_callable=enum_values, name="parcel_status"),
        default=ParcelStatus.PENDING, nullable=False, index=True
    )
    payment_status = Column(
        Enum(PaymentStatus, values_callable=enum_values, name="payment_status"),
        default=PaymentStatus.UNPAID, nullable=False, index=True
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Parcel(id={self.id}, created_by='{self.created_by}', payment_status='{self.payment_status}')>"
