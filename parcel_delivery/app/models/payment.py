"""
Payment ledger model.

Immutable record of a completed payment for one parcel.
"""

from sqlalchemy import Column, Integer, Float, DateTime, String
from parcel_delivery.app.db.session import Base


class Payment(Base):
    """
    Payment ledger entry.

    Written in the same transaction that marks the parcel as paid.
    NO updates or deletions allowed. ``parcel_id`` is a plain reference
    so ledger entries survive a parcel delete.
    """
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Linkage
    parcel_id = Column(Integer, nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)

    # Financials
    amount = Column(Float, nullable=False)
    payment_method = Column(String(100), nullable=True)
    transaction_id = Column(String(255), nullable=False)

    # Timestamps (Immutable - no updated_at)
    paid_at = Column(DateTime(timezone=True), nullable=False, index=True)
    paid_at_string = Column(String(40), nullable=False)

    def __repr__(self):
        return f"<Payment(id={self.id}, parcel_id={self.parcel_id}, amount={self.amount})>"
