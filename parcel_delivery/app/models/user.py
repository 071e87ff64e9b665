"""
User database model.
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum, JSON
from parcel_delivery.app.core.clock import utcnow
from parcel_delivery.app.db.session import Base
from parcel_delivery.app.models.enums import UserRole, enum_values


class User(Base):
    """
    User record, keyed by email.

    ``role`` stays NULL until explicitly set; readers treat NULL as USER.
    Profile fields sent at sign-up (name, photo, ...) live in ``profile``.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(Enum(UserRole, values_callable=enum_values, name="user_role"), nullable=True)
    profile = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_log_in = Column(DateTime(timezone=True), default=utcnow, nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
