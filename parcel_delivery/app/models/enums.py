"""
Enumerations for users, parcels, payments and rider applications.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        USER: Default role for customers sending parcels
        ADMIN: Manages users and rider applications
        RIDER: Delivery rider, granted when an application is activated
    """
    USER = "user"
    ADMIN = "admin"
    RIDER = "rider"


# Roles that may be assigned directly through the role endpoint
ASSIGNABLE_ROLES = (UserRole.ADMIN, UserRole.USER)


class ParcelStatus(str, enum.Enum):
    """
    Parcel delivery status.

    Status flow:
        PENDING → IN_TRANSIT → DELIVERED
        Any status can transition to CANCELLED
    """
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Parcel payment status. Only UNPAID → PAID is allowed."""
    UNPAID = "unpaid"
    PAID = "paid"


class RiderApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"


def enum_values(enum_class):
    """Persist enum values ("paid") instead of member names ("PAID")."""
    return [member.value for member in enum_class]
