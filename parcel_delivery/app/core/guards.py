"""
Access guards for identity-scoped and admin-only resources.

The authorization gate resolves who is calling; these guards decide whether
that caller may see a given owner's data or use admin endpoints.
"""

from typing import Optional
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_delivery.app.core.dependencies import get_current_identity
from parcel_delivery.app.core.emails import normalize_email
from parcel_delivery.app.core.exceptions import ForbiddenError, ResourceNotFoundError
from parcel_delivery.app.core.jwt import Identity
from parcel_delivery.app.db.session import get_db
from parcel_delivery.app.models.enums import UserRole
from parcel_delivery.app.services import user_service


def verify_ownership(resource_owner_email: Optional[str], identity: Identity) -> bool:
    """
    Verify that the resolved identity owns the resource.

    Emails are compared case-insensitively. A missing owner never matches.

    Args:
        resource_owner_email: Email the resource is scoped to
        identity: Resolved identity of the caller

    Returns:
        True if the caller owns the resource, False otherwise
    """
    if not resource_owner_email:
        return False
    return normalize_email(identity.email) == normalize_email(resource_owner_email)


class OwnershipGuard:
    """
    Class-based ownership guard.

    Usage:
        ownership_guard = OwnershipGuard()

        @router.get("/payments")
        async def list_payments(
            email: str,
            identity: Identity = Depends(get_current_identity),
        ):
            ownership_guard.enforce(email, identity, "payment history")
            ...
    """

    def enforce(
        self,
        resource_owner_email: Optional[str],
        identity: Identity,
        resource_name: str = "resource"
    ):
        """
        Enforce ownership validation, raise 403 if access denied.

        Raises:
            ForbiddenError if the identity does not own the resource
        """
        if not verify_ownership(resource_owner_email, identity):
            raise ForbiddenError(
                details={"resource": resource_name}
            )


async def require_admin(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
) -> Identity:
    """
    Dependency for admin-only endpoints.

    Usage:
        @router.get("/audit-logs")
        async def get_audit_logs(
            admin: Identity = Depends(require_admin)
        ):
            ...

    Returns:
        Identity of the caller if its user has the ADMIN role, raises 403 otherwise
    """
    try:
        role = await user_service.get_role(db, identity.email)
    except ResourceNotFoundError:
        raise ForbiddenError(details={"required_role": UserRole.ADMIN.value})

    if role != UserRole.ADMIN:
        raise ForbiddenError(details={"required_role": UserRole.ADMIN.value})

    return identity
