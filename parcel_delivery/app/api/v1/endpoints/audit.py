"""
Audit Trail API Endpoints.

Admin-only read access to the audit log.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_delivery.app.db.session import get_db
from parcel_delivery.app.core.guards import require_admin
from parcel_delivery.app.core.jwt import Identity
from parcel_delivery.app.schemas.audit import AuditLogResponse, AuditTrailResponse
from parcel_delivery.app.services.audit import get_audit_trail

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", response_model=AuditTrailResponse)
async def get_audit_logs(
    target_type: Optional[str] = Query(None, description="Filter by target type (parcel, user, ...)"),
    target_id: Optional[int] = Query(None, description="Filter by target ID"),
    action: Optional[str] = Query(None, description="Filter by action type"),
    limit: int = Query(100, ge=1, le=500, description="Maximum records to return"),
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Get audit trail with optional filtering, newest first (admin-only).
    """
    logs = await get_audit_trail(
        db=db,
        target_type=target_type,
        target_id=target_id,
        action=action,
        limit=limit
    )

    return AuditTrailResponse(
        logs=[AuditLogResponse.model_validate(log) for log in logs],
        total=len(logs)
    )
