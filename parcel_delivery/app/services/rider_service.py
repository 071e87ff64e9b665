"""
Rider Workflow (Domain Logic).

Rider applications and the role promotion that follows activation.
Status change and promotion are committed in one transaction.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from parcel_delivery.app.core.emails import normalize_email
from parcel_delivery.app.core.exceptions import ResourceNotFoundError
from parcel_delivery.app.models.rider_application import RiderApplication
from parcel_delivery.app.models.user import User
from parcel_delivery.app.models.enums import RiderApplicationStatus, UserRole
from parcel_delivery.app.schemas.rider import RiderApplicationCreate
from parcel_delivery.app.services.audit import log_event, AuditAction

logger = logging.getLogger(__name__)


@dataclass
class StatusUpdateResult:
    matched_count: int
    modified_count: int
    # None: no promotion attempted, False: no such user, True: promoted
    role_promoted: Optional[bool] = None


class RiderService:

    @staticmethod
    async def submit_application(db: AsyncSession, application_data: RiderApplicationCreate) -> int:
        """
        Store a new rider application in PENDING state.

        Returns:
            ID of the new application
        """
        application = RiderApplication(
            email=normalize_email(application_data.email),
            name=application_data.name,
            phone=application_data.phone,
            region=application_data.region,
            district=application_data.district,
            details=application_data.details,
            status=RiderApplicationStatus.PENDING,
        )
        db.add(application)
        await db.flush()

        await log_event(
            db,
            action=AuditAction.RIDER_APPLICATION_SUBMITTED,
            actor_email=application.email,
            target_type="rider_application",
            target_id=application.id,
            commit=False
        )
        await db.commit()

        return application.id

    @staticmethod
    async def list_by_status(db: AsyncSession, status: RiderApplicationStatus) -> list[RiderApplication]:
        result = await db.execute(
            select(RiderApplication)
            .where(RiderApplication.status == status)
            .order_by(RiderApplication.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def update_status(
        db: AsyncSession,
        application_id: int,
        new_status: RiderApplicationStatus,
        email: Optional[str] = None,
        actor_email: Optional[str] = None
    ) -> StatusUpdateResult:
        """
        Change an application's status, promoting the applicant on activation.

        Flow:
        1. Load the application (404 if missing, nothing written)
        2. Update its status
        3. If ACTIVE, set role RIDER on the user with ``email``
           (the application's email when not given)
        4. Audit and commit both writes together

        A missing user does not fail the update; it is reported through
        ``role_promoted=False``.

        Raises:
            ResourceNotFoundError: Application does not exist

        Returns:
            StatusUpdateResult describing both halves
        """
        try:
            # 1. Load
            result = await db.execute(
                select(RiderApplication).where(RiderApplication.id == application_id)
            )
            application = result.scalar_one_or_none()
            if not application:
                raise ResourceNotFoundError("Rider application", application_id)

            previous_status = application.status
            outcome = StatusUpdateResult(matched_count=1, modified_count=0)

            # 2. Status
            if previous_status != new_status:
                await db.execute(
                    update(RiderApplication)
                    .where(RiderApplication.id == application_id)
                    .values(status=new_status)
                    .execution_options(synchronize_session=False)
                )
                outcome.modified_count = 1

            # 3. Cascade
            if new_status == RiderApplicationStatus.ACTIVE:
                rider_email = normalize_email(email or application.email)
                promoted = await db.execute(
                    update(User)
                    .where(User.email == rider_email)
                    .values(role=UserRole.RIDER)
                    .execution_options(synchronize_session=False)
                )
                outcome.role_promoted = promoted.rowcount > 0
                if not outcome.role_promoted:
                    logger.warning(
                        "Rider application %s activated but no user has email %s",
                        application_id, rider_email
                    )

            # 4. Audit + commit
            await log_event(
                db,
                action=AuditAction.RIDER_STATUS_CHANGED,
                actor_email=actor_email,
                target_type="rider_application",
                target_id=application_id,
                metadata={
                    "previous_status": previous_status.value,
                    "new_status": new_status.value,
                    "role_promoted": outcome.role_promoted
                },
                commit=False
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        return outcome
