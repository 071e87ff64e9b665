"""
Parcel lifecycle: creation, listing, retrieval, deletion and the
unpaid → paid transition.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from parcel_delivery.app.core.emails import normalize_email
from parcel_delivery.app.core.exceptions import ResourceNotFoundError
from parcel_delivery.app.models.parcel import Parcel
from parcel_delivery.app.models.enums import ParcelStatus, PaymentStatus
from parcel_delivery.app.schemas.parcel import ParcelCreate
from parcel_delivery.app.services.audit import log_event, AuditAction


async def create_parcel(db: AsyncSession, parcel_data: ParcelCreate) -> int:
    """
    Create a parcel. Payment status always starts UNPAID.

    Returns:
        ID of the new parcel
    """
    new_parcel = Parcel(
        created_by=normalize_email(parcel_data.created_by),
        tracking_id=parcel_data.tracking_id,
        title=parcel_data.title,
        parcel_type=parcel_data.parcel_type,
        weight=parcel_data.weight,
        cost=parcel_data.cost,
        sender_name=parcel_data.sender_name,
        sender_region=parcel_data.sender_region,
        sender_address=parcel_data.sender_address,
        receiver_name=parcel_data.receiver_name,
        receiver_region=parcel_data.receiver_region,
        receiver_address=parcel_data.receiver_address,
        details=parcel_data.details,
        status=ParcelStatus.PENDING,
        payment_status=PaymentStatus.UNPAID,
    )

    db.add(new_parcel)
    await db.flush()

    await log_event(
        db,
        action=AuditAction.PARCEL_CREATED,
        actor_email=new_parcel.created_by,
        target_type="parcel",
        target_id=new_parcel.id,
        metadata={"tracking_id": new_parcel.tracking_id},
        commit=False
    )
    await db.commit()

    return new_parcel.id


async def list_parcels(db: AsyncSession, created_by: Optional[str] = None) -> list[Parcel]:
    """
    List parcels newest first, optionally only those created by one email.
    """
    query = select(Parcel)
    if created_by:
        query = query.where(Parcel.created_by == normalize_email(created_by))

    query = query.order_by(Parcel.created_at.desc(), Parcel.id.desc())

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_parcel(db: AsyncSession, parcel_id: int) -> Parcel:
    """
    Raises:
        ResourceNotFoundError: Parcel does not exist
    """
    result = await db.execute(select(Parcel).where(Parcel.id == parcel_id))
    parcel = result.scalar_one_or_none()

    if not parcel:
        raise ResourceNotFoundError("Parcel", parcel_id)

    return parcel


async def delete_parcel(db: AsyncSession, parcel_id: int, actor_email: Optional[str] = None) -> int:
    """
    Hard delete a parcel. Payments and tracking events are kept.

    Raises:
        ResourceNotFoundError: Nothing was deleted

    Returns:
        Number of deleted parcels (always 1)
    """
    result = await db.execute(
        delete(Parcel)
        .where(Parcel.id == parcel_id)
        .execution_options(synchronize_session=False)
    )

    deleted_count = result.rowcount
    if deleted_count == 0:
        await db.rollback()
        raise ResourceNotFoundError("Parcel", parcel_id)

    await log_event(
        db,
        action=AuditAction.PARCEL_DELETED,
        actor_email=actor_email,
        target_type="parcel",
        target_id=parcel_id,
        commit=False
    )
    await db.commit()

    return deleted_count


async def mark_parcel_paid(db: AsyncSession, parcel_id: int) -> int:
    """
    Conditionally move a parcel from UNPAID to PAID.

    The status check and the write are one UPDATE statement, so at most one
    concurrent caller can match the UNPAID row. Does not commit; the caller
    owns the transaction.

    Returns:
        Number of rows changed: 1 on success, 0 if the parcel is missing or already paid
    """
    result = await db.execute(
        update(Parcel)
        .where(
            Parcel.id == parcel_id,
            Parcel.payment_status == PaymentStatus.UNPAID
        )
        .values(payment_status=PaymentStatus.PAID)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
