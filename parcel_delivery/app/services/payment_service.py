"""
Payment Recorder (Domain Logic).

Marks a parcel as paid and appends its ledger entry as one unit of work.
Must be transactional.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from parcel_delivery.app.core.clock import utcnow
from parcel_delivery.app.core.emails import normalize_email
from parcel_delivery.app.core.exceptions import ParcelNotPayableError
from parcel_delivery.app.models.payment import Payment
from parcel_delivery.app.schemas.payment import PaymentCreate
from parcel_delivery.app.services.parcel_service import mark_parcel_paid
from parcel_delivery.app.services.audit import log_event, AuditAction

logger = logging.getLogger(__name__)


class PaymentService:

    @staticmethod
    async def record_payment(db: AsyncSession, payment_data: PaymentCreate) -> Payment:
        """
        Record a payment for a parcel.

        Flow:
        1. Conditional update parcel UNPAID → PAID
        2. Zero rows changed → reject, nothing written
        3. Append the Payment ledger entry
        4. Append the audit row
        5. Commit all of the above together

        Any failure before the commit rolls the parcel back to UNPAID, so a
        paid parcel always has its ledger entry.

        Args:
            db: Database session (this method owns the transaction)
            payment_data: Validated payment request

        Raises:
            ParcelNotPayableError: Parcel is missing or already paid

        Returns:
            Created Payment
        """
        try:
            # 1. State-guarded transition
            changed = await mark_parcel_paid(db, payment_data.parcel_id)

            # 2. Lost the race, or nothing to pay
            if changed == 0:
                raise ParcelNotPayableError(payment_data.parcel_id)

            # 3. Ledger entry
            paid_at = utcnow()
            payment = Payment(
                parcel_id=payment_data.parcel_id,
                email=normalize_email(payment_data.email),
                amount=payment_data.amount,
                payment_method=payment_data.payment_method,
                transaction_id=payment_data.transaction_id,
                paid_at=paid_at,
                paid_at_string=paid_at.isoformat(),
            )
            db.add(payment)
            await db.flush()

            # 4. Audit
            await log_event(
                db,
                action=AuditAction.PAYMENT_RECORDED,
                actor_email=payment.email,
                target_type="parcel",
                target_id=payment_data.parcel_id,
                metadata={
                    "payment_id": payment.id,
                    "amount": payment.amount,
                    "transaction_id": payment.transaction_id
                },
                commit=False
            )

            # 5. Single commit for both entities
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Payment %s recorded for parcel %s (transaction %s)",
            payment.id, payment.parcel_id, payment.transaction_id
        )
        return payment

    @staticmethod
    async def list_payments(db: AsyncSession, email: str) -> list[Payment]:
        """
        Payment history of one payer, latest first.
        """
        result = await db.execute(
            select(Payment)
            .where(Payment.email == normalize_email(email))
            .order_by(Payment.paid_at.desc(), Payment.id.desc())
        )
        return list(result.scalars().all())
