"""
Payment API Endpoints.

Payment history is identity-scoped: callers only see their own payments.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_delivery.app.db.session import get_db
from parcel_delivery.app.core.dependencies import get_current_identity
from parcel_delivery.app.core.guards import OwnershipGuard
from parcel_delivery.app.core.jwt import Identity
from parcel_delivery.app.schemas.payment import (
    PaymentCreate, PaymentResponse, PaymentRecorded,
    PaymentIntentRequest, PaymentIntentResponse
)
from parcel_delivery.app.services.payment_service import PaymentService
from parcel_delivery.app.services.payment_gateway import PaymentGateway, get_payment_gateway

router = APIRouter(tags=["Payments"])
ownership_guard = OwnershipGuard()


@router.get("/payments", response_model=List[PaymentResponse])
async def list_payments(
    email: Optional[str] = Query(None, description="Payer email; must match the caller"),
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """
    Payment history of the caller, latest first.

    Returns 403 when ``email`` is not the caller's own email.
    """
    ownership_guard.enforce(email, identity, "payment history")

    payments = await PaymentService.list_payments(db, email)
    return [PaymentResponse.model_validate(p) for p in payments]


@router.post("/payments", response_model=PaymentRecorded, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payment_data: PaymentCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Record a payment and mark the parcel as paid.

    Returns 404 when the parcel does not exist or is already paid;
    no payment is stored in that case.
    """
    payment = await PaymentService.record_payment(db, payment_data)
    return PaymentRecorded(
        message="Payment recorded and parcel marked as paid.",
        inserted_id=payment.id
    )


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    intent_data: PaymentIntentRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway)
):
    client_secret = await gateway.create_intent(intent_data.amount_in_cents)
    return PaymentIntentResponse(client_secret=client_secret)
