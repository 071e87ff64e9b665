"""
Payment Pydantic schemas.

Payment bodies use the camelCase keys of the checkout client.
"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional


class PaymentCreate(BaseModel):
    """Schema for POST /payments."""
    parcel_id: int = Field(..., alias="parcelId", description="Parcel being paid for")
    email: EmailStr = Field(..., description="Payer email")
    amount: float = Field(..., gt=0, description="Amount charged")
    payment_method: Optional[str] = Field(None, alias="paymentMethod", max_length=100)
    transaction_id: str = Field(..., alias="transactionId", min_length=1, max_length=255)

    class Config:
        populate_by_name = True


class PaymentResponse(BaseModel):
    """Schema for payment history entries."""
    id: int
    parcel_id: int = Field(..., alias="parcelId")
    email: str
    amount: float
    payment_method: Optional[str] = Field(None, alias="paymentMethod")
    transaction_id: str = Field(..., alias="transactionId")
    paid_at: datetime = Field(..., alias="paidAt")
    paid_at_string: str = Field(..., alias="paidAtString")

    class Config:
        from_attributes = True
        populate_by_name = True


class PaymentRecorded(BaseModel):
    """Schema for POST /payments response."""
    message: str
    inserted_id: int = Field(..., alias="insertedId")

    class Config:
        populate_by_name = True


class PaymentIntentRequest(BaseModel):
    """Schema for POST /create-payment-intent."""
    amount_in_cents: int = Field(..., alias="amountInCents", gt=0)

    class Config:
        populate_by_name = True


class PaymentIntentResponse(BaseModel):
    client_secret: str = Field(..., alias="clientSecret")

    class Config:
        populate_by_name = True
