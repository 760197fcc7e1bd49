# visual_learning/schemas/payments.py
"""Enrollment and payment schemas"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime, timezone


# ==================== REQUEST SCHEMAS ====================

class SelectionCreate(BaseModel):
    """Class placed in a student's cart"""
    model_config = ConfigDict(extra="allow")

    class_id: str = Field(..., description="Id of the selected class")
    email: str = Field(..., description="Selecting student's email")


class PaymentIntentRequest(BaseModel):
    """Price the client wants to pay, in major currency units"""
    price: float = Field(..., gt=0, description="Amount to charge, e.g. 49.99")


class PaymentCreate(BaseModel):
    """Completed payment reported by the client"""
    model_config = ConfigDict(extra="allow")

    email: str = Field(..., description="Paying user's email")
    amount: float = Field(..., ge=0, description="Amount paid")
    currency: Optional[str] = Field(None, description="ISO currency code")
    transaction_id: str = Field(..., description="Provider transaction reference")
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Payment timestamp")


# ==================== RESPONSE SCHEMAS ====================

class PaymentIntentResponse(BaseModel):
    clientSecret: str = Field(..., description="Secret the client uses to confirm the payment")
