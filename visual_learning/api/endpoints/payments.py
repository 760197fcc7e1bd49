# ============================================================================
# FILE: visual_learning/api/endpoints/payments.py
# ============================================================================
"""Payment endpoints - provider intents and the payment ledger"""

from fastapi import APIRouter, HTTPException, status, Depends
from typing import Any, Dict, List
import logging

from visual_learning.core.database import DocumentStore, PAYMENTS_COLLECTION
from visual_learning.core.dependencies import collection_of, get_payment_provider, get_store
from visual_learning.core.errors import internal_error
from visual_learning.core.guards import RequestContext, require_token
from visual_learning.core.payment_provider import PaymentProvider, PaymentProviderError
from visual_learning.schemas.payments import PaymentCreate, PaymentIntentRequest, PaymentIntentResponse
from visual_learning.utils.serializers import insert_result, serialize_documents

logger = logging.getLogger(__name__)

# Mounted at the root: the intent route has no common prefix with /payments
router = APIRouter()


def to_minor_units(price: float) -> int:
    """49.99 -> 4999"""
    return int(round(price * 100))


# ==================== CREATE PAYMENT INTENT ====================

@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    request: PaymentIntentRequest,
    context: RequestContext = Depends(require_token),
    provider: PaymentProvider = Depends(get_payment_provider),
) -> PaymentIntentResponse:
    """
    Stage a card payment with the provider for the given price.
    Nothing is stored here; the client posts the finished payment to /payments.
    """
    amount = to_minor_units(request.price)
    logger.info(f"🔄 Creating payment intent of {amount} for {context.email}")
    try:
        client_secret = await provider.create_payment_intent(amount)
    except PaymentProviderError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment gateway error. Please try again."
        )
    return PaymentIntentResponse(clientSecret=client_secret)


# ==================== PAYMENT LEDGER ====================

@router.get("/payments")
async def list_payments(store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    payments = collection_of(store, PAYMENTS_COLLECTION)
    try:
        return serialize_documents(await payments.find().to_list(None))
    except Exception as e:
        logger.error(f"❌ Error listing payments: {e}")
        raise internal_error()


@router.post("/payments")
async def record_payment(payment: PaymentCreate, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    payments = collection_of(store, PAYMENTS_COLLECTION)
    try:
        result = await payments.insert_one(payment.model_dump(exclude_none=True))
    except Exception as e:
        logger.error(f"❌ Error saving payment {payment.transaction_id}: {e}")
        raise internal_error()

    logger.info(f"✓ Saved payment {payment.transaction_id} for {payment.email}: {result.inserted_id}")
    return insert_result(result)
