# ============================================================================
# FILE: visual_learning/core/dependencies.py
# ============================================================================
"""Dependency injection for FastAPI routes"""

from fastapi import HTTPException, Request, status
from motor.motor_asyncio import AsyncIOMotorCollection
import logging

from visual_learning.core.config import Settings, settings
from visual_learning.core.database import DocumentStore, StoreUnavailable
from visual_learning.core.payment_provider import PaymentProvider

logger = logging.getLogger(__name__)


async def get_settings(request: Request) -> Settings:
    """Settings handed to create_app; the module default when none were"""
    return getattr(request.app.state, "settings", None) or settings


async def get_store(request: Request) -> DocumentStore:
    """Document store opened by the application lifespan"""
    store = getattr(request.app.state, "store", None)
    if store is None or not store.is_open:
        logger.error("Document store is not available")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database client unavailable"
        )
    return store


def collection_of(store: DocumentStore, name: str) -> AsyncIOMotorCollection:
    try:
        return store.collection(name)
    except StoreUnavailable:
        logger.error(f"Collection {name} requested on a closed store")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database client unavailable"
        )


async def get_payment_provider(request: Request) -> PaymentProvider:
    provider = getattr(request.app.state, "payment_provider", None)
    if provider is None:
        logger.error("Payment provider is not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment gateway unavailable"
        )
    return provider
