# ============================================================================
# FILE: visual_learning/utils/validators.py
# ============================================================================
"""Input validation utilities"""

from typing import Any, Dict
import logging

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


def parse_object_id(value: str) -> ObjectId:
    """Turn a path id into an ObjectId, rejecting malformed ids with a 400

    Args:
        value: 24-character hex id taken from the URL

    Returns:
        The matching ObjectId
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        logger.warning(f"Invalid id: {value!r}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid id")


def require_fields(update: Dict[str, Any]) -> Dict[str, Any]:
    """Refuse an empty partial update; Mongo rejects an empty $set"""
    if not update:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    return update


def normalize_email(email: str) -> str:
    """Single spelling for stored, claimed and requested emails"""
    return email.strip().lower()
