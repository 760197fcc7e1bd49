"""Token issuance"""

from fastapi import APIRouter, Body, Depends
from typing import Any, Dict
import logging

from visual_learning.core.config import Settings
from visual_learning.core.dependencies import get_settings
from visual_learning.core.security import issue_token
from visual_learning.schemas.users import TokenResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/jwt", response_model=TokenResponse)
async def create_token(
    claim: Dict[str, Any] = Body(...),
    config: Settings = Depends(get_settings),
) -> TokenResponse:
    """Sign whatever identity object the client sends, usually ``{"email": ...}``"""
    logger.info(f"Issuing token for {claim.get('email')}")
    return TokenResponse(token=issue_token(claim, config))
