# ============================================================================
# FILE: visual_learning/core/guards.py
# ============================================================================
"""Route guards: bearer token verification and role gates.

Guards run in the order FastAPI resolves a route's dependencies. Each one
either returns the per-request context or raises the terminal HTTP error.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from visual_learning.core.config import Settings
from visual_learning.core.database import DocumentStore, USERS_COLLECTION
from visual_learning.core.dependencies import collection_of, get_settings, get_store
from visual_learning.core.security import InvalidTokenError, verify_token
from visual_learning.schemas.users import Role
from visual_learning.utils.validators import normalize_email

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED_MESSAGE = "Unauthorized access"
FORBIDDEN_MESSAGE = "Forbidden access"


@dataclass(frozen=True)
class RequestContext:
    """Verified caller identity for one request"""
    claim: Dict[str, Any] = field(default_factory=dict)

    @property
    def email(self) -> Optional[str]:
        """Claim email in the form users are stored under"""
        email = self.claim.get("email")
        return normalize_email(email) if isinstance(email, str) else None


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_MESSAGE,
        headers={"WWW-Authenticate": "Bearer"},
    )


def authenticate(
    credentials: Optional[HTTPAuthorizationCredentials],
    config: Optional[Settings] = None,
) -> RequestContext:
    if credentials is None or not credentials.credentials:
        raise _unauthorized()
    try:
        claim = verify_token(credentials.credentials, config)
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise _unauthorized() from e
    return RequestContext(claim=claim)


async def ensure_role(store: DocumentStore, context: RequestContext, role: Role) -> None:
    """Fresh role read for the caller; 403 unless the stored role matches"""
    users = collection_of(store, USERS_COLLECTION)
    user = await users.find_one({"email": context.email}) if context.email else None
    if user is None or user.get("role") != role.value:
        logger.warning(f"Denied {role.value} route to {context.email}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE)


async def enforce_strict_role(
    config: Settings,
    credentials: Optional[HTTPAuthorizationCredentials],
    store: DocumentStore,
    role: Role,
) -> Optional[RequestContext]:
    """Token plus role check, skipped entirely unless STRICT_ROLE_GUARDS is on"""
    if not config.STRICT_ROLE_GUARDS:
        return None
    context = authenticate(credentials, config)
    await ensure_role(store, context, role)
    return context


async def require_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    config: Settings = Depends(get_settings),
) -> RequestContext:
    return authenticate(credentials, config)


async def require_instructor(
    context: RequestContext = Depends(require_token),
    store: DocumentStore = Depends(get_store),
) -> RequestContext:
    await ensure_role(store, context, Role.INSTRUCTOR)
    return context


async def require_admin(
    context: RequestContext = Depends(require_token),
    store: DocumentStore = Depends(get_store),
) -> RequestContext:
    await ensure_role(store, context, Role.ADMIN)
    return context


def strict_role(role: Role):
    """Role gate that only applies when STRICT_ROLE_GUARDS is on.

    Without the switch the wrapped routes stay open, as they always were.
    """
    async def _guard(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        store: DocumentStore = Depends(get_store),
        config: Settings = Depends(get_settings),
    ) -> Optional[RequestContext]:
        return await enforce_strict_role(config, credentials, store, role)
    return _guard
