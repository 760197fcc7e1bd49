from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt import InvalidTokenError

from visual_learning.core.config import Settings, settings

# Time claims added on issue and removed again on verify; a caller's own
# exp/iat are replaced by the server's
_REGISTERED_CLAIMS = ("exp", "iat")

# Claims are opaque caller data; only signature and expiry are checked
_DECODE_OPTIONS = {
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
}

__all__ = ["InvalidTokenError", "issue_token", "verify_token"]


def issue_token(
    claim: Dict[str, Any],
    config: Optional[Settings] = None,
    expires_days: Optional[int] = None,
) -> str:
    config = config or settings
    expire_days = expires_days if expires_days is not None else config.ACCESS_TOKEN_EXPIRE_DAYS
    now = datetime.now(timezone.utc)
    payload = {**claim, "exp": now + timedelta(days=expire_days), "iat": now}
    return jwt.encode(payload, config.ACCESS_SECRET_TOKEN, algorithm=config.JWT_ALGORITHM)


def verify_token(token: str, config: Optional[Settings] = None) -> Dict[str, Any]:
    config = config or settings
    payload = jwt.decode(
        token,
        config.ACCESS_SECRET_TOKEN,
        algorithms=[config.JWT_ALGORITHM],
        options=_DECODE_OPTIONS,
    )
    return {key: value for key, value in payload.items() if key not in _REGISTERED_CLAIMS}
