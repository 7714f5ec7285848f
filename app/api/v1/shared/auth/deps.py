from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.shared.auth.jwt import verify_token
from app.core.logging import logger

security = HTTPBearer(auto_error=False)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Dict[str, Any]]:
    """
    Optional authentication - returns user if token is valid, None otherwise.

    The browser only needs to know whether someone is signed in, so a bad
    token is treated the same as no token.
    """
    if credentials is None:
        return None

    payload = verify_token(credentials.credentials)
    if payload is None:
        logger.debug("Ignoring invalid bearer token")
        return None

    return {
        "sub": payload["sub"],
        "email": payload.get("email"),
    }
