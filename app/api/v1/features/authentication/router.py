from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from app.api.v1.features.authentication.dto import AuthStatus, CurrentUser
from app.api.v1.shared.auth.deps import get_optional_user

router = APIRouter()


@router.get("/me", response_model=AuthStatus)
def get_auth_status(
    current_user: Optional[Dict[str, Any]] = Depends(get_optional_user),
) -> AuthStatus:
    """
    Report whether the request carries a valid bearer token.

    Never fails: a missing or invalid token yields ``authenticated: false``.
    """
    if current_user is None:
        return AuthStatus(authenticated=False)
    return AuthStatus(
        authenticated=True,
        user=CurrentUser(user_id=current_user["sub"], email=current_user.get("email")),
    )
