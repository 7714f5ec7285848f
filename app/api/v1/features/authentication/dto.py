from typing import Optional

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Signed-in user as seen by the browser."""

    user_id: str
    email: Optional[str] = None


class AuthStatus(BaseModel):
    """Current user or none."""

    authenticated: bool
    user: Optional[CurrentUser] = None
