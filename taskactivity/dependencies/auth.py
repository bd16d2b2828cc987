from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from taskactivity.core.database import get_db
from taskactivity.core.exceptions import AccessDeniedError, AuthenticationRequiredError
from taskactivity.core.security import decode_token
from taskactivity.models import User, Role
from taskactivity.schemas import AuthedUser

# Session key holding the signed-in user's id
SESSION_USER_KEY = "user_id"

# JWT Security; a missing header falls back to the session cookie
security = HTTPBearer(auto_error=False)


def get_current_user_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[AuthedUser]:
    """
    Resolve the caller from a Bearer JWT or, failing that, the session cookie.

    Returns None for anonymous callers. Disabled or locked accounts count as anonymous.
    An invalid bearer token raises AuthenticationRequiredError.
    """
    if credentials is not None:
        payload = decode_token(credentials.credentials)
        user = User.get_by_username(db, payload["sub"])
        if not user or not user.enabled or user.account_locked:
            raise AuthenticationRequiredError("User not found or inactive")
    else:
        user_id = request.session.get(SESSION_USER_KEY)
        if user_id is None:
            return None
        user = User.get_by_id(db, user_id)
        if not user or not user.enabled or user.account_locked:
            request.session.pop(SESSION_USER_KEY, None)
            return None

    return AuthedUser(id=user.id, username=user.username, role=user.role)


def get_current_user(
    user: Optional[AuthedUser] = Depends(get_current_user_optional)
) -> AuthedUser:
    """
    Authentication dependency.

    Usage:
        @router.get("/protected")
        def protected_route(user: AuthedUser = Depends(get_current_user)):
            ...
    """
    if user is None:
        raise AuthenticationRequiredError()
    return user


def require_roles(*roles: Role):
    """
    Dependency factory restricting a route to the given roles.

    Usage:
        @router.get("/profile/edit")
        def edit(user: AuthedUser = Depends(require_roles(Role.USER, Role.ADMIN))):
            ...
    """
    allowed = {Role(r).value for r in roles}

    def dependency(user: AuthedUser = Depends(get_current_user)) -> AuthedUser:
        if user.role not in allowed:
            raise AccessDeniedError()
        return user

    return dependency


require_admin = require_roles(Role.ADMIN)
