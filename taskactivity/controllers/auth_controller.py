"""
Authentication endpoints (JWT-based) for API clients
"""
import logging
from fastapi import APIRouter, Depends, HTTPException

from taskactivity.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from taskactivity.dependencies import get_user_service
from taskactivity.schemas import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
)
from taskactivity.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(p: LoginRequest, user_service: UserService = Depends(get_user_service)):
    """
    Login with username + password.

    Returns JWT tokens (access + refresh) when the credentials are valid.
    """
    user = user_service.authenticate(p.username, p.password)
    if user is None:
        user_service.record_failed_login(p.username)
        logger.warning(f"API login failed for user: {p.username}")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    if user.account_locked:
        raise HTTPException(status_code=401, detail="Account is locked")
    if not user.enabled:
        raise HTTPException(status_code=401, detail="Account is disabled")

    user_service.record_successful_login(user)
    logger.info(f"API login successful for user: {user.username}")

    return LoginResponse(
        access_token=create_access_token(data={"sub": user.username, "role": user.role}),
        refresh_token=create_refresh_token(data={"sub": user.username}),
        token_type="Bearer",
        username=user.username,
        role=user.role,
    )


@router.post("/refresh", response_model=RefreshTokenResponse)
def refresh(p: RefreshTokenRequest, user_service: UserService = Depends(get_user_service)):
    """
    Exchange a refresh token for a new access token.
    """
    payload = decode_token(p.refresh_token, expected_type="refresh")

    user = user_service.get_user_by_username(payload["sub"])
    if not user or not user.enabled or user.account_locked:
        raise HTTPException(status_code=401, detail="User not found or inactive")

    return RefreshTokenResponse(
        access_token=create_access_token(data={"sub": user.username, "role": user.role}),
        token_type="Bearer",
    )
