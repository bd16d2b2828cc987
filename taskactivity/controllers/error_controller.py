"""
Custom error pages: access denied and rate limit
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from taskactivity.core.templating import render
from taskactivity.dependencies import get_current_user_optional, get_user_service
from taskactivity.schemas import AuthedUser
from taskactivity.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Error Pages"])

DEFAULT_RETRY_AFTER = 60

ACCESS_DENIED_SESSION_KEYS = ("accessDeniedMessage", "requestedUrl")


@router.get("/access-denied")
def access_denied(
    request: Request,
    u: Optional[AuthedUser] = Depends(get_current_user_optional),
    user_service: UserService = Depends(get_user_service)
):
    context = {key: request.session.get(key) for key in ACCESS_DENIED_SESSION_KEYS}

    if u is not None:
        user = user_service.get_user_by_username(u.username)
        if user is not None:
            context["userDisplayName"] = UserService.display_name(user)

    return render(request, "access-denied.html", context)


@router.get("/rate-limit")
def rate_limit(request: Request, retryAfter: Optional[int] = None):
    return render(request, "rate-limit.html", {"retryAfter": retryAfter or DEFAULT_RETRY_AFTER})


@router.post("/clear-access-denied-session", response_class=PlainTextResponse)
def clear_access_denied_session(request: Request):
    for key in ACCESS_DENIED_SESSION_KEYS:
        request.session.pop(key, None)
    return "Session cleaned"
