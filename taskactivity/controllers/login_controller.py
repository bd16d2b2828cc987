"""
Browser sign-in: login form, form post and logout
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from taskactivity.core.config import settings
from taskactivity.core.templating import render
from taskactivity.dependencies import SESSION_USER_KEY, get_user_service
from taskactivity.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Login"])

POST_LOGIN_REDIRECT = "POST_LOGIN_REDIRECT"

# Only in-app destinations may be used after sign-in
ALLOWED_REDIRECT_PREFIXES = ("/dashboard", "/app")


def is_allowed_redirect(redirect: Optional[str]) -> bool:
    if not redirect or not redirect.strip():
        return False
    return redirect.startswith(ALLOWED_REDIRECT_PREFIXES)


@router.get("/login")
def login_page(
    request: Request,
    redirect: Optional[str] = None,
    error: Optional[str] = None,
    logout: Optional[str] = None,
    locked: Optional[str] = None,
    disabled: Optional[str] = None
):
    if redirect is not None:
        if is_allowed_redirect(redirect):
            request.session[POST_LOGIN_REDIRECT] = redirect
            logger.debug(f"Stored post-login redirect: {redirect}")
        else:
            logger.warning(f"Ignoring disallowed post-login redirect: {redirect}")

    return render(request, "login.html", {
        "error": error is not None,
        "logout": logout is not None,
        "locked": locked is not None,
        "disabled": disabled is not None,
    })


@router.post("/login")
def login_submit(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    user_service: UserService = Depends(get_user_service)
):
    user = user_service.authenticate(username, password)

    if user is None:
        failed = user_service.record_failed_login(username)
        logger.warning(f"Failed login attempt for user: {username}")
        if failed is not None and failed.account_locked:
            return RedirectResponse(url="/login?locked=true", status_code=303)
        return RedirectResponse(url="/login?error=true", status_code=303)

    if user.account_locked:
        logger.warning(f"Login attempt for locked account: {username}")
        return RedirectResponse(url="/login?locked=true", status_code=303)
    if not user.enabled:
        logger.warning(f"Login attempt for disabled account: {username}")
        return RedirectResponse(url="/login?disabled=true", status_code=303)

    user_service.record_successful_login(user)
    target = request.session.pop(POST_LOGIN_REDIRECT, None) or settings.DEFAULT_SUCCESS_URL
    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"User {user.username} signed in, redirecting to {target}")

    return RedirectResponse(url=target, status_code=303)


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url="/login?logout=true", status_code=303)
