"""
Self-service profile editing for signed-in users
"""
import logging
from typing import Dict, Optional
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from taskactivity.core.templating import flash, render
from taskactivity.dependencies import require_roles, get_user_service
from taskactivity.models import Role
from taskactivity.schemas import AuthedUser, UserEditDto, FIELD_ERROR_MESSAGES
from taskactivity.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])

PROFILE_TEMPLATE = "admin/user-edit.html"
USER_NOT_FOUND = "User not found"

profile_user = require_roles(Role.USER, Role.ADMIN, Role.EXPENSE_ADMIN)


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    errors = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "form"
        if field in errors:
            continue
        errors[field] = FIELD_ERROR_MESSAGES.get((field, err["type"]), err["msg"])
    return errors


def _render_form(request: Request, username: str, user_edit_dto, display_name: str, errors=None):
    return render(request, PROFILE_TEMPLATE, {
        "userEditDto": user_edit_dto,
        "isOwnProfile": True,
        "username": username,
        "userDisplayName": display_name,
        "errors": errors or {},
    })


@router.get("/edit")
def show_edit_profile(
    request: Request,
    u: AuthedUser = Depends(profile_user),
    user_service: UserService = Depends(get_user_service)
):
    logger.debug(f"User {u.username} accessing profile edit")

    user = user_service.get_user_by_username(u.username)
    if user is None:
        flash(request, "errorMessage", USER_NOT_FOUND)
        return RedirectResponse(url="/task-activity/list", status_code=303)

    return _render_form(request, u.username, UserEditDto.from_user(user), UserService.display_name(user))


@router.post("/edit")
def update_profile(
    request: Request,
    user_id: Optional[str] = Form(None, alias="id"),
    username: Optional[str] = Form(None),
    firstname: Optional[str] = Form(None),
    lastname: Optional[str] = Form(None),
    company: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    role: Optional[str] = Form(None),
    enabled: Optional[str] = Form(None),
    force_password_update: Optional[str] = Form(None, alias="forcePasswordUpdate"),
    account_locked: Optional[str] = Form(None, alias="accountLocked"),
    failed_login_attempts: Optional[str] = Form(None, alias="failedLoginAttempts"),
    u: AuthedUser = Depends(profile_user),
    user_service: UserService = Depends(get_user_service)
):
    """
    Update the caller's own name, company and email.

    Role, enabled and security flags posted with the form are ignored.
    """
    logger.debug(f"User {u.username} updating profile")
    submitted = {
        "id": user_id,
        "username": username,
        "firstname": firstname,
        "lastname": lastname,
        "company": company,
        "email": email,
        "role": role,
        "enabled": enabled,
        "forcePasswordUpdate": force_password_update,
        "accountLocked": account_locked,
        "failedLoginAttempts": failed_login_attempts,
    }
    form = {key: value for key, value in submitted.items() if value is not None}

    user = user_service.get_user_by_username(u.username)
    if user is None:
        flash(request, "errorMessage", USER_NOT_FOUND)
        return RedirectResponse(url="/profile/edit", status_code=303)

    display_name = UserService.display_name(user)

    try:
        dto = UserEditDto.model_validate(form)
    except ValidationError as e:
        errors = _field_errors(e)
        logger.debug(f"Profile form for {u.username} has errors: {errors}")
        return _render_form(request, u.username, form, display_name, errors)

    user.firstname = dto.firstname
    user.lastname = dto.lastname
    user.company = dto.company
    user.email = dto.email

    try:
        user_service.update_user(user)
    except ValueError as e:
        logger.warning(f"Error updating profile for user {u.username}: {e}")
        return _render_form(request, u.username, dto, display_name, {"username": str(e)})

    logger.info(f"User {u.username} successfully updated their profile")
    flash(request, "successMessage", "Profile updated successfully")
    return RedirectResponse(url="/profile/edit", status_code=303)
