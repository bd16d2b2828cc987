"""
Schemas for users and the profile edit form
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from taskactivity.models import Role


class AuthedUser(BaseModel):
    id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


class UserEditDto(BaseModel):
    """Form backing object for /profile/edit"""
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="User ID is required")
    username: str = Field(..., min_length=3, max_length=50)
    firstname: Optional[str] = Field(default=None, max_length=50)
    lastname: str = Field(..., min_length=1, max_length=50)
    company: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    role: Role
    enabled: bool = False
    force_password_update: bool = Field(default=False, alias="forcePasswordUpdate")
    account_locked: bool = Field(default=False, alias="accountLocked")
    failed_login_attempts: int = Field(default=0, alias="failedLoginAttempts")

    @field_validator("firstname", "company", "email", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("username", "lastname", mode="before")
    @classmethod
    def strip_required(cls, v):
        return v.strip() if isinstance(v, str) else v

    @classmethod
    def from_user(cls, user) -> "UserEditDto":
        return cls(
            id=user.id,
            username=user.username,
            firstname=user.firstname,
            lastname=user.lastname,
            company=user.company,
            email=user.email,
            role=user.role,
            enabled=user.enabled,
            force_password_update=user.force_password_update,
            account_locked=user.account_locked,
            failed_login_attempts=user.failed_login_attempts,
        )


# Human-readable messages for the profile form, keyed by field and pydantic error type
FIELD_ERROR_MESSAGES = {
    ("id", "missing"): "User ID is required",
    ("username", "missing"): "Username is required",
    ("username", "string_too_short"): "Username must be between 3 and 50 characters",
    ("username", "string_too_long"): "Username must be between 3 and 50 characters",
    ("firstname", "string_too_long"): "First name cannot exceed 50 characters",
    ("lastname", "missing"): "Last name is required",
    ("lastname", "string_too_short"): "Last name is required",
    ("lastname", "string_too_long"): "Last name cannot exceed 50 characters",
    ("company", "string_too_long"): "Company cannot exceed 100 characters",
    ("role", "missing"): "Role is required",
}
