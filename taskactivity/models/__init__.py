"""
Models
All database models organized by layer
"""
from taskactivity.models.user_model import User, Role
from taskactivity.models.dropdown_model import DropdownValue, UserDropdownAccess

__all__ = [
    "User",
    "Role",
    "DropdownValue",
    "UserDropdownAccess",
]
