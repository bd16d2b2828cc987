"""
Repository layer for data access
"""
from taskactivity.repositories.user_repository import UserRepository
from taskactivity.repositories.dropdown_repository import (
    DropdownValueRepository,
    UserDropdownAccessRepository,
)

__all__ = [
    "UserRepository",
    "DropdownValueRepository",
    "UserDropdownAccessRepository",
]
