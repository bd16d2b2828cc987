"""
Controls which clients and projects a user sees in dropdowns.

ADMIN bypasses the restriction and sees every active value. Everybody else
sees values flagged all_users plus the ones explicitly assigned to them.
"""
import logging
from typing import Iterable, List, Optional, Set

from taskactivity.models import DropdownValue
from taskactivity.repositories import DropdownValueRepository, UserDropdownAccessRepository
from taskactivity.schemas import AuthedUser
from taskactivity.services.dropdown_value_service import (
    CATEGORY_TASK,
    SUBCATEGORY_CLIENT,
    SUBCATEGORY_PROJECT,
)

logger = logging.getLogger(__name__)


class UserDropdownAccessService:

    def __init__(self, access_repo: UserDropdownAccessRepository, dropdown_repo: DropdownValueRepository):
        self.access_repo = access_repo
        self.dropdown_repo = dropdown_repo

    def get_accessible_clients(self, user: AuthedUser) -> List[DropdownValue]:
        return self._accessible(user, CATEGORY_TASK, SUBCATEGORY_CLIENT)

    def get_accessible_projects(self, user: AuthedUser) -> List[DropdownValue]:
        return self._accessible(user, CATEGORY_TASK, SUBCATEGORY_PROJECT)

    def get_assigned_dropdown_value_ids(self, username: str) -> Set[int]:
        return self.access_repo.find_dropdown_value_ids(username)

    def save_client_assignments(self, username: str, dropdown_value_ids: Optional[Iterable[int]]) -> None:
        self._save(username, CATEGORY_TASK, SUBCATEGORY_CLIENT, dropdown_value_ids)

    def save_project_assignments(self, username: str, dropdown_value_ids: Optional[Iterable[int]]) -> None:
        self._save(username, CATEGORY_TASK, SUBCATEGORY_PROJECT, dropdown_value_ids)

    def remove_all_access_for_user(self, username: str) -> None:
        self.access_repo.delete_by_username(username)
        logger.info(f"Removed all dropdown access for user {username}")

    def _accessible(self, user: Optional[AuthedUser], category: str, subcategory: str) -> List[DropdownValue]:
        if user is None:
            return []
        if user.is_admin:
            return self.dropdown_repo.find_by_category_and_subcategory(category, subcategory, active_only=True)
        return self.access_repo.find_accessible(user.username, category, subcategory)

    def _save(self, username: str, category: str, subcategory: str, dropdown_value_ids) -> None:
        ids = list(dropdown_value_ids or [])
        for value_id in ids:
            value = self.dropdown_repo.find_by_id(value_id)
            if value is None or value.category != category or value.subcategory != subcategory:
                raise ValueError(f"Dropdown value {value_id} is not a {category}/{subcategory} entry")
        self.access_repo.replace_for_subcategory(username, category, subcategory, ids)
        logger.info(f"Saved {len(ids)} {subcategory.lower()} assignment(s) for user {username}")
