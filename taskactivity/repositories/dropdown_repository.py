"""
Repositories for dropdown values and per-user dropdown access
"""
import logging
from typing import Iterable, List, Optional, Set
from sqlalchemy import func, delete as sa_delete, or_
from sqlmodel import Session, select

from taskactivity.models import DropdownValue, UserDropdownAccess

logger = logging.getLogger(__name__)


class DropdownValueRepository:
    """Data access for DropdownValue"""

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, value_id: int) -> Optional[DropdownValue]:
        return self.session.get(DropdownValue, value_id)

    def find_all(self) -> List[DropdownValue]:
        return list(self.session.exec(select(DropdownValue)).all())

    def find_all_ordered(self) -> List[DropdownValue]:
        """All values sorted by category, subcategory, display order, item value"""
        stmt = select(DropdownValue).order_by(
            DropdownValue.category,
            DropdownValue.subcategory,
            DropdownValue.display_order,
            DropdownValue.item_value,
        )
        return list(self.session.exec(stmt).all())

    def find_distinct_categories(self) -> List[str]:
        stmt = select(DropdownValue.category).distinct().order_by(DropdownValue.category)
        return list(self.session.exec(stmt).all())

    def find_by_category(self, category: str, active_only: bool = False) -> List[DropdownValue]:
        stmt = select(DropdownValue).where(DropdownValue.category == category)
        if active_only:
            stmt = stmt.where(DropdownValue.is_active == True)  # noqa: E712
        stmt = stmt.order_by(DropdownValue.display_order, DropdownValue.item_value)
        return list(self.session.exec(stmt).all())

    def find_by_category_and_subcategory(
        self,
        category: str,
        subcategory: str,
        active_only: bool = False
    ) -> List[DropdownValue]:
        stmt = select(DropdownValue).where(
            DropdownValue.category == category,
            DropdownValue.subcategory == subcategory,
        )
        if active_only:
            stmt = stmt.where(DropdownValue.is_active == True)  # noqa: E712
        stmt = stmt.order_by(DropdownValue.display_order, DropdownValue.item_value)
        return list(self.session.exec(stmt).all())

    def exists_by_category_subcategory_and_value(
        self,
        category: str,
        subcategory: str,
        item_value: str
    ) -> bool:
        """Case-insensitive check on the item value"""
        stmt = select(DropdownValue.id).where(
            DropdownValue.category == category,
            DropdownValue.subcategory == subcategory,
            func.lower(DropdownValue.item_value) == item_value.lower(),
        )
        return self.session.exec(stmt).first() is not None

    def find_max_display_order(self, category: str) -> int:
        stmt = select(func.coalesce(func.max(DropdownValue.display_order), 0)).where(
            DropdownValue.category == category
        )
        return int(self.session.exec(stmt).one())

    def save(self, value: DropdownValue) -> DropdownValue:
        self.session.add(value)
        self.session.commit()
        self.session.refresh(value)
        return value

    def delete(self, value: DropdownValue) -> None:
        # Access rows reference the value; remove them first
        self.session.execute(
            sa_delete(UserDropdownAccess).where(UserDropdownAccess.dropdown_value_id == value.id)
        )
        self.session.delete(value)
        self.session.commit()


class UserDropdownAccessRepository:
    """Data access for UserDropdownAccess"""

    def __init__(self, session: Session):
        self.session = session

    def find_accessible(self, username: str, category: str, subcategory: str) -> List[DropdownValue]:
        """
        Active values of a subcategory visible to a user:
        flagged all_users, or explicitly assigned to the username
        """
        assigned = select(UserDropdownAccess.dropdown_value_id).where(
            UserDropdownAccess.username == username
        )
        stmt = (
            select(DropdownValue)
            .where(
                DropdownValue.category == category,
                DropdownValue.subcategory == subcategory,
                DropdownValue.is_active == True,  # noqa: E712
                or_(
                    DropdownValue.all_users == True,  # noqa: E712
                    DropdownValue.id.in_(assigned),
                ),
            )
            .order_by(DropdownValue.display_order, DropdownValue.item_value)
        )
        return list(self.session.exec(stmt).all())

    def find_dropdown_value_ids(self, username: str) -> Set[int]:
        stmt = select(UserDropdownAccess.dropdown_value_id).where(
            UserDropdownAccess.username == username
        )
        return set(self.session.exec(stmt).all())

    def replace_for_subcategory(
        self,
        username: str,
        category: str,
        subcategory: str,
        dropdown_value_ids: Iterable[int]
    ) -> None:
        """Delete the user's rows for a category/subcategory, then insert the new set"""
        in_subcategory = select(DropdownValue.id).where(
            DropdownValue.category == category,
            DropdownValue.subcategory == subcategory,
        )
        self.session.execute(
            sa_delete(UserDropdownAccess).where(
                UserDropdownAccess.username == username,
                UserDropdownAccess.dropdown_value_id.in_(in_subcategory),
            )
        )
        for value_id in sorted(set(dropdown_value_ids)):
            self.session.add(UserDropdownAccess(username=username, dropdown_value_id=value_id))
        self.session.commit()

    def delete_by_username(self, username: str) -> None:
        self.session.execute(
            sa_delete(UserDropdownAccess).where(UserDropdownAccess.username == username)
        )
        self.session.commit()
