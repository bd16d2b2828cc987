"""
Dropdown reference data management
"""
import logging
from typing import List, Optional

from taskactivity.core.exceptions import DuplicateValueError, NotFoundError
from taskactivity.models import DropdownValue
from taskactivity.repositories import DropdownValueRepository

logger = logging.getLogger(__name__)

# Main categories
CATEGORY_TASK = "TASK"
CATEGORY_EXPENSE = "EXPENSE"

# Task subcategories
SUBCATEGORY_CLIENT = "CLIENT"
SUBCATEGORY_PROJECT = "PROJECT"
SUBCATEGORY_PHASE = "PHASE"

# Expense subcategories
SUBCATEGORY_EXPENSE_TYPE = "EXPENSE_TYPE"
SUBCATEGORY_PAYMENT_METHOD = "PAYMENT_METHOD"
SUBCATEGORY_EXPENSE_STATUS = "EXPENSE_STATUS"
SUBCATEGORY_VENDOR = "VENDOR"
SUBCATEGORY_CURRENCY = "CURRENCY"
SUBCATEGORY_RECEIPT_STATUS = "RECEIPT_STATUS"


class DropdownValueService:
    """CRUD and lookups for DropdownValue; categories are stored upper-case"""

    def __init__(self, dropdown_repo: DropdownValueRepository):
        self.dropdown_repo = dropdown_repo

    # ---------- reads ----------

    def get_active_values_by_category(self, category: str) -> List[str]:
        """Item values only, active rows, display order"""
        values = self.dropdown_repo.find_by_category(category.upper(), active_only=True)
        return [v.item_value for v in values]

    def get_all_values_by_category(self, category: str) -> List[DropdownValue]:
        return self.dropdown_repo.find_by_category(category.upper())

    def get_all_dropdown_values(self) -> List[DropdownValue]:
        return self.dropdown_repo.find_all_ordered()

    def get_all_categories(self) -> List[str]:
        return self.dropdown_repo.find_distinct_categories()

    def get_dropdown_value_by_id(self, value_id: int) -> Optional[DropdownValue]:
        return self.dropdown_repo.find_by_id(value_id)

    def get_active_values_by_category_and_subcategory(
        self,
        category: str,
        subcategory: str
    ) -> List[DropdownValue]:
        return self.dropdown_repo.find_by_category_and_subcategory(
            category.upper(), subcategory.upper(), active_only=True
        )

    def get_all_values_by_category_and_subcategory(
        self,
        category: str,
        subcategory: str
    ) -> List[DropdownValue]:
        return self.dropdown_repo.find_by_category_and_subcategory(category.upper(), subcategory.upper())

    def get_active_clients(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_TASK, SUBCATEGORY_CLIENT)

    def get_active_projects(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_TASK, SUBCATEGORY_PROJECT)

    def get_active_phases(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_TASK, SUBCATEGORY_PHASE)

    def get_active_expense_types(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_EXPENSE, SUBCATEGORY_EXPENSE_TYPE)

    def get_active_payment_methods(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_EXPENSE, SUBCATEGORY_PAYMENT_METHOD)

    def get_active_expense_statuses(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_EXPENSE, SUBCATEGORY_EXPENSE_STATUS)

    def get_active_vendors(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_EXPENSE, SUBCATEGORY_VENDOR)

    def get_active_currencies(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_EXPENSE, SUBCATEGORY_CURRENCY)

    def get_active_receipt_statuses(self) -> List[DropdownValue]:
        return self.get_active_values_by_category_and_subcategory(CATEGORY_EXPENSE, SUBCATEGORY_RECEIPT_STATUS)

    # ---------- writes ----------

    def create_dropdown_value(self, category: str, subcategory: str, value: str) -> DropdownValue:
        """Append a new active value at the end of its category's display order"""
        category = category.strip().upper()
        subcategory = subcategory.strip().upper()
        value = value.strip()
        if not category or not subcategory or not value:
            raise ValueError("Category, subcategory and value are required")

        if self.dropdown_repo.exists_by_category_subcategory_and_value(category, subcategory, value):
            raise DuplicateValueError(
                f"Value '{value}' already exists for category {category} and subcategory {subcategory}"
            )

        max_order = self.dropdown_repo.find_max_display_order(category)
        created = self.dropdown_repo.save(DropdownValue(
            category=category,
            subcategory=subcategory,
            item_value=value,
            display_order=max_order + 1,
            is_active=True,
        ))
        logger.info(f"Created dropdown value {created.id}: {category}/{subcategory} = {value}")
        return created

    def update_dropdown_value(
        self,
        value_id: int,
        value: str,
        display_order: int,
        is_active: bool,
        non_billable: Optional[bool] = None
    ) -> DropdownValue:
        existing = self.dropdown_repo.find_by_id(value_id)
        if existing is None:
            raise NotFoundError(f"Dropdown value not found with ID: {value_id}")

        value = value.strip()
        if not value:
            raise ValueError("Value is required")

        if existing.item_value.lower() != value.lower() and \
                self.dropdown_repo.exists_by_category_subcategory_and_value(
                    existing.category, existing.subcategory, value):
            raise DuplicateValueError(
                f"Value '{value}' already exists for category {existing.category} "
                f"and subcategory {existing.subcategory}"
            )

        existing.item_value = value
        existing.display_order = display_order
        existing.is_active = is_active
        if non_billable is not None:
            existing.non_billable = non_billable

        updated = self.dropdown_repo.save(existing)
        logger.info(f"Updated dropdown value {value_id}")
        return updated

    def delete_dropdown_value(self, value_id: int) -> None:
        existing = self.dropdown_repo.find_by_id(value_id)
        if existing is None:
            raise NotFoundError(f"Dropdown value not found with ID: {value_id}")
        self.dropdown_repo.delete(existing)
        logger.info(f"Deleted dropdown value {value_id}")

    def toggle_active_status(self, value_id: int) -> DropdownValue:
        existing = self.dropdown_repo.find_by_id(value_id)
        if existing is None:
            raise NotFoundError(f"Dropdown value not found with ID: {value_id}")
        existing.is_active = not existing.is_active
        return self.dropdown_repo.save(existing)
