"""
Dropdown reference data
"""
from typing import Optional
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class DropdownValue(SQLModel, table=True):
    """A select-list option, grouped by category and subcategory"""
    __tablename__ = "dropdownvalues"

    id: Optional[int] = Field(default=None, primary_key=True)
    category: str = Field(max_length=50, index=True)
    subcategory: str = Field(max_length=50, index=True)
    item_value: str = Field(max_length=255)
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)
    non_billable: bool = Field(default=False)
    # Visible to every user without an explicit access row
    all_users: bool = Field(default=False)


class UserDropdownAccess(SQLModel, table=True):
    """Grants one user visibility of one dropdown value"""
    __tablename__ = "user_dropdown_access"
    __table_args__ = (
        UniqueConstraint("username", "dropdown_value_id", name="uq_user_dropdown_access"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=50, index=True)
    dropdown_value_id: int = Field(foreign_key="dropdownvalues.id", index=True)
