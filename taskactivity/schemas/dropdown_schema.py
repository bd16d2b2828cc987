"""
Schemas for /api/dropdowns
JSON field names are camelCase to match the front-end clients
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DropdownValueResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    category: str
    subcategory: str
    item_value: str = Field(alias="itemValue")
    display_order: int = Field(alias="displayOrder")
    is_active: bool = Field(alias="isActive")
    non_billable: bool = Field(default=False, alias="nonBillable")
    all_users: bool = Field(default=False, alias="allUsers")


class DropdownValueCreate(BaseModel):
    """Request body for POST /api/dropdowns"""
    model_config = ConfigDict(populate_by_name=True)

    category: str = Field(..., min_length=1, max_length=50)
    subcategory: str = Field(..., min_length=1, max_length=50)
    item_value: str = Field(..., min_length=1, max_length=255, alias="itemValue")


class DropdownValueUpdate(BaseModel):
    """Request body for PUT /api/dropdowns/{id}"""
    model_config = ConfigDict(populate_by_name=True)

    item_value: str = Field(..., min_length=1, max_length=255, alias="itemValue")
    display_order: int = Field(default=0, ge=0, alias="displayOrder")
    is_active: bool = Field(default=True, alias="isActive")
    non_billable: Optional[bool] = Field(default=None, alias="nonBillable")
