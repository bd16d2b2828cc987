"""
Dropdown reference data endpoints

Reads are open to any signed-in user; create, update and delete are ADMIN only.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, Response

from taskactivity.dependencies import (
    get_current_user,
    require_admin,
    get_dropdown_value_service,
    get_user_dropdown_access_service,
)
from taskactivity.schemas import (
    AuthedUser,
    DropdownValueResponse,
    DropdownValueCreate,
    DropdownValueUpdate,
)
from taskactivity.services import DropdownValueService, UserDropdownAccessService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dropdowns", tags=["Dropdowns"])


def _to_response(values) -> List[DropdownValueResponse]:
    return [DropdownValueResponse.model_validate(v) for v in values]


@router.get("/categories", response_model=List[str])
def get_all_categories(
    u: AuthedUser = Depends(get_current_user),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    logger.debug("API Request: get all categories")
    return service.get_all_categories()


@router.get("/all", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_all_dropdown_values(
    u: AuthedUser = Depends(get_current_user),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    logger.debug("API Request: get all dropdown values")
    return _to_response(service.get_all_dropdown_values())


@router.get("/category/{category}", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_values_by_category(
    category: str,
    u: AuthedUser = Depends(get_current_user),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    logger.debug(f"API Request: get values for category {category}")
    return _to_response(service.get_all_values_by_category(category))


@router.get("/clients", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_clients(
    u: AuthedUser = Depends(get_current_user),
    access_service: UserDropdownAccessService = Depends(get_user_dropdown_access_service)
):
    logger.debug(f"API Request: get clients for {u.username}")
    return _to_response(access_service.get_accessible_clients(u))


@router.get("/projects", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_projects(
    u: AuthedUser = Depends(get_current_user),
    access_service: UserDropdownAccessService = Depends(get_user_dropdown_access_service)
):
    logger.debug(f"API Request: get projects for {u.username}")
    return _to_response(access_service.get_accessible_projects(u))


@router.get("/phases", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_phases(
    u: AuthedUser = Depends(get_current_user),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    return _to_response(service.get_active_phases())


@router.get("/expense-types", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_expense_types(
    u: AuthedUser = Depends(get_current_user),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    return _to_response(service.get_active_expense_types())


@router.get("/payment-methods", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_payment_methods(
    u: AuthedUser = Depends(get_current_user),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    return _to_response(service.get_active_payment_methods())


@router.get("/currencies", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_currencies(
    u: AuthedUser = Depends(get_current_user),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    return _to_response(service.get_active_currencies())


@router.get("/vendors", response_model=List[DropdownValueResponse], response_model_by_alias=True)
def get_vendors(
    u: AuthedUser = Depends(get_current_user),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    return _to_response(service.get_active_vendors())


@router.post("", response_model=DropdownValueResponse, response_model_by_alias=True)
def create_dropdown_value(
    p: DropdownValueCreate,
    u: AuthedUser = Depends(require_admin),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    """Create a value; duplicates of category/subcategory/value are rejected with 400"""
    logger.info(f"API Request: create dropdown value {p.category}/{p.subcategory} by {u.username}")
    created = service.create_dropdown_value(p.category, p.subcategory, p.item_value)
    return DropdownValueResponse.model_validate(created)


@router.put("/{value_id}", response_model=DropdownValueResponse, response_model_by_alias=True)
def update_dropdown_value(
    value_id: int,
    p: DropdownValueUpdate,
    u: AuthedUser = Depends(require_admin),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    logger.info(f"API Request: update dropdown value {value_id} by {u.username}")
    updated = service.update_dropdown_value(
        value_id,
        p.item_value,
        p.display_order,
        p.is_active,
        p.non_billable,
    )
    return DropdownValueResponse.model_validate(updated)


@router.delete("/{value_id}")
def delete_dropdown_value(
    value_id: int,
    u: AuthedUser = Depends(require_admin),
    service: DropdownValueService = Depends(get_dropdown_value_service)
):
    logger.info(f"API Request: delete dropdown value {value_id} by {u.username}")
    service.delete_dropdown_value(value_id)
    return Response(status_code=200)
