"""
Service layer for business logic
"""
from taskactivity.services.user_service import UserService
from taskactivity.services.dropdown_value_service import DropdownValueService
from taskactivity.services.user_dropdown_access_service import UserDropdownAccessService
from taskactivity.services.query_execution_service import QueryExecutionService

__all__ = [
    "UserService",
    "DropdownValueService",
    "UserDropdownAccessService",
    "QueryExecutionService",
]
