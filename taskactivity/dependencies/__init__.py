from taskactivity.dependencies.auth import (
    SESSION_USER_KEY,
    get_current_user,
    get_current_user_optional,
    require_admin,
    require_roles,
)
from taskactivity.dependencies.services import (
    get_user_service,
    get_dropdown_value_service,
    get_user_dropdown_access_service,
    get_query_execution_service,
)

__all__ = [
    "SESSION_USER_KEY",
    "get_current_user",
    "get_current_user_optional",
    "require_admin",
    "require_roles",
    "get_user_service",
    "get_dropdown_value_service",
    "get_user_dropdown_access_service",
    "get_query_execution_service",
]
