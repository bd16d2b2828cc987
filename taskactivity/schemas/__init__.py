from .user_schema import AuthedUser, UserEditDto, FIELD_ERROR_MESSAGES
from .query_schema import QueryExecutionRequest
from .api_response import ApiResponse
from .dropdown_schema import (
    DropdownValueResponse,
    DropdownValueCreate,
    DropdownValueUpdate,
)
from .auth_schema import (
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
)

__all__ = [
    "AuthedUser",
    "UserEditDto",
    "FIELD_ERROR_MESSAGES",
    "QueryExecutionRequest",
    "ApiResponse",
    "DropdownValueResponse",
    "DropdownValueCreate",
    "DropdownValueUpdate",
    "LoginRequest",
    "LoginResponse",
    "RefreshTokenRequest",
    "RefreshTokenResponse",
]
