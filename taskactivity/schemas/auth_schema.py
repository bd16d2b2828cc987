"""
Schemas for JWT authentication endpoints
"""
from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response for POST /api/auth/login"""
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")
    token_type: str = Field(default="Bearer", alias="tokenType")
    username: str
    role: str


class RefreshTokenRequest(BaseModel):
    """Request body for POST /api/auth/refresh"""
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str = Field(..., alias="refreshToken")


class RefreshTokenResponse(BaseModel):
    """Response for POST /api/auth/refresh"""
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    token_type: str = Field(default="Bearer", alias="tokenType")
