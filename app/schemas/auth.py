"""Request/response schemas for registration, login and the authenticated identity."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.account import Role


class RegisterRequest(BaseModel):
    """New account details. An empty password is rejected by the account service."""

    name: str = Field(..., max_length=255, description="Display name")
    email: str = Field(..., min_length=1, max_length=320, description="Email (case-sensitive)")
    password: str = Field(..., max_length=128, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., max_length=320, description="Email")
    password: str = Field(..., max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class TokenClaims(BaseModel):
    """Verified claims carried by an access token."""

    account_id: int
    role: Role
    issued_at: datetime


class CurrentUser(BaseModel):
    """Authenticated identity attached to a request by the auth gate."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role
