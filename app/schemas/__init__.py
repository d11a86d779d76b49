"""Pydantic request/response schemas."""

from app.schemas.accounts import (
    AccountPublic,
    AccountSummary,
    BulkDeleteResult,
    BulkIdsRequest,
    BulkStatusResult,
    DeleteResponse,
    StatusUpdateRequest,
)
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    TokenResponse,
)
from app.schemas.errors import ErrorResponse
from app.schemas.health import HealthResponse

__all__ = [
    "AccountPublic",
    "AccountSummary",
    "BulkDeleteResult",
    "BulkIdsRequest",
    "BulkStatusResult",
    "CurrentUser",
    "DeleteResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "StatusUpdateRequest",
    "TokenClaims",
    "TokenResponse",
]
