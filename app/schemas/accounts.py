"""Schemas for account views and status/delete operations (single and bulk)."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from app.models.account import MAX_ACCOUNT_ID, AccountStatus, Role

MAX_BULK_IDS = 1000

AccountId = Annotated[int, Field(ge=1, le=MAX_ACCOUNT_ID)]


class AccountPublic(BaseModel):
    """Public account view. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    status: AccountStatus
    registered_at: datetime | None = None
    last_login_at: datetime | None = None


class AccountSummary(BaseModel):
    """Identity of a removed account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class DeleteResponse(BaseModel):
    message: str = "User deleted successfully"
    user: AccountSummary


class StatusUpdateRequest(BaseModel):
    """Target status; validated against {active, blocked} by the account service."""

    status: str = Field(..., description="'active' or 'blocked'")


class BulkIdsRequest(BaseModel):
    """Account ids for a bulk operation. Duplicates are collapsed."""

    ids: list[AccountId] = Field(..., max_length=MAX_BULK_IDS)


class BulkStatusResult(BaseModel):
    """Per-id outcome of a bulk status change. Missing ids are reported, not errors."""

    status: AccountStatus
    count: int
    updated: list[int]
    not_found: list[int]


class BulkDeleteResult(BaseModel):
    """Per-id outcome of a bulk delete. Missing ids are reported, not errors."""

    message: str = "Users deleted successfully"
    count: int
    deleted: list[int]
    not_found: list[int]
