"""User directory endpoints: list, block/unblock and delete, individually or in bulk."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_manager
from app.core.database import get_db
from app.models import MAX_ACCOUNT_ID, AccountStatus
from app.schemas.accounts import (
    AccountPublic,
    BulkDeleteResult,
    BulkIdsRequest,
    BulkStatusResult,
    DeleteResponse,
    StatusUpdateRequest,
)
from app.schemas.auth import CurrentUser
from app.services import accounts

router = APIRouter()

AccountIdPath = Annotated[int, Path(ge=1, le=MAX_ACCOUNT_ID)]


@router.get("", response_model=list[AccountPublic])
def list_users(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[AccountPublic]:
    """List all accounts (any authenticated user)."""
    return [AccountPublic.model_validate(a) for a in accounts.list_accounts(db)]


@router.get("/me", response_model=AccountPublic)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountPublic:
    """Public view of the caller's own account."""
    return AccountPublic.model_validate(accounts.get_account(db, current_user.id))


@router.patch("/block", response_model=BulkStatusResult)
def block_users(
    body: BulkIdsRequest,
    _user: Annotated[CurrentUser, Depends(require_manager)],
    db: Annotated[Session, Depends(get_db)],
) -> BulkStatusResult:
    """Block every listed account; ids that do not exist are reported in not_found."""
    return accounts.bulk_set_status(db, body.ids, AccountStatus.BLOCKED)


@router.patch("/unblock", response_model=BulkStatusResult)
def unblock_users(
    body: BulkIdsRequest,
    _user: Annotated[CurrentUser, Depends(require_manager)],
    db: Annotated[Session, Depends(get_db)],
) -> BulkStatusResult:
    """Unblock every listed account; ids that do not exist are reported in not_found."""
    return accounts.bulk_set_status(db, body.ids, AccountStatus.ACTIVE)


@router.delete("", response_model=BulkDeleteResult)
def delete_users(
    body: BulkIdsRequest,
    _user: Annotated[CurrentUser, Depends(require_manager)],
    db: Annotated[Session, Depends(get_db)],
) -> BulkDeleteResult:
    """Delete every listed account in one statement; unmatched ids are reported in not_found."""
    return accounts.bulk_delete(db, body.ids)


@router.get("/{account_id}", response_model=AccountPublic)
def get_user(
    account_id: AccountIdPath,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountPublic:
    return AccountPublic.model_validate(accounts.get_account(db, account_id))


@router.patch("/{account_id}/block", response_model=AccountPublic)
def block_user(
    account_id: AccountIdPath,
    _user: Annotated[CurrentUser, Depends(require_manager)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountPublic:
    account = accounts.set_status(db, account_id, AccountStatus.BLOCKED)
    return AccountPublic.model_validate(account)


@router.patch("/{account_id}/unblock", response_model=AccountPublic)
def unblock_user(
    account_id: AccountIdPath,
    _user: Annotated[CurrentUser, Depends(require_manager)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountPublic:
    account = accounts.set_status(db, account_id, AccountStatus.ACTIVE)
    return AccountPublic.model_validate(account)


@router.put("/{account_id}/status", response_model=AccountPublic)
def update_user_status(
    account_id: AccountIdPath,
    body: StatusUpdateRequest,
    _user: Annotated[CurrentUser, Depends(require_manager)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountPublic:
    """Set status to 'active' or 'blocked'. Any other value is a 400 ValidationError."""
    account = accounts.set_status(db, account_id, body.status)
    return AccountPublic.model_validate(account)


@router.delete("/{account_id}", response_model=DeleteResponse)
def delete_user(
    account_id: AccountIdPath,
    _user: Annotated[CurrentUser, Depends(require_manager)],
    db: Annotated[Session, Depends(get_db)],
) -> DeleteResponse:
    """Permanently remove an account."""
    return DeleteResponse(user=accounts.delete_account(db, account_id))
