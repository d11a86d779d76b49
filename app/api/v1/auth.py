"""Registration, JWT login and auth dependencies (get_current_user, require_role)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import (
    AccountBlockedError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
)
from app.core.security import decode_access_token
from app.models import Role
from app.schemas.accounts import AccountPublic
from app.schemas.auth import CurrentUser, LoginRequest, RegisterRequest, TokenResponse
from app.services import accounts

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=AccountPublic)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AccountPublic:
    """Create an active account with role 'user'. Returns the public view (no password hash)."""
    account = accounts.register(db, name=body.name, email=body.email, password=body.password)
    return AccountPublic.model_validate(account)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    _account, token = accounts.authenticate(db, email=body.email, password=body.password)
    return TokenResponse(token=token, token_type="bearer")


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT for a live, active account.

    Tokens are stateless, so the account is re-read on every request: a deleted
    account gets 401 and a blocked one gets 403 even while its token still verifies.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Not authenticated")
    claims = decode_access_token(credentials.credentials)
    try:
        account = accounts.get_account(db, claims.account_id)
    except NotFoundError:
        raise UnauthenticatedError("User not found. Please log in again.") from None
    if account.is_blocked:
        raise AccountBlockedError("Your account is blocked. Please contact support.")
    return CurrentUser(id=account.id, email=account.email, role=claims.role)


def require_role(role: Role) -> Callable[[CurrentUser], CurrentUser]:
    """Build a dependency that lets through only identities with the given role."""

    def _require_role(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role != role:
            raise ForbiddenError(f"Access denied. {role.value.capitalize()} role required.")
        return current_user

    return _require_role


require_admin = require_role(Role.ADMIN)


def require_manager(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency for block/unblock/delete: admin only when ADMIN_ONLY_MUTATIONS is set."""
    if get_settings().ADMIN_ONLY_MUTATIONS:
        return require_role(Role.ADMIN)(current_user)
    return current_user
