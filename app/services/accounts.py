"""Account lifecycle: register, login, status transitions (active/blocked) and deletion."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from functools import lru_cache

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import (
    AccountBlockedError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    StoreFailureError,
    ValidationError,
)
from app.core.security import create_access_token, hash_password, verify_password
from app.models import Account, AccountStatus, Role
from app.schemas.accounts import AccountSummary, BulkDeleteResult, BulkStatusResult

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(db: Session, action: str) -> Iterator[None]:
    """Translate store errors into StoreFailureError after rolling back the session."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Account store failure during %s", action)
        raise StoreFailureError(f"Account store unavailable during {action}") from e


@lru_cache
def _dummy_hash() -> str:
    # Verified against when the email is unknown so both login failures cost the same.
    return hash_password("not-a-real-password")


def parse_status(value: str | AccountStatus) -> AccountStatus:
    """Return the AccountStatus for value; ValidationError if it is not active or blocked."""
    try:
        return AccountStatus(value)
    except ValueError:
        raise ValidationError(
            f"Invalid status value; expected one of "
            f"{', '.join(s.value for s in AccountStatus)}"
        ) from None


def _unique_ids(ids: Iterable[int]) -> list[int]:
    """Drop duplicate ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


def register(db: Session, name: str, email: str, password: str) -> Account:
    """
    Create an active account with role 'user'.

    Raises ValidationError for an empty password and ConflictError when the email
    is already registered (including a concurrent registration losing the race on
    the unique index).
    """
    if not password:
        raise ValidationError("Password cannot be empty")

    with _store_errors(db, "register"):
        if db.query(Account.id).filter(Account.email == email).first() is not None:
            raise ConflictError("User already exists")
        account = Account(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=Role.USER.value,
            status=AccountStatus.ACTIVE.value,
            registered_at=datetime.now(UTC),
        )
        db.add(account)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("User already exists") from e
        db.refresh(account)

    logger.info("Account registered", extra={"account_id": account.id})
    return account


def authenticate(db: Session, email: str, password: str) -> tuple[Account, str]:
    """
    Verify credentials, stamp last login and issue an access token.

    Unknown email and wrong password both raise InvalidCredentialsError. A blocked
    account raises AccountBlockedError, checked only after the password verified.
    """
    with _store_errors(db, "login"):
        account = db.query(Account).filter(Account.email == email).first()

    if account is None:
        verify_password(password, _dummy_hash())
        logger.info("Login failed", extra={"reason": "invalid_credentials"})
        raise InvalidCredentialsError("Invalid email or password")
    if not verify_password(password, account.password_hash):
        logger.info("Login failed", extra={"reason": "invalid_credentials"})
        raise InvalidCredentialsError("Invalid email or password")
    if account.is_blocked:
        logger.warning("Login refused for blocked account", extra={"account_id": account.id})
        raise AccountBlockedError("Your account is blocked. Please contact support.")

    with _store_errors(db, "login"):
        account.last_login_at = datetime.now(UTC)
        db.commit()
        db.refresh(account)

    token = create_access_token(sub=account.id, role=account.role)
    logger.info("Login succeeded", extra={"account_id": account.id})
    return account, token


def list_accounts(db: Session) -> list[Account]:
    """All accounts ordered by id."""
    with _store_errors(db, "list"):
        return db.query(Account).order_by(Account.id).all()


def get_account(db: Session, account_id: int) -> Account:
    with _store_errors(db, "lookup"):
        account = db.query(Account).filter(Account.id == account_id).first()
    if account is None:
        raise NotFoundError("User not found")
    return account


def set_status(db: Session, account_id: int, status: str | AccountStatus) -> Account:
    """
    Set an account's status under a row lock and commit.

    Idempotent: setting the current status again succeeds without a write.
    Raises ValidationError for an unknown status and NotFoundError for a missing id.
    """
    target = parse_status(status)
    with _store_errors(db, "status change"):
        account = (
            db.query(Account)
            .filter(Account.id == account_id)
            .with_for_update()
            .first()
        )
        if account is None:
            db.rollback()
            raise NotFoundError("User not found")
        previous = account.status
        if previous != target.value:
            account.status = target.value
        db.commit()
        db.refresh(account)

    if previous != target.value:
        logger.info(
            "Account status changed",
            extra={"account_id": account_id, "from_status": previous, "to_status": target.value},
        )
    return account


def bulk_set_status(
    db: Session, ids: Iterable[int], status: str | AccountStatus
) -> BulkStatusResult:
    """
    Apply set_status to each id as an independent committed change.

    Missing ids are skipped and reported in not_found; they never abort the rest.
    A store failure stops the loop but leaves already-applied changes in place.
    """
    target = parse_status(status)
    updated: list[int] = []
    not_found: list[int] = []
    for account_id in _unique_ids(ids):
        try:
            set_status(db, account_id, target)
        except NotFoundError:
            not_found.append(account_id)
        else:
            updated.append(account_id)

    logger.info(
        "Bulk status change completed",
        extra={"to_status": target.value, "updated_count": len(updated), "not_found_count": len(not_found)},
    )
    return BulkStatusResult(
        status=target,
        count=len(updated),
        updated=updated,
        not_found=not_found,
    )


def delete_account(db: Session, account_id: int) -> AccountSummary:
    """Permanently remove an account; returns its id, name and email."""
    with _store_errors(db, "delete"):
        account = db.query(Account).filter(Account.id == account_id).first()
        if account is None:
            raise NotFoundError("User not found")
        summary = AccountSummary.model_validate(account)
        db.delete(account)
        db.commit()

    logger.info("Account deleted", extra={"account_id": account_id})
    return summary


def bulk_delete(db: Session, ids: Iterable[int]) -> BulkDeleteResult:
    """Remove every matching account in one statement; unmatched ids are reported, not errors."""
    requested = _unique_ids(ids)
    deleted: set[int] = set()
    if requested:
        with _store_errors(db, "bulk delete"):
            result = db.execute(
                delete(Account)
                .where(Account.id.in_(requested))
                .returning(Account.id)
                .execution_options(synchronize_session=False)
            )
            deleted = set(result.scalars().all())
            db.commit()

    deleted_ids = [i for i in requested if i in deleted]
    not_found = [i for i in requested if i not in deleted]
    logger.info(
        "Bulk delete completed",
        extra={"deleted_count": len(deleted_ids), "not_found_count": len(not_found)},
    )
    return BulkDeleteResult(count=len(deleted_ids), deleted=deleted_ids, not_found=not_found)
