"""SQLAlchemy ORM models."""

from app.models.account import MAX_ACCOUNT_ID, Account, AccountStatus, Role
from app.models.base import Base

__all__ = ["MAX_ACCOUNT_ID", "Account", "AccountStatus", "Base", "Role"]
