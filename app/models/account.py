"""ORM model for user-directory accounts (auth, RBAC and lifecycle status)."""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, func

from app.models.base import Base

# ids are a 32-bit Integer column; anything larger is malformed input.
MAX_ACCOUNT_ID = 2**31 - 1


class Role(str, Enum):
    """Closed set of roles; the Role Gate compares against these only."""

    USER = "user"
    ADMIN = "admin"


class AccountStatus(str, Enum):
    """Lifecycle status. Transitions are total over {active, blocked}."""

    ACTIVE = "active"
    BLOCKED = "blocked"


class Account(Base):
    """
    User account for JWT authentication and the active/blocked lifecycle.

    email equality is case-sensitive; password_hash is never part of any response.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="role"),
        CheckConstraint("status IN ('active', 'blocked')", name="status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
    status = Column(String(32), nullable=False, default=AccountStatus.ACTIVE.value, index=True)
    registered_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_blocked(self) -> bool:
        return self.status == AccountStatus.BLOCKED.value
