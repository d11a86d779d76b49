"""Helpers for tests that need a real account store (in-memory SQLite)."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Account, AccountStatus, Base, Role
from app.services import accounts


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory database with the schema created; one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_account(
    db: Session,
    name: str = "Alice",
    email: str = "a@x.com",
    password: str = "pw1",
    role: Role = Role.USER,
    status: AccountStatus = AccountStatus.ACTIVE,
) -> Account:
    """Register an account through the service, then apply role and status directly."""
    account = accounts.register(db, name=name, email=email, password=password)
    account.role = role.value
    account.status = status.value
    db.commit()
    db.refresh(account)
    return account
