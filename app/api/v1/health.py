"""Unauthenticated health probe: account store connectivity and the active auth policy."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Report whether the account store is reachable and which auth policy is in force.

    A disconnected store still answers 200 so load balancers can tell a database
    outage apart from a dead process; protected routes will answer 500 StoreFailure.
    """
    return HealthResponse(
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        token_ttl_minutes=settings.JWT_EXPIRE_MINUTES,
        admin_only_mutations=settings.ADMIN_ONLY_MUTATIONS,
    )
