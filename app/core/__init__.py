"""Core app configuration, database sessions and the service error taxonomy."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import ServiceError

__all__ = ["ServiceError", "get_db", "get_settings", "settings"]
