"""Error response body shared by every failing route."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error code, e.g. NotFound or AccountBlocked")
    detail: str = Field(..., description="Human-readable message")
