"""Health check response for the user directory."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Liveness plus account store reachability.

    Reports no account data, so it is safe to expose without a bearer token.
    """

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="APP_ENV of this process (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether the account store answered a trivial query",
    )
    token_ttl_minutes: int = Field(description="Lifetime of newly issued access tokens")
    admin_only_mutations: bool = Field(
        description="True when block/unblock/delete are restricted to admins",
    )
