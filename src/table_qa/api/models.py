"""
API-specific request and response models for FastAPI endpoints.

The success body of POST /ask is the core Answer model itself.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AskRequest(BaseModel):
    """Request body for POST /ask."""

    query: str = Field(
        description="Natural-language question about the table",
        examples=["What is Alice's age?"],
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"]
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"]
    )
    checks: dict[str, str] = Field(
        description="Per-dependency status",
        examples=[{"table_source": "ok", "credential": "configured"}]
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error code or type",
        examples=["table_load_failed", "remote_service_error", "internal_error"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[dict] = Field(
        default=None,
        description="Additional error details (line numbers, upstream status, ...)"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Error timestamp (UTC)"
    )
