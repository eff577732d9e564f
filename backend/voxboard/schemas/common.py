"""
Voxboard Backend - Shared Response Schemas
===========================================

What:  The response envelope used by every endpoint, the error body, and the
       service-level payloads (health, welcome).
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for payloads serialized with camelCase keys (createdAt, audioUrl)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform success envelope.

    Example:
        {
            "success": true,
            "message": "Soundboard created successfully",
            "data": {...}
        }
    """

    success: bool = Field(default=True)
    message: Optional[str] = Field(default=None, description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Operation payload")


class ErrorResponse(BaseModel):
    """
    Uniform error envelope for all 4xx/5xx responses.

    Example:
        {
            "success": false,
            "error": "validation_error",
            "message": "Title, text, and email are required",
            "details": {"field": "title"},
            "request_id": "a1b2c3d4"
        }
    """

    success: bool = Field(default=False)
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health; always HTTP 200."""

    success: bool = Field(default=True)
    status: str = Field(description="healthy or degraded")
    version: str
    timestamp: datetime
    uptime_seconds: float = Field(description="Seconds since the process started")
    database: str = Field(description="connected or disconnected")


class WelcomeResponse(BaseModel):
    success: bool = True
    message: str
    version: str
