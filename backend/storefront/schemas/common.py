"""
Storefront Backend — Shared Response Schemas
==============================================

What:  Error and health payloads shared by every router.
Why:   Clients parse one error shape regardless of which endpoint failed.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for wire models: snake_case in Python, camelCase in JSON.

    populate_by_name lets callers send either `isNew` or `is_new`.
    from_attributes lets response models be built straight from ORM rows.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    Standardized error body.

    Example:
        {
            "error": "file_too_large",
            "message": "File too large. Maximum size is 20 MB.",
            "details": {"field": "image", "max_size_mb": 20.0},
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    upload_dir: str = Field(description="Upload directory status: writable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
