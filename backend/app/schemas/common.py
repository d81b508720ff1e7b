"""
Device Registry Backend — Shared Pydantic Schemas
===================================================

What:  Base model for camelCase DTOs plus error and health response shapes.
Why:   Every DTO crosses the wire in camelCase ("isEnabled", "fullName") while
       Python code keeps snake_case attribute names.
How:   alias_generator=to_camel; populate_by_name lets services construct
       DTOs with snake_case keyword arguments. FastAPI serializes response
       models by alias.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for all request/response DTOs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ProblemDetails(CamelModel):
    """
    What:  Error envelope returned for every 500 response.
    Format: application/problem+json (RFC 7807 field names).

    Example:
        {
            "title": "Cannot create new device",
            "status": 500,
            "detail": "(sqlite3.IntegrityError) NOT NULL constraint failed: ...",
            "instance": "/api/devices"
        }
    """
    title: str = Field(description="Short summary of the failed operation")
    status: int = Field(default=500, description="HTTP status code")
    detail: Optional[str] = Field(default=None, description="Underlying error message")
    instance: Optional[str] = Field(default=None, description="Request path")


class ValidationProblemDetails(CamelModel):
    """Returned with HTTP 400 when a request body or path parameter is invalid."""
    title: str = Field(default="One or more validation errors occurred.")
    status: int = Field(default=400)
    errors: Dict[str, Any] = Field(default_factory=dict, description="Messages keyed by field")
    instance: Optional[str] = Field(default=None)


class HealthResponse(CamelModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
