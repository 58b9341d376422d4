"""
Noteful API - Shared Response Schemas
=====================================

What:  Error envelope and health check models shared by every router.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {"error": {"message": "Folder doesn't exist"}}
    """
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
