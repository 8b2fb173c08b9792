"""Pydantic models for health responses."""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response with dependency status."""

    status: str = Field(..., description="Overall health status: healthy or unhealthy")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Current server timestamp")
    checks: dict[str, str] = Field(..., description="Individual health check results")
