"""Pydantic models for health and error responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class DetailedHealthResponse(BaseModel):
    """Readiness response with per-dependency results."""

    status: str = Field(..., description="Overall status: ready or not_ready")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Current server timestamp")
    checks: dict[str, str] = Field(..., description="Individual check results")


class ErrorBody(BaseModel):
    """Error payload shown to the user as a titled message."""

    code: str
    title: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Envelope for every error returned by the API."""

    error: ErrorBody
