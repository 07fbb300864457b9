"""
NoteApp Backend — Response Envelopes
======================================

What:  JSON bodies returned outside the HTML views (errors, health).
Why:   Clients need a consistent structure to parse errors programmatically.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response format.

    Example:
        {
            "error": "already_exists",
            "message": "Username already exists",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and storage status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    storage: str = Field(description="Data directory state: writable, unwritable")
    uptime_seconds: float = Field(description="Seconds since service started")
