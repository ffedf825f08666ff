"""Pydantic schemas for API responses."""

from pydantic import BaseModel, Field
from datetime import datetime


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""
    
    short_url: str = Field(..., alias="short-url", description="The complete short URL")
    expires: str = Field(..., description="ISO-8601 expiry timestamp")
    
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "short-url": "https://short.link/k3x9q0ab",
                    "expires": "2024-01-01T13:00:00+00:00"
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(..., description="Overall status")
    entries: int = Field(..., description="Entries currently held, including expired ones not yet reaped")
    reaper: str = Field(..., description="Reaper status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""
    
    error: str = Field(..., description="Error message")
