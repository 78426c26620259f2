"""
API request and response models for FastAPI endpoints.

This module defines the Pydantic models used for API request/response validation.
"""

from typing import Optional
from pydantic import BaseModel, Field

from .email import Email


class DecodeEmlResponse(BaseModel):
    """Response model for the EML decoding endpoint."""

    success: bool = Field(description="Whether decoding succeeded")
    email: Optional[Email] = Field(None, description="Decoded message")
    error: Optional[str] = Field(None, description="Error message if failed")
    error_type: Optional[str] = Field(
        None, description="Exception class name, e.g. UnsupportedEncoding"
    )

    model_config = {"ser_json_bytes": "base64"}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    uptime_seconds: float = Field(description="Service uptime")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    decoder_version: str = Field(description="MIME decoder version")
