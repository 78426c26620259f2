# Data models for decoded messages

from .email import Attachment, Email, EmbeddedFile
from .api_models import DecodeEmlResponse, HealthResponse, VersionResponse

__all__ = [
    "Email",
    "Attachment",
    "EmbeddedFile",
    "DecodeEmlResponse",
    "HealthResponse",
    "VersionResponse",
]
