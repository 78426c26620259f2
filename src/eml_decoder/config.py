"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Processing limits
    max_email_size_mb: int = 25
    max_nesting_depth: int = 32

    # How text/html returned by a nested multipart/alternative or
    # multipart/related combine with bodies already collected under
    # multipart/mixed: "replace" keeps only the latest container's bodies.
    mixed_nested_body_mode: Literal["replace", "merge"] = "replace"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
