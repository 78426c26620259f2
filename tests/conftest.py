"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- HTTP clients
- Mock settings/configuration
- Sample email data
- Temporary files
"""

import os
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from eml_decoder.api.app import app
from eml_decoder.config import Settings
from eml_decoder.parsing.walker import WalkOptions
from .fixtures.emails import SAMPLE_EMAILS


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing FastAPI endpoints.

    Yields:
        AsyncClient instance
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        max_email_size_mb=25,
        max_nesting_depth=8,
        log_level="INFO",
        log_json=False,  # Easier to read in tests
    )


@pytest.fixture
def walk_options() -> WalkOptions:
    """Default walk options, independent of the environment."""
    return WalkOptions()


@pytest.fixture
def merge_options() -> WalkOptions:
    """Walk options that append nested bodies under multipart/mixed."""
    return WalkOptions(mixed_nested_body_mode="merge")


@pytest.fixture
def sample_eml_bytes() -> bytes:
    """
    Get simple plain text email bytes for basic tests.

    Returns:
        bytes of a simple .eml file
    """
    return SAMPLE_EMAILS["simple_plain_text"]


@pytest.fixture
def mixed_attachment_eml() -> bytes:
    """multipart/mixed with one text part and one base64 attachment."""
    return SAMPLE_EMAILS["mixed_attachment"]


@pytest.fixture
def alternative_eml() -> bytes:
    """multipart/alternative with text and HTML."""
    return SAMPLE_EMAILS["alternative"]


@pytest.fixture
def related_inline_eml() -> bytes:
    """multipart/related with an inline image."""
    return SAMPLE_EMAILS["related_inline"]


@pytest.fixture
def nested_eml() -> bytes:
    """mixed > alternative > related with a PDF attachment."""
    return SAMPLE_EMAILS["nested"]


@pytest.fixture
def malformed_eml() -> bytes:
    """
    Get malformed email for error handling tests.

    Returns:
        bytes of invalid RFC5322 data
    """
    return SAMPLE_EMAILS["malformed"]


@pytest.fixture
def tmp_eml_file(tmp_path) -> Generator[str, None, None]:
    """
    Create temporary .eml file for file-based tests.

    Args:
        tmp_path: pytest's temporary directory fixture

    Yields:
        Path to temporary .eml file
    """
    eml_path = tmp_path / "test_email.eml"
    eml_path.write_bytes(SAMPLE_EMAILS["mixed_attachment"])
    yield str(eml_path)


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (API, CLI, end-to-end)"
    )
