"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Mock settings/configuration
- Sample email data
- Temporary files
"""

import os
from typing import Generator

import pytest

from mime_body.config import Settings
from mime_body.parsing.eml_parser import read_message
from .fixtures.emails import SAMPLE_EMAILS


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create mock settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="INFO",
        log_json=False,  # Easier to read in tests
        max_nesting_depth=4,
        max_parts=20,
    )


@pytest.fixture
def non_mime_eml() -> bytes:
    """
    Get simple plain text email bytes for basic tests.

    Returns:
        bytes of a non-MIME .eml file
    """
    return SAMPLE_EMAILS["non_mime"]


@pytest.fixture
def html_mime_inline_eml() -> bytes:
    """
    Get multipart/alternative email with a related HTML part and inline image.

    Returns:
        bytes of multipart/alternative email
    """
    return SAMPLE_EMAILS["html_mime_inline"]


@pytest.fixture
def mime_mixed_eml() -> bytes:
    """
    Get multipart/mixed email with two text sections.

    Returns:
        bytes of multipart/mixed email
    """
    return SAMPLE_EMAILS["mime_mixed"]


@pytest.fixture
def attachment_eml() -> bytes:
    """
    Get email with single HTML attachment.

    Returns:
        bytes of email with test.html attachment
    """
    return SAMPLE_EMAILS["attachment"]


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
    eml_path.write_bytes(SAMPLE_EMAILS["html_mime_inline"])
    yield str(eml_path)
    # Cleanup is automatic with tmp_path


@pytest.fixture
def raw_message():
    """
    Factory splitting a named sample email into header map and body stream.

    Returns:
        Callable taking a SAMPLE_EMAILS key
    """

    def factory(name: str):
        return read_message(SAMPLE_EMAILS[name])

    return factory


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
