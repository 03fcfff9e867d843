"""
Shared test fixtures and configuration for the monday_api test suite.
"""

import pytest

from monday_api import FileUpload


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep MONDAY_API_* variables from the host out of the tests."""
    for name in ("MONDAY_API_TOKEN", "MONDAY_API_VERSION", "MONDAY_API_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_upload() -> FileUpload:
    """Small text upload."""
    return FileUpload(b"hello world", "hello.txt", "text/plain")
