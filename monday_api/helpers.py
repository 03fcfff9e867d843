"""
Small validation and endpoint helpers.
"""

from __future__ import annotations

import os
import re
from typing import Optional

from .constants import ENDPOINT_ENV_VAR, MONDAY_API_ENDPOINT

_API_VERSION_PATTERN = re.compile(r"^\d{4}-(01|04|07|10)$")


def is_valid_api_version(version: str) -> bool:
    """
    Validate the API version format (yyyy-mm), restricting mm to 01, 04, 07 or 10.

    Args:
        version: The API version string to validate

    Returns:
        True for a quarterly ``yyyy-mm`` version or the literal ``dev``
    """
    return version == "dev" or _API_VERSION_PATTERN.fullmatch(version) is not None


def get_api_endpoint(override: Optional[str] = None) -> str:
    """Resolve the endpoint: explicit override, then environment, then the public API."""
    if override:
        return override
    return os.environ.get(ENDPOINT_ENV_VAR) or MONDAY_API_ENDPOINT
