"""
Custom logging filters for monday_api.

This module provides filters for credential masking and component-specific
filtering.
"""

import logging
import re
from typing import List, Pattern, Set, Tuple


class SensitiveDataFilter(logging.Filter):
    """Filter to mask API tokens and credentials in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        # (pattern, replacement) pairs, applied in order
        self.rules: List[Tuple[Pattern[str], str]] = [
            # Bearer tokens
            (re.compile(r"(bearer\s+)([A-Za-z0-9._~+/=-]+)", re.IGNORECASE), r"\1***MASKED***"),
            # Authorization headers, raw monday.com tokens included
            (
                re.compile(
                    r"""(authorization["']?\s*[:=]\s*["']?)(?!\*\*\*MASKED)([^\s"',}]+)""",
                    re.IGNORECASE,
                ),
                r"\1***MASKED***",
            ),
            # API keys, tokens and secrets
            (
                re.compile(
                    r"""(api[_-]?key|token|secret)(["']?\s*[:=]\s*["']?)([A-Za-z0-9._~+/=-]{8,})""",
                    re.IGNORECASE,
                ),
                r"\1\2***MASKED***",
            ),
            # URLs with credentials
            (re.compile(r"(https?://[^:/\s]+):([^@/\s]+)@", re.IGNORECASE), r"\1:***MASKED***@"),
        ]

    def mask(self, message: str) -> str:
        for pattern, replacement in self.rules:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format arguments; let the handler report them
            return True

        record.msg = self.mask(message)
        record.args = ()
        return True


class ComponentFilter(logging.Filter):
    """Filter for component-specific logging."""

    def __init__(self, component: str, allowed_levels: Set[str] | None = None) -> None:
        """
        Initialize component filter.

        Args:
            component: Component (logger name prefix) to filter for
            allowed_levels: Set of allowed log levels
        """
        super().__init__()
        self.component = component
        self.allowed_levels = allowed_levels or {
            "DEBUG",
            "INFO",
            "WARNING",
            "ERROR",
            "CRITICAL",
        }

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter based on component and level."""
        if not record.name.startswith(self.component):
            return False

        return record.levelname in self.allowed_levels
