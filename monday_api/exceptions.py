"""
Exception hierarchy for the monday.com API client.

Validation errors are raised before any network attempt; transport errors
come from the aiohttp layer and are converted by :class:`ErrorHandler`.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Dict, Optional

import aiohttp

if TYPE_CHECKING:
    from .graphql.models import GraphQLResponse


INVALID_API_VERSION_MESSAGE = (
    "Invalid API version format. Expected format is 'yyyy-mm' with month as "
    "one of '01', '04', '07', or '10'."
)

ABORT_MESSAGE = "The user aborted a request."


class MondayApiError(Exception):
    """
    Base exception for all client operations.

    Attributes:
        message: Human-readable error message
        url: Endpoint that caused the error (if applicable)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class ApiValidationError(MondayApiError):
    """Raised when client configuration or per-request options are malformed."""

    pass


class InvalidApiVersionError(ApiValidationError):
    """Raised for an API version that is neither ``yyyy-mm`` (quarterly) nor ``dev``."""

    def __init__(self, message: str = INVALID_API_VERSION_MESSAGE, version: Optional[str] = None) -> None:
        super().__init__(message, version=version)
        self.version = version


class NetworkError(MondayApiError):
    """
    Raised for network-related errors.

    Covers DNS failures, refused connections and other problems that prevent
    the transport from completing the HTTP exchange.
    """

    pass


class AbortError(MondayApiError):
    """
    Raised when an in-flight request is cancelled through its abort signal.

    Attributes:
        timeout_value: The timeout (milliseconds) that armed the signal, if known
    """

    def __init__(
        self,
        message: str = ABORT_MESSAGE,
        url: Optional[str] = None,
        timeout_value: Optional[float] = None,
    ) -> None:
        super().__init__(message, url)
        self.timeout_value = timeout_value


class ContentError(MondayApiError):
    """Raised when the response body is not valid JSON."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code
        self.response_text = response_text


class ClientError(MondayApiError):
    """
    Raised when the API answers with GraphQL errors or a non-2xx status.

    Attributes:
        response: The parsed GraphQL response
        query: The GraphQL document that was sent
        variables: The variables that were sent
    """

    def __init__(
        self,
        message: str,
        response: "GraphQLResponse",
        query: Optional[str] = None,
        variables: Optional[Dict[str, Any]] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message, url)
        self.response = response
        self.query = query
        self.variables = variables

    @property
    def status_code(self) -> int:
        return self.response.status

    @property
    def errors(self) -> list[Dict[str, Any]]:
        return self.response.errors


class ErrorHandler:
    """Converts aiohttp exceptions into :class:`MondayApiError` subclasses."""

    @staticmethod
    def handle_aiohttp_error(error: Exception, url: Optional[str] = None) -> MondayApiError:
        """
        Convert aiohttp exceptions to client errors.

        Args:
            error: The original aiohttp exception
            url: The endpoint that caused the error

        Returns:
            Appropriate MondayApiError subclass
        """
        if isinstance(error, asyncio.TimeoutError):
            return NetworkError(f"Request timed out: {error}", url=url)

        elif isinstance(error, aiohttp.ClientConnectorError):
            return NetworkError(f"Connector error: {error}", url=url)

        elif isinstance(error, aiohttp.ClientConnectionError):
            return NetworkError(f"Connection error: {error}", url=url)

        elif isinstance(error, aiohttp.ClientPayloadError):
            return ContentError(f"Payload error: {error}", url=url)

        else:
            return NetworkError(f"Unexpected network error: {error}", url=url)
