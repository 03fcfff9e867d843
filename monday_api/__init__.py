"""
Async client for the monday.com GraphQL API.

Features:
- Token, API version and endpoint configuration with eager validation
- Per-request version override and timeout cancellation
- Transparent GraphQL multipart uploads for variables holding files
- Chainable request middleware on top of an aiohttp transport
"""

from .api_client import ApiClient
from .cancellation import AbortController, AbortSignal
from .config import (
    ApiClientConfig,
    ConfigLoader,
    LoggingConfig,
    LogLevel,
    RequestConfig,
    RequestOptions,
    load_config,
)
from .constants import DEFAULT_VERSION, MONDAY_API_ENDPOINT, SDK_VERSION
from .exceptions import (
    AbortError,
    ApiValidationError,
    ClientError,
    ContentError,
    InvalidApiVersionError,
    MondayApiError,
    NetworkError,
)
from .graphql import (
    FileUpload,
    GraphQLClient,
    GraphQLRequest,
    GraphQLResponse,
    UploadConvention,
    create_file_upload_middleware,
)
from .helpers import get_api_endpoint, is_valid_api_version

__version__ = SDK_VERSION

__all__ = [
    # Client
    "ApiClient",
    "GraphQLClient",
    "AbortController",
    "AbortSignal",
    # Configuration
    "ApiClientConfig",
    "RequestConfig",
    "RequestOptions",
    "LoggingConfig",
    "LogLevel",
    "ConfigLoader",
    "load_config",
    # Models
    "FileUpload",
    "GraphQLRequest",
    "GraphQLResponse",
    "UploadConvention",
    "create_file_upload_middleware",
    # Helpers
    "is_valid_api_version",
    "get_api_endpoint",
    "DEFAULT_VERSION",
    "MONDAY_API_ENDPOINT",
    "SDK_VERSION",
    # Exceptions
    "MondayApiError",
    "ApiValidationError",
    "InvalidApiVersionError",
    "AbortError",
    "NetworkError",
    "ContentError",
    "ClientError",
]
