"""
monday.com API client.

This module provides :class:`ApiClient`, which stores the token, API version
and transport settings, and builds a configured :class:`GraphQLClient` for
every request so each call can override the version and carry its own
timeout.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar, Union

import aiohttp
from pydantic import ValidationError

from .cancellation import AbortSignal, clear_abort_timer, create_abort_controller
from .config.loader import ConfigLoader
from .config.models import ApiClientConfig, RequestOptions
from .constants import JSON_CONTENT_TYPE, SDK_VERSION
from .exceptions import ApiValidationError, InvalidApiVersionError
from .graphql.client import GraphQLClient
from .graphql.models import GraphQLResponse
from .graphql.upload import create_file_upload_middleware
from .helpers import get_api_endpoint, is_valid_api_version

logger = logging.getLogger(__name__)

T = TypeVar("T")

OptionsInput = Union[RequestOptions, Mapping[str, Any], None]


class ApiClient:
    """
    Structured access to the monday.com GraphQL API.

    The client is initialized with an authentication token and an optional
    API version, which become headers on every request. Requests whose
    variables contain :class:`~monday_api.graphql.FileUpload` values are sent
    as multipart uploads automatically.

    Examples:
        ```python
        config = ApiClientConfig(token="my-token", api_version="2025-04")

        async with ApiClient(config) as client:
            data = await client.request("query { boards(ids: [1]) { name } }")

            await client.request(
                "mutation ($file: File!) { add_file_to_column(item_id: 1, column_id: \\"files\\", file: $file) { id } }",
                {"file": await FileUpload.from_path("report.pdf")},
                {"timeout": 30_000},
            )
        ```
    """

    def __init__(self, config: ApiClientConfig) -> None:
        """
        Initialize the client.

        Args:
            config: Client configuration

        Raises:
            InvalidApiVersionError: If ``config.api_version`` is malformed
        """
        if not is_valid_api_version(config.api_version):
            raise InvalidApiVersionError(version=config.api_version)

        self.config = config
        self.token = config.token
        self.default_api_version = config.api_version
        self.default_endpoint = config.endpoint
        self.request_config = config.request_config

        self._session: Optional[aiohttp.ClientSession] = self.request_config.session
        self._owns_session = self._session is None

    @classmethod
    def from_env(cls, config_file: Optional[str] = None, **overrides: Any) -> "ApiClient":
        """Create a client from ``MONDAY_API_*`` environment variables and config files."""
        return cls(ConfigLoader().load_config(config_file, **overrides))

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=None, connect=10.0),
                raise_for_status=False,
            )
            self._owns_session = True
        return self._session

    def build_headers(self, api_version: str) -> Dict[str, str]:
        """Default headers for ``api_version``, overridden by configured headers."""
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Authorization": self.token,
            "API-Version": api_version,
            "Api-Sdk-Version": SDK_VERSION,
        }
        headers.update(self.request_config.headers)
        return headers

    def create_client(self, options: Optional[RequestOptions] = None) -> GraphQLClient:
        """
        Create a GraphQL client for one request.

        Args:
            options: Validated request options

        Returns:
            GraphQLClient bound to the resolved endpoint and version
        """
        version_override = options.version_override if options else None
        api_version = version_override or self.default_api_version

        return GraphQLClient(
            get_api_endpoint(self.default_endpoint),
            headers=self.build_headers(api_version),
            request_middleware=create_file_upload_middleware(
                self.request_config.request_middleware,
                convention=self.request_config.upload_convention,
            ),
            session=self._get_session(),
        )

    @staticmethod
    def validate_options(options: OptionsInput) -> Optional[RequestOptions]:
        """
        Validate per-request options.

        Raises:
            ApiValidationError: If the options are malformed
        """
        if options is None or isinstance(options, RequestOptions):
            return options

        if not isinstance(options, Mapping):
            raise ApiValidationError(
                f"Request options must be a mapping, got {type(options).__name__}"
            )

        try:
            return RequestOptions.model_validate(dict(options))
        except ValidationError as e:
            error = e.errors()[0]
            cause = error.get("ctx", {}).get("error")
            if cause is not None:
                message = str(cause)
            else:
                location = ".".join(str(part) for part in error["loc"])
                message = f"Invalid request option '{location}': {error['msg']}"
            raise ApiValidationError(message, errors=e.errors()) from e

    async def _execute_request(
        self,
        options: OptionsInput,
        executor: Callable[[GraphQLClient, Optional[AbortSignal]], Awaitable[T]],
    ) -> T:
        validated = self.validate_options(options)
        client = self.create_client(validated)
        controller, timer = create_abort_controller(validated.timeout if validated else None)

        try:
            return await executor(client, controller.signal if controller else None)
        finally:
            clear_abort_timer(timer)

    async def request(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        options: OptionsInput = None,
    ) -> Any:
        """
        Perform a GraphQL query or mutation and return its ``data``.

        Args:
            query: The GraphQL query or mutation string
            variables: Optional variables; may contain file uploads at any depth
            options: Optional version override and timeout (milliseconds)

        Returns:
            The ``data`` member of the response

        Raises:
            ApiValidationError: If ``options`` are malformed
            AbortError: If the request times out
            ClientError: If the API returns GraphQL errors
        """
        return await self._execute_request(
            options,
            lambda client, signal: client.request(query, variables, signal=signal),
        )

    async def raw_request(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        options: OptionsInput = None,
    ) -> GraphQLResponse:
        """
        Perform a GraphQL query or mutation and return the raw response.

        The result holds data, errors and extensions plus the HTTP status and
        headers. Arguments and errors are those of :meth:`request`.
        """
        return await self._execute_request(
            options,
            lambda client, signal: client.raw_request(query, variables, signal=signal),
        )
