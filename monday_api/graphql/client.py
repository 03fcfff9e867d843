"""
GraphQL transport.

This module provides the aiohttp based client that serializes a GraphQL
operation, runs it through the request middleware chain and posts it to the
endpoint, optionally racing the call against an abort signal.
"""

from __future__ import annotations

import inspect
import json
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import aiohttp

from ..exceptions import ClientError, ContentError, ErrorHandler
from .models import GraphQLRequest, GraphQLResponse, RequestMiddleware, is_file
from .upload import MultipartBody

if TYPE_CHECKING:
    from ..cancellation import AbortSignal

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    # Uploads travel as separate multipart parts; the JSON body holds null.
    if is_file(value):
        return None
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class GraphQLClient:
    """
    Minimal GraphQL client bound to one endpoint.

    Examples:
        ```python
        async with GraphQLClient("https://api.monday.com/v2", headers=headers) as client:
            data = await client.request("query { me { id } }")
        ```
    """

    def __init__(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        request_middleware: Optional[RequestMiddleware] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """
        Initialize GraphQL client.

        Args:
            endpoint: GraphQL endpoint URL
            headers: Headers sent with every request
            request_middleware: Hook applied to each prepared request
            session: Shared aiohttp session (a private one is created when omitted)
        """
        self.endpoint = endpoint
        self.headers = dict(headers or {})
        self.request_middleware = request_middleware
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "GraphQLClient":
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
                raise_for_status=False,  # Handle status codes manually
            )
            self._owns_session = True
        return self._session

    def prepare_request(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> GraphQLRequest:
        """Build the JSON request for an operation, before middleware runs."""
        payload: Dict[str, Any] = {"query": query, "variables": variables}
        if operation_name:
            payload["operationName"] = operation_name

        return GraphQLRequest(
            url=self.endpoint,
            body=json.dumps(payload, default=_json_default),
            headers=dict(self.headers),
            variables=variables,
            operation_name=operation_name,
        )

    async def request(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        signal: Optional["AbortSignal"] = None,
    ) -> Any:
        """
        Execute an operation and return its ``data``.

        Raises:
            ClientError: If the response carries errors or a non-2xx status
            AbortError: If ``signal`` fires before the response arrives
            NetworkError: On connection failures
        """
        response = await self.raw_request(document, variables, operation_name, signal)
        return response.data

    async def raw_request(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        signal: Optional["AbortSignal"] = None,
    ) -> GraphQLResponse:
        """Execute an operation and return data, errors, extensions and HTTP metadata."""
        request = self.prepare_request(query, variables, operation_name)

        if self.request_middleware is not None:
            result = self.request_middleware(request)
            request = await result if inspect.isawaitable(result) else result

        if signal is not None:
            response = await signal.run(self._send(request))
        else:
            response = await self._send(request)

        if response.has_errors or not 200 <= response.status < 300:
            messages = "; ".join(response.error_messages) or f"HTTP {response.status}"
            raise ClientError(
                f"GraphQL request failed: {messages}",
                response=response,
                query=query,
                variables=variables,
                url=request.url,
            )

        return response

    async def _send(self, request: GraphQLRequest) -> GraphQLResponse:
        session = self._get_session()

        data: Any = request.body
        if isinstance(data, MultipartBody):
            data = data.to_form_data()

        logger.debug(
            "%s %s (%s)",
            request.method,
            request.url,
            "multipart" if isinstance(request.body, MultipartBody) else "json",
        )

        try:
            async with session.request(
                request.method, request.url, data=data, headers=request.headers
            ) as response:
                status = response.status
                headers = dict(response.headers)
                response_text = await response.text()
        except aiohttp.ClientError as e:
            raise ErrorHandler.handle_aiohttp_error(e, url=request.url) from e

        try:
            response_data = json.loads(response_text)
        except json.JSONDecodeError:
            raise ContentError(
                f"Invalid JSON response: {response_text[:200]}",
                url=request.url,
                status_code=status,
                response_text=response_text,
            )

        if not isinstance(response_data, dict):
            raise ContentError(
                "Expected a JSON object response",
                url=request.url,
                status_code=status,
                response_text=response_text,
            )

        return GraphQLResponse(
            data=response_data.get("data"),
            errors=response_data.get("errors") or [],
            extensions=response_data.get("extensions"),
            headers=headers,
            status=status,
        )
