"""
GraphQL models and data structures.

This module defines the request, response and upload types passed between the
client, its middleware chain and the aiohttp transport.
"""

from __future__ import annotations

import io
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, BinaryIO, Callable, Dict, List, Optional, Union

import aiofiles

DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"
DEFAULT_UPLOAD_FILENAME = "blob"


@dataclass(frozen=True)
class FileUpload:
    """
    Binary payload placed inside GraphQL variables.

    The client never reads or mutates ``content``; it only moves the upload
    out of the variables tree and into its own multipart part.
    """

    content: Union[bytes, bytearray, BinaryIO]
    filename: Optional[str] = None
    content_type: str = DEFAULT_UPLOAD_CONTENT_TYPE

    @classmethod
    async def from_path(
        cls,
        path: Union[str, Path],
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> "FileUpload":
        """
        Read a file from disk into an upload.

        Args:
            path: File path
            content_type: Content type (guessed from the extension when omitted)
            filename: Custom filename (defaults to the file's name)

        Returns:
            FileUpload holding the file's bytes
        """
        file_path = Path(path)
        async with aiofiles.open(file_path, "rb") as f:
            content = await f.read()

        return cls(
            content=content,
            filename=filename or file_path.name,
            content_type=(
                content_type
                or mimetypes.guess_type(str(file_path))[0]
                or DEFAULT_UPLOAD_CONTENT_TYPE
            ),
        )


def is_file(value: Any) -> bool:
    """Check if a value is a binary payload leaf."""
    return isinstance(value, (FileUpload, bytes, bytearray, io.BufferedIOBase, io.RawIOBase))


def file_content_type(value: Any) -> str:
    """Content type to send for a binary leaf."""
    if isinstance(value, FileUpload):
        return value.content_type
    return DEFAULT_UPLOAD_CONTENT_TYPE


def file_name(value: Any) -> str:
    """Filename to send for a binary leaf."""
    if isinstance(value, FileUpload):
        return value.filename or DEFAULT_UPLOAD_FILENAME
    name = getattr(value, "name", None)
    if isinstance(name, str) and name:
        return Path(name).name
    return DEFAULT_UPLOAD_FILENAME


def file_content(value: Any) -> Union[bytes, bytearray, BinaryIO]:
    """Raw content of a binary leaf."""
    if isinstance(value, FileUpload):
        return value.content
    return value


@dataclass
class GraphQLRequest:
    """
    Fully prepared outgoing request.

    ``variables`` is the tree the caller supplied, before serialization;
    ``body`` is what will be sent: the JSON string built by the transport, or
    a multipart body once the upload middleware has rewritten the request.
    """

    url: str
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "POST"
    variables: Optional[Dict[str, Any]] = None
    operation_name: Optional[str] = None


RequestMiddleware = Callable[
    [GraphQLRequest], Union[GraphQLRequest, Awaitable[GraphQLRequest]]
]


@dataclass
class GraphQLResponse:
    """Raw GraphQL response: data, errors and extensions plus HTTP metadata."""

    data: Optional[Dict[str, Any]] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)
    extensions: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)
    status: int = 200

    @property
    def has_errors(self) -> bool:
        """Check if the response carries GraphQL errors."""
        return len(self.errors) > 0

    @property
    def error_messages(self) -> List[str]:
        """Get list of error messages."""
        return [error.get("message", "Unknown error") for error in self.errors]
