"""
GraphQL multipart file uploads.

Requests whose variables carry binary payloads are rewritten to a multipart
body: every upload is replaced by ``None`` in the variables, its dotted path
is recorded in a ``map`` field and its content is sent as a numbered part.

Example:
    variables ``{"files": [a, b]}`` become ``{"files": [None, None]}`` with map
    ``{"0": ["variables.files.0"], "1": ["variables.files.1"]}`` and parts
    ``"0"`` (a) and ``"1"`` (b).
"""

from __future__ import annotations

import dataclasses
import inspect
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

import aiohttp

from .models import (
    GraphQLRequest,
    RequestMiddleware,
    file_content,
    file_content_type,
    file_name,
    is_file,
)

logger = logging.getLogger(__name__)

ROOT_PATH = "variables"


class NodeKind(Enum):
    """Closed set of node kinds found in a variables tree."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    FILE = "file"


class UploadConvention(str, Enum):
    """
    Multipart field layout.

    QUERY_FIELDS sends ``query`` and ``variables`` as separate fields, the
    layout the monday.com API accepts. OPERATIONS wraps both into a single
    ``operations`` JSON field as in the GraphQL multipart request convention.
    """

    QUERY_FIELDS = "query_fields"
    OPERATIONS = "operations"


def node_kind(value: Any) -> NodeKind:
    if is_file(value):
        return NodeKind.FILE
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    return NodeKind.SCALAR


@dataclass(frozen=True)
class FileEntry:
    """An extracted upload and the dotted variables path it was found at."""

    path: str
    file: Any


class ExtractedFiles(NamedTuple):
    cleaned_variables: Any
    files: List[FileEntry]


def has_files(variables: Optional[Any]) -> bool:
    """Check if variables contain any binary payload, at any depth."""
    if not variables:
        return False

    def check(value: Any) -> bool:
        match node_kind(value):
            case NodeKind.FILE:
                return True
            case NodeKind.SEQUENCE:
                return any(check(item) for item in value)
            case NodeKind.MAPPING:
                return any(check(item) for item in value.values())
            case _:
                return False

    return check(variables)


def extract_files(variables: Any, path: str = ROOT_PATH) -> ExtractedFiles:
    """
    Replace every upload in ``variables`` with ``None``.

    The input is not mutated. Entries are collected depth first, sequences in
    index order and mappings in insertion order; that order assigns the part
    numbers of the multipart map.

    Args:
        variables: The original variables tree
        path: Root token of the dotted paths

    Returns:
        ExtractedFiles with the cleaned tree and the ordered file entries
    """
    files: List[FileEntry] = []

    def process(value: Any, current_path: str) -> Any:
        match node_kind(value):
            case NodeKind.FILE:
                files.append(FileEntry(path=current_path, file=value))
                return None
            case NodeKind.SEQUENCE:
                return [
                    process(item, f"{current_path}.{index}")
                    for index, item in enumerate(value)
                ]
            case NodeKind.MAPPING:
                return {
                    key: process(item, f"{current_path}.{key}")
                    for key, item in value.items()
                }
            case _:
                return value

    cleaned = process(variables, path)
    return ExtractedFiles(cleaned_variables=cleaned, files=files)


def build_file_map(files: List[FileEntry]) -> Dict[str, List[str]]:
    return {str(index): [entry.path] for index, entry in enumerate(files)}


@dataclass
class MultipartBody:
    """
    Multipart request body, converted to ``aiohttp.FormData`` when sent.

    ``fields`` holds the text fields in wire order; ``files`` holds
    ``(part name, upload)`` pairs appended after them.
    """

    fields: List[Tuple[str, str]] = field(default_factory=list)
    files: List[Tuple[str, Any]] = field(default_factory=list)

    def get_field(self, name: str) -> Optional[str]:
        for key, value in self.fields:
            if key == name:
                return value
        return None

    @property
    def file_map(self) -> Dict[str, List[str]]:
        raw = self.get_field("map")
        return json.loads(raw) if raw is not None else {}

    def to_form_data(self) -> aiohttp.FormData:
        form = aiohttp.FormData()
        for name, value in self.fields:
            form.add_field(name, value)
        for name, upload in self.files:
            form.add_field(
                name,
                file_content(upload),
                filename=file_name(upload),
                content_type=file_content_type(upload),
            )
        return form


def build_multipart_body(
    query: str,
    variables: Any,
    files: List[FileEntry],
    convention: UploadConvention = UploadConvention.QUERY_FIELDS,
) -> MultipartBody:
    """
    Create the multipart body for a GraphQL file upload.

    Args:
        query: GraphQL document, sent unmodified
        variables: Cleaned variables (uploads already replaced by ``None``)
        files: Entries returned by :func:`extract_files`
        convention: Field layout of the query and variables

    Returns:
        MultipartBody with the operation fields, the map and one part per file
    """
    body = MultipartBody()

    if convention == UploadConvention.OPERATIONS:
        body.fields.append(
            ("operations", json.dumps({"query": query, "variables": variables}))
        )
    else:
        body.fields.append(("query", query))
        body.fields.append(("variables", json.dumps(variables)))

    body.fields.append(("map", json.dumps(build_file_map(files))))

    for index, entry in enumerate(files):
        body.files.append((str(index), entry.file))

    return body


def strip_content_type(headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Copy headers without any ``Content-Type``, whatever its casing."""
    return {
        key: value
        for key, value in (headers or {}).items()
        if key.lower() != "content-type"
    }


def _parse_query(body: Any) -> Optional[str]:
    if not isinstance(body, str):
        return None
    try:
        parsed = json.loads(body)
    except ValueError:
        return None
    if not isinstance(parsed, dict) or not isinstance(parsed.get("query"), str):
        return None
    return parsed["query"]


def create_file_upload_middleware(
    existing_middleware: Optional[RequestMiddleware] = None,
    convention: UploadConvention = UploadConvention.QUERY_FIELDS,
) -> RequestMiddleware:
    """
    Create a request middleware that converts upload requests to multipart.

    The existing middleware, when given, runs first and this middleware works
    on its output. Requests without uploads, or whose body is not a JSON
    string carrying ``query``, are returned as they are.

    Args:
        existing_middleware: Optional middleware to chain with
        convention: Multipart field layout

    Returns:
        An async middleware handling file uploads
    """

    async def middleware(request: GraphQLRequest) -> GraphQLRequest:
        processed = request
        if existing_middleware is not None:
            result = existing_middleware(request)
            processed = await result if inspect.isawaitable(result) else result

        if not processed.variables or not has_files(processed.variables):
            return processed

        query = _parse_query(processed.body)
        if query is None:
            logger.debug("Upload detected but body is not a GraphQL JSON payload, sending as-is")
            return processed

        cleaned_variables, files = extract_files(processed.variables)
        body = build_multipart_body(query, cleaned_variables, files, convention)

        logger.debug("Converted request to multipart upload with %d file(s)", len(files))

        return dataclasses.replace(
            processed,
            body=body,
            headers=strip_content_type(processed.headers),
        )

    return middleware
