"""
GraphQL support for monday_api.

This module provides the GraphQL transport, its request/response models and
the multipart file upload middleware.
"""

from .client import GraphQLClient
from .models import FileUpload, GraphQLRequest, GraphQLResponse, RequestMiddleware
from .upload import (
    ExtractedFiles,
    FileEntry,
    MultipartBody,
    NodeKind,
    UploadConvention,
    build_multipart_body,
    create_file_upload_middleware,
    extract_files,
    has_files,
    strip_content_type,
)

__all__ = [
    # Client
    "GraphQLClient",
    # Models
    "FileUpload",
    "GraphQLRequest",
    "GraphQLResponse",
    "RequestMiddleware",
    # Uploads
    "ExtractedFiles",
    "FileEntry",
    "MultipartBody",
    "NodeKind",
    "UploadConvention",
    "build_multipart_body",
    "create_file_upload_middleware",
    "extract_files",
    "has_files",
    "strip_content_type",
]
