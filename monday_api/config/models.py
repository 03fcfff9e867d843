"""
Configuration models for monday_api.

This module defines the client, per-request and logging configuration models
with validation and defaults.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import aiohttp
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import DEFAULT_VERSION, MAX_REQUEST_TIMEOUT_MS
from ..exceptions import INVALID_API_VERSION_MESSAGE
from ..graphql.models import RequestMiddleware
from ..graphql.upload import UploadConvention
from ..helpers import is_valid_api_version


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )
    mask_credentials: bool = Field(default=True, description="Mask credentials in logs")

    # Component-specific log levels
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )


class RequestConfig(BaseModel):
    """Transport settings shared by every request of a client."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    headers: Dict[str, str] = Field(
        default_factory=dict, description="Headers merged over the client defaults"
    )
    request_middleware: Optional[RequestMiddleware] = Field(
        default=None, description="Middleware run before the upload middleware"
    )
    session: Optional[aiohttp.ClientSession] = Field(
        default=None, description="Caller-owned aiohttp session"
    )
    upload_convention: UploadConvention = Field(
        default=UploadConvention.QUERY_FIELDS,
        description="Multipart field layout for file uploads",
    )


class ApiClientConfig(BaseModel):
    """Configuration for ApiClient."""

    token: str = Field(description="API token sent as the Authorization header")
    api_version: str = Field(default=DEFAULT_VERSION, description="API version (yyyy-mm or dev)")
    endpoint: Optional[str] = Field(default=None, description="Endpoint override")
    request_config: RequestConfig = Field(default_factory=RequestConfig)


class RequestOptions(BaseModel):
    """Per-request options."""

    # Unknown keys are dropped
    model_config = ConfigDict(populate_by_name=True)

    version_override: Optional[str] = Field(
        default=None,
        min_length=1,
        alias="versionOverride",
        description="API version for this request only",
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        le=MAX_REQUEST_TIMEOUT_MS,
        description="Request timeout in milliseconds",
    )

    @field_validator("version_override")
    @classmethod
    def validate_version_override(cls, v: Optional[str]) -> Optional[str]:
        if v and not is_valid_api_version(v):
            raise ValueError(INVALID_API_VERSION_MESSAGE)
        return v

    @field_validator("timeout", mode="before")
    @classmethod
    def validate_timeout_type(cls, v: Any) -> Any:
        # No coercion from bool or numeric strings
        if v is not None and (isinstance(v, bool) or not isinstance(v, (int, float))):
            raise ValueError("Request timeout must be a number of milliseconds")
        return v
