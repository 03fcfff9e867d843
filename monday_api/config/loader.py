"""
Configuration loader for monday_api.

This module builds an :class:`ApiClientConfig` from keyword overrides, an
optional JSON configuration file and ``MONDAY_API_*`` environment variables.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..exceptions import ApiValidationError
from .models import ApiClientConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Configuration loader with support for multiple sources."""

    def __init__(self, env_prefix: str = "MONDAY_API_") -> None:
        """
        Initialize configuration loader.

        Args:
            env_prefix: Prefix of the environment variables to read
        """
        self.config_paths = [
            Path("monday_api.json"),
            Path("config/monday_api.json"),
            Path.home() / ".monday_api" / "config.json",
        ]
        self.env_prefix = env_prefix

        # Environment variable suffix -> ApiClientConfig field
        self.env_mapping = {
            "TOKEN": "token",
            "VERSION": "api_version",
            "ENDPOINT": "endpoint",
        }

    def load_config(
        self,
        config_file: Optional[Union[str, Path]] = None,
        **overrides: Any,
    ) -> ApiClientConfig:
        """
        Load configuration from all available sources.

        Precedence, lowest first: config file, environment, keyword overrides.

        Args:
            config_file: Specific config file to load
            **overrides: Explicit ApiClientConfig fields

        Returns:
            ApiClientConfig with merged configuration

        Raises:
            ApiValidationError: If no token is available or the file is unreadable
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data.update(file_config)

        config_data.update(self._load_from_environment())
        config_data.update({k: v for k, v in overrides.items() if v is not None})

        if not config_data.get("token"):
            raise ApiValidationError(
                f"No API token configured; set {self.env_prefix}TOKEN or pass token="
            )

        return ApiClientConfig(**config_data)

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        if config_file:
            path = Path(config_file)
            if not path.exists():
                raise ApiValidationError(f"Configuration file not found: {path}")
            return self._read_json(path)

        for path in self.config_paths:
            if path.exists():
                logger.debug("Loading configuration from %s", path)
                return self._read_json(path)

        return None

    def _read_json(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ApiValidationError(f"Failed to load config file {path}: {e}")

        if not isinstance(data, dict):
            raise ApiValidationError(f"Config file {path} must contain a JSON object")
        return data

    def _load_from_environment(self) -> Dict[str, Any]:
        env_config: Dict[str, Any] = {}

        for suffix, field_name in self.env_mapping.items():
            value = os.environ.get(f"{self.env_prefix}{suffix}")
            if value:
                env_config[field_name] = value

        return env_config


def load_config(
    config_file: Optional[Union[str, Path]] = None, **overrides: Any
) -> ApiClientConfig:
    """Load an ApiClientConfig with the default loader."""
    return ConfigLoader().load_config(config_file, **overrides)
