"""
Tests for configuration models and the configuration loader.
"""

import json

import pytest
from pydantic import ValidationError

from monday_api.config import (
    ApiClientConfig,
    ConfigLoader,
    LoggingConfig,
    LogLevel,
    RequestConfig,
    RequestOptions,
    load_config,
)
from monday_api.constants import DEFAULT_VERSION
from monday_api.exceptions import ApiValidationError
from monday_api.graphql import UploadConvention


@pytest.fixture
def loader():
    """Loader that never looks at the default config locations."""
    config_loader = ConfigLoader()
    config_loader.config_paths = []
    return config_loader


class TestConfigModels:
    """Test configuration model defaults and validation."""

    def test_api_client_config_defaults(self):
        config = ApiClientConfig(token="abc")

        assert config.api_version == DEFAULT_VERSION
        assert config.endpoint is None
        assert config.request_config.headers == {}
        assert config.request_config.session is None
        assert config.request_config.upload_convention == UploadConvention.QUERY_FIELDS

    def test_token_required(self):
        with pytest.raises(ValidationError):
            ApiClientConfig()

    def test_request_config_rejects_non_session(self):
        with pytest.raises(ValidationError):
            RequestConfig(session="not a session")

    def test_request_options_alias(self):
        options = RequestOptions(versionOverride="2024-10", timeout=500)

        assert options.version_override == "2024-10"
        assert options.timeout == 500

    def test_request_options_field_name(self):
        assert RequestOptions(version_override="dev").version_override == "dev"

    @pytest.mark.parametrize("timeout", [0, -1, 60_001])
    def test_request_options_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            RequestOptions(timeout=timeout)

    def test_request_options_timeout_upper_bound_inclusive(self):
        assert RequestOptions(timeout=60_000).timeout == 60_000

    def test_request_options_ignores_unknown(self):
        options = RequestOptions(retries=3)

        assert options.model_dump() == {"version_override": None, "timeout": None}

    @pytest.mark.parametrize("timeout", [True, "100"])
    def test_request_options_timeout_not_coerced(self, timeout):
        with pytest.raises(ValidationError):
            RequestOptions(timeout=timeout)

    def test_logging_config_defaults(self):
        config = LoggingConfig()

        assert config.level == LogLevel.INFO
        assert config.enable_console is True
        assert config.enable_structured is False
        assert config.mask_credentials is True
        assert config.file_path is None


class TestConfigLoader:
    """Test source merging in ConfigLoader."""

    def test_from_environment(self, loader, monkeypatch):
        monkeypatch.setenv("MONDAY_API_TOKEN", "env-token")
        monkeypatch.setenv("MONDAY_API_VERSION", "2024-07")
        monkeypatch.setenv("MONDAY_API_ENDPOINT", "https://custom.example.com/v2")

        config = loader.load_config()

        assert config.token == "env-token"
        assert config.api_version == "2024-07"
        assert config.endpoint == "https://custom.example.com/v2"

    def test_missing_token(self, loader):
        with pytest.raises(ApiValidationError, match="MONDAY_API_TOKEN"):
            loader.load_config()

    def test_overrides_beat_environment(self, loader, monkeypatch):
        monkeypatch.setenv("MONDAY_API_TOKEN", "env-token")

        config = loader.load_config(token="explicit", api_version=None)

        assert config.token == "explicit"
        assert config.api_version == DEFAULT_VERSION

    def test_from_file(self, loader, tmp_path):
        path = tmp_path / "monday_api.json"
        path.write_text(json.dumps({"token": "file-token", "api_version": "2024-01"}))

        config = loader.load_config(path)

        assert config.token == "file-token"
        assert config.api_version == "2024-01"

    def test_environment_beats_file(self, loader, tmp_path, monkeypatch):
        path = tmp_path / "monday_api.json"
        path.write_text(json.dumps({"token": "file-token", "api_version": "2024-01"}))
        monkeypatch.setenv("MONDAY_API_VERSION", "2024-04")

        config = loader.load_config(path)

        assert config.token == "file-token"
        assert config.api_version == "2024-04"

    def test_default_locations(self, tmp_path, monkeypatch):
        (tmp_path / "monday_api.json").write_text(json.dumps({"token": "found"}))
        monkeypatch.chdir(tmp_path)
        config_loader = ConfigLoader()
        config_loader.config_paths = config_loader.config_paths[:2]

        assert config_loader.load_config().token == "found"

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(ApiValidationError, match="not found"):
            loader.load_config(tmp_path / "missing.json")

    def test_invalid_json(self, loader, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ApiValidationError, match="Failed to load"):
            loader.load_config(path)

    def test_non_object_json(self, loader, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ApiValidationError, match="JSON object"):
            loader.load_config(path)

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("MY_APP_TOKEN", "prefixed")
        config_loader = ConfigLoader(env_prefix="MY_APP_")
        config_loader.config_paths = []

        assert config_loader.load_config().token == "prefixed"

    def test_module_level_load_config(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MONDAY_API_TOKEN", "env-token")

        assert load_config().token == "env-token"
