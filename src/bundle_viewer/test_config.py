"""
Unit tests for :mod:`bundle_viewer.config`.
"""

import pytest

from bundle_viewer.config import DataSourceConfig
from bundle_viewer.errors import ConfigurationError


class TestFromEnv:
    def test_defaults(self) -> None:
        config = DataSourceConfig.from_env({})

        assert config.source_type == "local"
        assert config.api_base_url == ""
        assert config.api_timeout_ms == 30000
        assert config.resource_path == "resources"
        assert config.validate() == []

    def test_api_settings(self) -> None:
        config = DataSourceConfig.from_env(
            {
                "DATA_SOURCE_TYPE": "API",
                "DATA_SOURCE_API_URL": " https://nhcx.example.org ",
                "DATA_SOURCE_API_TIMEOUT": "5000",
            }
        )

        assert config.source_type == "api"
        assert config.api_base_url == "https://nhcx.example.org"
        assert config.api_timeout_seconds == 5.0
        assert config.validate() == []

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOCAL_RESOURCE_PATH", "/srv/bundles")
        monkeypatch.delenv("DATA_SOURCE_TYPE", raising=False)

        assert DataSourceConfig.from_env().resource_path == "/srv/bundles"

    def test_invalid_source_type(self) -> None:
        with pytest.raises(ConfigurationError, match="DATA_SOURCE_TYPE"):
            DataSourceConfig.from_env({"DATA_SOURCE_TYPE": "database"})

    @pytest.mark.parametrize("timeout", ["soon", "0", "-5"])
    def test_invalid_timeout(self, timeout: str) -> None:
        with pytest.raises(ConfigurationError, match="DATA_SOURCE_API_TIMEOUT"):
            DataSourceConfig.from_env({"DATA_SOURCE_API_TIMEOUT": timeout})


class TestValidate:
    def test_api_mode_requires_base_url(self) -> None:
        problems = DataSourceConfig(source_type="api").validate()
        assert problems == ["DATA_SOURCE_API_URL is required when DATA_SOURCE_TYPE=api"]

    def test_local_mode_requires_path(self) -> None:
        assert DataSourceConfig(resource_path="").validate() != []
