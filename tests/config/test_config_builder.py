"""Tests for configuration system.

Tests the ConfigBuilder class and configuration loading mechanism,
including YAML loading, environment variable resolution, nested access
and the validated registry settings.
"""

import pytest

import apphost.utils.config as config_module
from apphost.base.errors import ConfigurationError
from apphost.utils.config import (
    ConfigBuilder,
    RegistrySettings,
    get_config_value,
    get_registry_settings,
)


@pytest.fixture(autouse=True)
def reset_config_singleton():
    config_module.reset_config()
    yield
    config_module.reset_config()


class TestConfigBuilder:
    """Test ConfigBuilder class."""

    def test_config_builder_loads_yaml(self, tmp_path):
        """Test that ConfigBuilder loads valid YAML configuration."""
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            """
registry:
  wait_timeout_ms: 500
logging:
  logging_colors:
    app_registry: cyan
"""
        )

        builder = ConfigBuilder(str(config_file))

        assert builder.raw_config["registry"]["wait_timeout_ms"] == 500
        assert builder.get("logging.logging_colors.app_registry") == "cyan"

    def test_environment_variable_resolution(self, tmp_path, monkeypatch):
        """Test that environment variables are resolved in config."""
        monkeypatch.setenv("TEST_HOST_NAME", "inspector-1")
        monkeypatch.delenv("TEST_MISSING_VAR", raising=False)

        config_file = tmp_path / "config.yml"
        config_file.write_text(
            """
host:
  name: ${TEST_HOST_NAME}
  region: ${TEST_MISSING_VAR:-local}
  literal: plain
"""
        )

        builder = ConfigBuilder(str(config_file))

        assert builder.get("host.name") == "inspector-1"
        assert builder.get("host.region") == "local"
        assert builder.get("host.literal") == "plain"

    def test_missing_path_returns_default(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("registry: {}\n")

        builder = ConfigBuilder(str(config_file))

        assert builder.get("registry.debug_info", False) is False
        assert builder.get("nothing.here") is None

    def test_no_config_file_uses_empty_config(self, tmp_path, monkeypatch):
        """A host without config.yml still gets a working, empty configuration."""
        monkeypatch.chdir(tmp_path)

        builder = ConfigBuilder()

        assert builder.config_path is None
        assert builder.raw_config == {}

    def test_non_mapping_file_is_rejected(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="dictionary/mapping"):
            ConfigBuilder(str(config_file))


class TestGlobalConfigAccess:
    """Test module-level access through CONFIG_FILE."""

    def test_get_config_value_reads_config_file_env(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yml"
        config_file.write_text("registry:\n  debug_info: true\n")
        monkeypatch.setenv("CONFIG_FILE", str(config_file))

        assert get_config_value("registry.debug_info", False) is True

    def test_empty_path_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            get_config_value("")


class TestRegistrySettings:
    """Test the validated registry section."""

    def test_defaults(self):
        settings = RegistrySettings()

        assert settings.wait_timeout_ms == 2000
        assert settings.wait_timeout == 2.0
        assert settings.max_queue_depth is None
        assert settings.debug_info is False

    def test_defaults_without_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CONFIG_FILE", raising=False)

        assert get_registry_settings() == RegistrySettings()

    def test_settings_from_config_file(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            """
registry:
  wait_timeout_ms: 250
  max_queue_depth: 16
  debug_info: true
"""
        )

        settings = get_registry_settings(str(config_file))

        assert settings.wait_timeout_ms == 250
        assert settings.wait_timeout == 0.25
        assert settings.max_queue_depth == 16
        assert settings.debug_info is True

    @pytest.mark.parametrize(
        "section",
        [
            "registry:\n  wait_timeout_ms: 0\n",
            "registry:\n  max_queue_depth: -1\n",
            "registry: not-a-mapping\n",
        ],
    )
    def test_invalid_settings_raise_configuration_error(self, tmp_path, section):
        config_file = tmp_path / "config.yml"
        config_file.write_text(section)

        with pytest.raises(ConfigurationError):
            get_registry_settings(str(config_file))
