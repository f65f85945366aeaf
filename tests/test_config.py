"""
Tests for the configuration manager.
"""

import os

import pytest
import yaml

from schedule_hours.config.manager import ConfigManager
from schedule_hours.data.schemas import Config, EmploymentType


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove configuration overrides from the environment."""
    for name in list(os.environ):
        if name.startswith("SCHEDULE_HOURS_"):
            monkeypatch.delenv(name)


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "holidays": {"country_code": "DE", "source": "local", "timeout": 5},
                "cache": {"directory": str(tmp_path / "cache")},
                "calculation": {"employment_type": "half", "language": "en"},
                "api": {"port": 9000},
            }
        ),
        encoding="utf-8",
    )
    return str(path)


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigManager(str(tmp_path / "missing.yaml")).load_config()

        assert config == Config()
        assert config.country_code == "PL"
        assert config.holiday_source == "nager"
        assert config.cache_directory is None

    def test_bundled_settings_load(self):
        """The settings file shipped with the package is valid."""
        config = ConfigManager().load_config()

        assert config.country_code == "PL"
        assert config.nager_base_url == "https://date.nager.at/api/v3"
        assert config.default_employment_type == EmploymentType.FULL

    def test_nested_sections_are_flattened(self, config_file, tmp_path):
        config = ConfigManager(config_file).load_config()

        assert config.country_code == "DE"
        assert config.holiday_source == "local"
        assert config.request_timeout == 5
        assert config.cache_directory == str(tmp_path / "cache")
        assert config.default_employment_type == EmploymentType.HALF
        assert config.language == "en"
        assert config.api_port == 9000

    def test_env_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("SCHEDULE_HOURS_COUNTRY_CODE", "AT")
        monkeypatch.setenv("SCHEDULE_HOURS_API_PORT", "8080")
        monkeypatch.setenv("SCHEDULE_HOURS_REQUEST_TIMEOUT", "2.5")

        config = ConfigManager(config_file).load_config()

        assert config.country_code == "AT"
        assert config.api_port == 8080
        assert config.request_timeout == 2.5

    def test_invalid_env_number_is_ignored(self, config_file, monkeypatch):
        monkeypatch.setenv("SCHEDULE_HOURS_API_PORT", "not-a-port")
        assert ConfigManager(config_file).load_config().api_port == 9000

    def test_invalid_value_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("api:\n  port: 70000\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            ConfigManager(str(path)).load_config()

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("holidays: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            ConfigManager(str(path)).load_config()

    def test_save_and_reload(self, tmp_path):
        """A saved configuration loads back unchanged."""
        path = str(tmp_path / "out" / "settings.yaml")
        config = Config(country_code="CZ", default_employment_type=EmploymentType.CUSTOM, api_port=8123)

        manager = ConfigManager(path)
        manager.save_config(config)

        assert manager.load_config() == config
