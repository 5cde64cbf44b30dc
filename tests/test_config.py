"""
Tests for Protector configuration.
"""

import json

import pytest
import yaml

from protector.core.config import Config, get_config, set_config, configure
from protector.types.errors import ConfigurationError


class TestConfig:
    """Test configuration sources"""

    def test_defaults(self):
        config = get_config()
        assert config.paranoid is False
        assert config.metrics_enabled is False
        assert config.to_dict() == {'paranoid': False, 'metrics_enabled': False}

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PROTECTOR_PARANOID", "yes")
        monkeypatch.setenv("PROTECTOR_METRICS_ENABLED", "0")

        config = Config.from_env()
        assert config.paranoid is True
        assert config.metrics_enabled is False

    def test_from_env_with_prefix(self, monkeypatch):
        monkeypatch.setenv("APP_PARANOID", "true")
        assert Config.from_env(prefix="APP_").paranoid is True

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "protector.yml"
        path.write_text(yaml.safe_dump({'paranoid': True, 'metrics_enabled': True}))

        config = Config.from_file(path)
        assert config == Config(paranoid=True, metrics_enabled=True)

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "protector.json"
        path.write_text(json.dumps({'paranoid': 'on'}))

        assert Config.from_file(str(path)).paranoid is True

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "protector.yaml"
        path.write_text("")
        assert Config.from_file(path) == Config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_file(tmp_path / "missing.yml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "protector.ini"
        path.write_text("[protector]")
        with pytest.raises(ConfigurationError):
            Config.from_file(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "protector.yml"
        path.write_text("strong_parameters: true\n")
        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(path)
        assert exc_info.value.config_key == 'strong_parameters'

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            Config.from_dict({'paranoid': [True]})


class TestGlobalConfig:
    """Test the process-wide configuration"""

    def test_configure(self):
        config = configure(paranoid=True)
        assert config.paranoid is True
        assert get_config() is config
        assert get_config().metrics_enabled is False

    def test_configure_unknown_key(self):
        with pytest.raises(ConfigurationError):
            configure(verbose=True)

    def test_set_config_none_restores_defaults(self):
        set_config(Config(paranoid=True))
        assert get_config().paranoid is True
        set_config(None)
        assert get_config() == Config()
