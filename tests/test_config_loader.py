"""Tests for the config loader module."""

import dataclasses

import pytest
import yaml

from anthroq.config_loader import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    ProxySettings,
    _substitute_env_vars,
    load_config,
    load_settings,
    settings_from_config,
)
from anthroq.core.exceptions import ConfigurationError


def _write_config(tmp_path, data, name="config.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for loading configuration from YAML files."""

    def test_loads_simple_config(self, tmp_path):
        path = _write_config(tmp_path, {"proxy_settings": {"log_level": "DEBUG"}})

        assert load_config(str(path)) == {"proxy_settings": {"log_level": "DEBUG"}}

    def test_raises_error_for_missing_explicit_config(self):
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config("/nonexistent/path/config.yaml")

    def test_missing_default_config_yields_empty(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ANTHROQ_CONFIG", raising=False)
        monkeypatch.setattr("anthroq.config_loader.DEFAULT_CONFIG_PATH", str(tmp_path / "absent.yaml"))

        assert load_config() == {}

    def test_env_var_selects_config(self, tmp_path, monkeypatch):
        path = _write_config(tmp_path, {"proxy_settings": {"expose_diagnostics": False}})
        monkeypatch.setenv("ANTHROQ_CONFIG", str(path))

        assert load_config()["proxy_settings"]["expose_diagnostics"] is False

    def test_empty_file_is_empty_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(str(path)) == {}

    def test_non_mapping_root_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(str(path))

    def test_substitutes_environment_variables(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_DOWNSTREAM_URL", "http://groq.test/v1/chat/completions")
        path = _write_config(
            tmp_path, {"proxy_settings": {"downstream": {"url": "${TEST_DOWNSTREAM_URL}"}}}
        )

        result = load_config(str(path))

        assert result["proxy_settings"]["downstream"]["url"] == "http://groq.test/v1/chat/completions"

    def test_env_file_values_win(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_MODEL", "from-process")
        (tmp_path / ".env").write_text("TEST_MODEL=from-dotenv\n", encoding="utf-8")
        path = _write_config(tmp_path, {"proxy_settings": {"downstream": {"model": "$TEST_MODEL"}}})

        assert load_config(str(path))["proxy_settings"]["downstream"]["model"] == "from-dotenv"


class TestSubstituteEnvVars:

    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("A_VAR", "a")
        data = {"x": ["$A_VAR", {"y": "pre-${A_VAR}-post"}], "n": 3}

        assert _substitute_env_vars(data) == {"x": ["a", {"y": "pre-a-post"}], "n": 3}

    def test_unset_variable_keeps_placeholder(self, monkeypatch):
        monkeypatch.delenv("SURELY_UNSET_VAR", raising=False)

        assert _substitute_env_vars("${SURELY_UNSET_VAR}") == "${SURELY_UNSET_VAR}"


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ANTHROQ_HOST", raising=False)
        monkeypatch.delenv("ANTHROQ_PORT", raising=False)

        settings = settings_from_config({})

        assert settings == ProxySettings()
        assert settings.max_output_tokens == DEFAULT_MAX_OUTPUT_TOKENS == 16384
        assert settings.default_temperature == 0.7
        assert settings.response_model == "groq/moonshotai/kimi-k2-instruct"

    def test_reads_all_sections(self, monkeypatch):
        monkeypatch.delenv("ANTHROQ_HOST", raising=False)
        monkeypatch.delenv("ANTHROQ_PORT", raising=False)
        config = {
            "proxy_settings": {
                "server": {"host": "0.0.0.0", "port": "9001"},
                "downstream": {
                    "provider": "local",
                    "url": "http://localhost:1234/v1/chat/completions",
                    "model": "llama",
                    "max_output_tokens": 4096,
                    "default_temperature": 0.1,
                    "request_timeout": None,
                },
                "expose_diagnostics": "false",
                "log_level": "debug",
            }
        }

        settings = settings_from_config(config)

        assert settings.host == "0.0.0.0"
        assert settings.port == 9001
        assert settings.provider == "local"
        assert settings.downstream_model == "llama"
        assert settings.max_output_tokens == 4096
        assert settings.default_temperature == 0.1
        assert settings.request_timeout is None
        assert settings.expose_diagnostics is False
        assert settings.log_level == "DEBUG"
        assert settings.response_model == "local/llama"

    def test_env_overrides_server(self, monkeypatch):
        monkeypatch.setenv("ANTHROQ_HOST", "10.0.0.1")
        monkeypatch.setenv("ANTHROQ_PORT", "7000")

        settings = settings_from_config({"proxy_settings": {"server": {"host": "x", "port": 1}}})

        assert (settings.host, settings.port) == ("10.0.0.1", 7000)

    def test_invalid_number_raises(self):
        with pytest.raises(ConfigurationError, match="max_output_tokens"):
            settings_from_config({"proxy_settings": {"downstream": {"max_output_tokens": "lots"}}})

    def test_load_settings_from_file(self, tmp_path):
        path = _write_config(tmp_path, {"proxy_settings": {"downstream": {"model": "m"}}})

        assert load_settings(str(path)).downstream_model == "m"

    def test_settings_are_frozen(self):
        settings = ProxySettings()
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.port = 1  # type: ignore[misc]
