"""
Tests for LoggerConfig.

Covers:
- Defaults and validation
- Environment variable loading
- YAML parsing (file, string, nested ``logger:`` section)
"""

import pytest
from pydantic import ValidationError

from faultline.config import LoggerConfig, DEFAULT_ENVIRONMENT

DSN = "https://public@o0.ingest.sentry.io/1"


class TestLoggerConfigDefaults:
    def test_defaults(self):
        cfg = LoggerConfig()
        assert cfg.dsn == ""
        assert cfg.environment == DEFAULT_ENVIRONMENT == "development"
        assert cfg.flush_timeout_seconds == 2.0
        assert cfg.traces_sample_rate == 1.0
        assert not cfg.backend_enabled

    def test_backend_enabled_with_dsn(self):
        assert LoggerConfig(dsn=DSN).backend_enabled

    def test_none_dsn_is_empty(self):
        assert LoggerConfig(dsn=None).dsn == ""

    def test_blank_environment_falls_back(self):
        assert LoggerConfig(environment="").environment == "development"

    def test_non_positive_flush_timeout_rejected(self):
        with pytest.raises(ValidationError):
            LoggerConfig(flush_timeout_seconds=0)

    def test_sample_rate_bounds(self):
        with pytest.raises(ValidationError):
            LoggerConfig(traces_sample_rate=1.5)


class TestLoggerConfigFromEnv:
    def test_reads_dsn_and_environment(self):
        cfg = LoggerConfig.from_env({"SENTRY_DSN": DSN, "ENVIRONMENT": "production"})
        assert cfg.dsn == DSN
        assert cfg.environment == "production"

    def test_missing_values(self):
        cfg = LoggerConfig.from_env({})
        assert cfg.dsn == ""
        assert cfg.environment == "development"

    def test_empty_environment_variable(self):
        assert LoggerConfig.from_env({"ENVIRONMENT": ""}).environment == "development"

    def test_flush_timeout_parsed(self):
        cfg = LoggerConfig.from_env({"FAULTLINE_FLUSH_TIMEOUT": "3.5"})
        assert cfg.flush_timeout_seconds == 3.5

    def test_invalid_flush_timeout(self):
        with pytest.raises(ValidationError):
            LoggerConfig.from_env({"FAULTLINE_FLUSH_TIMEOUT": "soon"})

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", DSN)
        monkeypatch.setenv("ENVIRONMENT", "staging")
        cfg = LoggerConfig.from_env()
        assert cfg.dsn == DSN
        assert cfg.environment == "staging"


class TestLoggerConfigYaml:
    YAML = f"""
dsn: {DSN}
environment: staging
flush_timeout_seconds: 1.5
"""

    def test_from_yaml_string(self):
        cfg = LoggerConfig.from_yaml_string(self.YAML)
        assert cfg.dsn == DSN
        assert cfg.environment == "staging"
        assert cfg.flush_timeout_seconds == 1.5

    def test_nested_logger_section(self):
        cfg = LoggerConfig.from_yaml_string("logger:\n  environment: qa\n")
        assert cfg.environment == "qa"

    def test_empty_yaml_gives_defaults(self):
        assert LoggerConfig.from_yaml_string("") == LoggerConfig()

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "faultline.yaml"
        path.write_text(self.YAML, encoding="utf-8")
        assert LoggerConfig.from_yaml(path).environment == "staging"

    def test_invalid_yaml_value(self):
        with pytest.raises(ValidationError):
            LoggerConfig.from_yaml_string("traces_sample_rate: -1\n")

    def test_round_trip_dict(self):
        cfg = LoggerConfig.from_dict({"dsn": DSN, "environment": "prod"})
        assert LoggerConfig.from_dict(cfg.to_dict()) == cfg
