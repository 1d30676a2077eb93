"""
Pydantic configuration for the Faultline logger.

Two values matter at init time: the Sentry DSN (empty disables remote
reporting) and the environment label. The rest tunes the backend.

Usage:
    config = LoggerConfig.from_env()
    config = LoggerConfig.from_yaml("faultline.yaml")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_ENVIRONMENT = "development"

ENV_DSN = "SENTRY_DSN"
ENV_ENVIRONMENT = "ENVIRONMENT"
ENV_FLUSH_TIMEOUT = "FAULTLINE_FLUSH_TIMEOUT"


class LoggerConfig(BaseModel):
    dsn: str = ""
    environment: str = DEFAULT_ENVIRONMENT
    flush_timeout_seconds: float = Field(2.0, gt=0)
    traces_sample_rate: float = Field(1.0, ge=0.0, le=1.0)

    @field_validator("dsn", mode="before")
    @classmethod
    def _none_dsn_is_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @field_validator("environment", mode="before")
    @classmethod
    def _blank_environment_is_default(cls, v: Optional[str]) -> str:
        return v or DEFAULT_ENVIRONMENT

    @property
    def backend_enabled(self) -> bool:
        return bool(self.dsn)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LoggerConfig":
        """Read SENTRY_DSN, ENVIRONMENT and FAULTLINE_FLUSH_TIMEOUT."""
        environ = os.environ if environ is None else environ
        data: dict = {
            "dsn": environ.get(ENV_DSN, ""),
            "environment": environ.get(ENV_ENVIRONMENT, ""),
        }
        if environ.get(ENV_FLUSH_TIMEOUT):
            data["flush_timeout_seconds"] = environ[ENV_FLUSH_TIMEOUT]
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoggerConfig":
        """Load and validate from a YAML file."""
        path = Path(path)
        return cls.from_yaml_string(path.read_text(encoding="utf-8"))

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LoggerConfig":
        """
        Load and validate from a YAML string. Accepts either a top-level
        mapping or one nested under a ``logger:`` key.
        """
        data = yaml.safe_load(yaml_string) or {}
        if isinstance(data, dict) and isinstance(data.get("logger"), dict):
            data = data["logger"]
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict) -> "LoggerConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump()
