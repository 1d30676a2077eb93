"""
Log records, error events and level definitions.

Levels use Python-compatible numeric values so they sort naturally.
An ErrorEvent is derived from an ERROR-level LogRecord and is what the
remote backend receives.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Mapping


class LogLevel(IntEnum):
    """Facade log levels."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve level from string name, case-insensitive."""
        name_upper = name.upper()
        if name_upper == "WARNING":
            return cls.WARN
        try:
            return cls[name_upper]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            )

    @classmethod
    def from_value(cls, value: int | str) -> "LogLevel":
        """Resolve level from int or string."""
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int):
            for member in cls:
                if member.value == value:
                    return member
            raise ValueError(
                f"No level with value {value}. "
                f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
            )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable log record, built once per logging call and never shared.

    The timestamp is captured at creation with second resolution.
    """
    timestamp: datetime
    level: LogLevel
    message: str
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def level_name(self) -> str:
        return self.level.name

    @classmethod
    def create(
        cls,
        level: LogLevel | int | str,
        message: str,
        fields: Mapping[str, Any] | None = None,
    ) -> "LogRecord":
        """Factory with auto-timestamp. Copies ``fields``."""
        return cls(
            timestamp=datetime.now(timezone.utc).replace(microsecond=0),
            level=LogLevel.from_value(level),
            message=message,
            fields=dict(fields) if fields else {},
        )


@dataclass(frozen=True)
class ErrorEvent:
    """Structured error event submitted to the remote backend."""
    message: str
    environment: str
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime | None = None
    level: str = "error"

    @classmethod
    def from_record(cls, record: LogRecord, environment: str) -> "ErrorEvent":
        return cls(
            message=record.message,
            environment=environment,
            extra=dict(record.fields),
            timestamp=record.timestamp,
        )

    def to_payload(self) -> dict[str, Any]:
        """Event dict in the shape Sentry's ``capture_event`` accepts."""
        payload: dict[str, Any] = {
            "message": self.message,
            "level": self.level,
            "environment": self.environment,
            "extra": {k: _serialize_value(v) for k, v in self.extra.items()},
        }
        if self.timestamp is not None:
            payload["timestamp"] = self.timestamp.isoformat()
        return payload


def _serialize_value(v: Any) -> Any:
    """Make a value JSON-serializable."""
    if isinstance(v, (str, int, float, bool, type(None))):
        return v
    if isinstance(v, (list, tuple)):
        return [_serialize_value(i) for i in v]
    if isinstance(v, dict):
        return {str(k): _serialize_value(val) for k, val in v.items()}
    return str(v)
