"""
Console formatters.

  - console:  "[2026-02-12 14:32:05] [INFO] message key1=val1 key2=val2"
  - fallback: "[INFO] message"  (used before the logger is initialized)
"""

from abc import ABC, abstractmethod
from typing import Any

from faultline.logger.records import LogRecord


class LogFormatter(ABC):
    """Base formatter. Transforms LogRecord → string."""

    @abstractmethod
    def format(self, record: LogRecord) -> str: ...


class ConsoleFormatter(LogFormatter):
    """
    Structured single-line format.
    Fields are appended sorted by key so output is deterministic.
    """

    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

    def format(self, record: LogRecord) -> str:
        ts = record.timestamp.strftime(self.TIMESTAMP_FORMAT)
        line = f"[{ts}] [{record.level_name}] {record.message}"
        if record.fields:
            pairs = " ".join(
                f"{k}={_format_value(v)}"
                for k, v in sorted(record.fields.items(), key=lambda kv: str(kv[0]))
            )
            line = f"{line} {pairs}"
        return line


class FallbackFormatter(LogFormatter):
    """Unstructured format: level and message only."""

    def format(self, record: LogRecord) -> str:
        return f"[{record.level_name}] {record.message}"


def _format_value(v: Any) -> str:
    return str(v)
