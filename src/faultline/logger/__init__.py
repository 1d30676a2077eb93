"""
Faultline logging facade.

Console output for every level, ERROR forwarded to a remote
error-tracking backend (Sentry) when configured.
"""

from faultline.logger.core import FaultlineLogger, DEFAULT_FLUSH_TIMEOUT
from faultline.logger.records import LogRecord, LogLevel, ErrorEvent
from faultline.logger.adapters import ConsoleAdapter
from faultline.logger.backend import ErrorBackend, SentryBackend, MemoryBackend
from faultline.logger.errors import LoggerError, AlreadyInitializedError, BackendInitError
from faultline.logger.formatters import LogFormatter, ConsoleFormatter, FallbackFormatter

__all__ = [
    "FaultlineLogger",
    "DEFAULT_FLUSH_TIMEOUT",
    "LogRecord",
    "LogLevel",
    "ErrorEvent",
    "ConsoleAdapter",
    "ErrorBackend",
    "SentryBackend",
    "MemoryBackend",
    "LoggerError",
    "AlreadyInitializedError",
    "BackendInitError",
    "LogFormatter",
    "ConsoleFormatter",
    "FallbackFormatter",
]
