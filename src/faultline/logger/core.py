"""
FaultlineLogger: process-wide logging facade.

One instance per process. Every call writes a line to the console;
ERROR-level calls are also forwarded to the remote error-tracking backend
when a DSN was configured.

Lifecycle is a single gate: uninitialized → initialized. Before init(),
calls degrade to unstructured console lines. init() succeeds at most once.
"""

import threading
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from faultline.logger.adapters import ConsoleAdapter
from faultline.logger.backend import ErrorBackend, SentryBackend
from faultline.logger.errors import AlreadyInitializedError
from faultline.logger.formatters import FallbackFormatter
from faultline.logger.records import ErrorEvent, LogLevel, LogRecord

DEFAULT_FLUSH_TIMEOUT = 2.0


@dataclass(frozen=True)
class _Settings:
    """Configuration snapshot, published once by init()."""
    dsn: str
    environment: str
    backend: ErrorBackend | None
    flush_timeout: float

    @property
    def backend_enabled(self) -> bool:
        return bool(self.dsn) and self.backend is not None


class FaultlineLogger:
    """
    Singleton logging facade.

    Usage:
        log = FaultlineLogger.instance()
        log.init(os.environ.get("SENTRY_DSN", ""), "production")
        log.info("User logged in", {"user_id": 12345})
        log.error_with_exc(exc, "Failed to connect to database", database="postgres")
        log.flush()
    """

    _instance: Optional["FaultlineLogger"] = None
    _lock = threading.Lock()

    DEBUG = LogLevel.DEBUG
    INFO = LogLevel.INFO
    WARN = LogLevel.WARN
    ERROR = LogLevel.ERROR

    def __init__(self, console: ConsoleAdapter | None = None) -> None:
        self._console = console or ConsoleAdapter()
        self._fallback_formatter = FallbackFormatter()
        # Readers on the hot path take this reference without locking.
        self._settings: _Settings | None = None
        self._init_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "FaultlineLogger":
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton. For testing only, not for production use.
        Closes the backend before resetting.
        """
        with cls._lock:
            if cls._instance is not None:
                settings = cls._instance._settings
                if settings is not None and settings.backend is not None:
                    settings.backend.close()
                cls._instance = None

    # ── Initialization ────────────────────────────────────────────

    def init(
        self,
        dsn: str = "",
        environment: str = "",
        backend: ErrorBackend | None = None,
        flush_timeout: float = DEFAULT_FLUSH_TIMEOUT,
    ) -> None:
        """
        Initialize the logger. Succeeds at most once per process.

        An empty ``dsn`` disables remote reporting. When ``dsn`` is set the
        backend (Sentry unless one is given) is established first; if that
        raises BackendInitError the logger stays uninitialized and init()
        may be retried.

        Raises:
            AlreadyInitializedError: init() already succeeded.
            BackendInitError: the backend rejected dsn/environment.
        """
        with self._init_lock:
            if self._settings is not None:
                raise AlreadyInitializedError()

            if dsn:
                backend = backend or SentryBackend()
                backend.initialize(dsn, environment)

            self._settings = _Settings(
                dsn=dsn,
                environment=environment,
                backend=backend if dsn else None,
                flush_timeout=flush_timeout,
            )

    @property
    def is_initialized(self) -> bool:
        return self._settings is not None

    @property
    def dsn(self) -> str:
        settings = self._settings
        return settings.dsn if settings else ""

    @property
    def environment(self) -> str:
        settings = self._settings
        return settings.environment if settings else ""

    @property
    def console(self) -> ConsoleAdapter:
        return self._console

    # ── Core Logging ──────────────────────────────────────────────

    def log(
        self,
        level: LogLevel | int | str,
        message: str,
        fields: Mapping[str, Any] | None = None,
        /,
        **context: Any,
    ) -> None:
        """
        Write one console line; forward ERROR records to the backend.

        ``fields`` and keyword ``context`` are merged, context winning.
        Leading arguments are positional-only so any keyword (``level``,
        ``message``, ...) is a field. Console and backend failures are
        swallowed; after init an unknown ``level`` raises ValueError.
        """
        settings = self._settings

        if settings is None:
            self._log_fallback(level, message)
            return

        level = LogLevel.from_value(level)

        try:
            merged = dict(fields) if fields else {}
            merged.update(context)
            record = LogRecord.create(level, message, merged)
        except Exception:
            self._log_fallback(level, message)
            return

        self._console.emit(record)

        if level == LogLevel.ERROR and settings.backend_enabled:
            try:
                settings.backend.submit(ErrorEvent.from_record(record, settings.environment))
            except Exception:
                pass

    def _log_fallback(self, level: LogLevel | int | str, message: str) -> None:
        """Pre-init path. Never raises, not even for an unknown level."""
        try:
            record = LogRecord.create(level, str(message))
            self._console.emit(record, formatter=self._fallback_formatter)
        except Exception:
            try:
                self._console.write_line(f"[{level}] {message}")
            except Exception:
                pass

    # ── Convenience Methods ───────────────────────────────────────

    def debug(self, message: str, fields: Mapping[str, Any] | None = None, /, **ctx: Any) -> None:
        self.log(LogLevel.DEBUG, message, fields, **ctx)

    def info(self, message: str, fields: Mapping[str, Any] | None = None, /, **ctx: Any) -> None:
        self.log(LogLevel.INFO, message, fields, **ctx)

    def warn(self, message: str, fields: Mapping[str, Any] | None = None, /, **ctx: Any) -> None:
        self.log(LogLevel.WARN, message, fields, **ctx)

    warning = warn

    def error(self, message: str, fields: Mapping[str, Any] | None = None, /, **ctx: Any) -> None:
        self.log(LogLevel.ERROR, message, fields, **ctx)

    def error_with_exc(
        self,
        exc: BaseException | None,
        message: str,
        fields: Mapping[str, Any] | None = None,
        /,
        **ctx: Any,
    ) -> None:
        """
        Log an ERROR carrying an exception.

        Adds ``error`` (str(exc)) and ``error_type`` (exception class name)
        to the fields, overriding caller keys of the same name, and appends
        ": <exc>" to the message. With ``exc=None`` this is plain error().
        """
        if exc is None:
            self.error(message, fields, **ctx)
            return

        try:
            description = _describe(exc)
            merged = dict(fields) if fields else {}
            merged.update(ctx)
            merged["error"] = description
            merged["error_type"] = type(exc).__name__
            full_message = f"{message}: {description}"
        except Exception:
            self.error(message)
            return
        self.log(LogLevel.ERROR, full_message, merged)

    # ── Status ────────────────────────────────────────────────────

    def status(self) -> dict:
        """Current logger state for display."""
        settings = self._settings
        if settings is None:
            return {
                "initialized": False,
                "backend_enabled": False,
                "backend": None,
                "environment": "",
                "flush_timeout": None,
            }
        return {
            "initialized": True,
            "backend_enabled": settings.backend_enabled,
            "backend": type(settings.backend).__name__ if settings.backend else None,
            "environment": settings.environment,
            "flush_timeout": settings.flush_timeout,
        }

    # ── Cleanup ───────────────────────────────────────────────────

    def flush(self, timeout: float | None = None) -> None:
        """
        Drain pending backend events, blocking up to the flush timeout.
        Call on every exit path. No-op when reporting is disabled or
        init() never ran.
        """
        settings = self._settings
        if settings is None or not settings.backend_enabled:
            return
        try:
            settings.backend.drain(settings.flush_timeout if timeout is None else timeout)
        except Exception:
            pass


# ── Helpers ───────────────────────────────────────────────────────────

def _describe(exc: BaseException) -> str:
    """str(exc), tolerating a broken __str__."""
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__} object>"
