"""
Startup and shutdown helpers.

The logger cannot enforce that callers flush before exiting, so these
helpers wire flush() into every exit path: normal interpreter exit,
SIGINT/SIGTERM, and unhandled exceptions.

Usage:
    log = bootstrap()
    hooks = install_shutdown_hooks(log)
"""

from __future__ import annotations

import atexit
import signal
import sys
import threading
from typing import Callable, Iterable

from faultline.config import LoggerConfig
from faultline.logger.backend import ErrorBackend, SentryBackend
from faultline.logger.core import FaultlineLogger

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def bootstrap(
    config: LoggerConfig | None = None,
    backend: ErrorBackend | None = None,
) -> FaultlineLogger:
    """Initialize the singleton from config (environment by default)."""
    config = config or LoggerConfig.from_env()
    if backend is None and config.backend_enabled:
        backend = SentryBackend(traces_sample_rate=config.traces_sample_rate)

    log = FaultlineLogger.instance()
    log.init(
        config.dsn,
        config.environment,
        backend=backend,
        flush_timeout=config.flush_timeout_seconds,
    )
    return log


class ShutdownHooks:
    """Handle for installed hooks. uninstall() restores the previous state."""

    def __init__(self, logger: FaultlineLogger):
        self._log = logger
        self._previous_handlers: dict[int, object] = {}
        self._previous_excepthook: Callable | None = None
        self._atexit_registered = False

    def _on_signal(self, signum, frame) -> None:
        self._log.info("Shutting down gracefully", signal=signal.Signals(signum).name)
        self._log.flush()
        sys.exit(0)

    def _on_unhandled(self, exc_type, exc, tb) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            self._log.error_with_exc(exc, "Unhandled exception")
            self._log.flush()
        previous = self._previous_excepthook or sys.__excepthook__
        previous(exc_type, exc, tb)

    def install(self, signals: Iterable[int] = DEFAULT_SIGNALS) -> "ShutdownHooks":
        atexit.register(self._log.flush)
        self._atexit_registered = True

        self._previous_excepthook = sys.excepthook
        sys.excepthook = self._on_unhandled

        # signal.signal() only works in the main thread.
        if threading.current_thread() is threading.main_thread():
            for signum in signals:
                self._previous_handlers[signum] = signal.signal(signum, self._on_signal)
        return self

    def uninstall(self) -> None:
        if self._atexit_registered:
            atexit.unregister(self._log.flush)
            self._atexit_registered = False

        if self._previous_excepthook is not None:
            sys.excepthook = self._previous_excepthook
            self._previous_excepthook = None

        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._previous_handlers.clear()

    @property
    def signals(self) -> list[int]:
        return list(self._previous_handlers)


def install_shutdown_hooks(
    logger: FaultlineLogger | None = None,
    signals: Iterable[int] = DEFAULT_SIGNALS,
) -> ShutdownHooks:
    """Flush on exit, on SIGINT/SIGTERM, and on unhandled exceptions."""
    return ShutdownHooks(logger or FaultlineLogger.instance()).install(signals)
