"""
Remote error-tracking backends.

The logger only ever calls three things on a backend: initialize once,
submit events fire-and-forget, and drain with a timeout before exit.
Submission results are never inspected.
"""

import threading
from abc import ABC, abstractmethod

import sentry_sdk

from faultline.logger.errors import BackendInitError
from faultline.logger.records import ErrorEvent


class ErrorBackend(ABC):
    """Base backend."""

    @abstractmethod
    def initialize(self, dsn: str, environment: str) -> None:
        """Establish the backend. Raise BackendInitError on rejection."""
        ...

    @abstractmethod
    def submit(self, event: ErrorEvent) -> None:
        """Queue an event for delivery. Must not raise."""
        ...

    @abstractmethod
    def drain(self, timeout: float) -> None:
        """Block up to ``timeout`` seconds while pending events are delivered."""
        ...

    def close(self) -> None:
        """Cleanup. Override if backend holds resources."""
        pass


class SentryBackend(ErrorBackend):
    """
    Sentry via sentry-sdk. The SDK owns its own background transport;
    capture_event() only enqueues and flush() waits on that queue.
    """

    def __init__(self, traces_sample_rate: float = 1.0, **client_options):
        self.traces_sample_rate = traces_sample_rate
        self.client_options = client_options
        self._initialized = False

    def initialize(self, dsn: str, environment: str) -> None:
        try:
            sentry_sdk.init(
                dsn=dsn,
                environment=environment,
                traces_sample_rate=self.traces_sample_rate,
                **self.client_options,
            )
        except Exception as exc:
            raise BackendInitError(f"failed to initialize Sentry: {exc}") from exc
        self._initialized = True

    def submit(self, event: ErrorEvent) -> None:
        if not self._initialized:
            return
        try:
            sentry_sdk.capture_event(event.to_payload())
        except Exception:
            pass

    def drain(self, timeout: float) -> None:
        if not self._initialized:
            return
        try:
            sentry_sdk.flush(timeout=timeout)
        except Exception:
            pass

    def close(self) -> None:
        if not self._initialized:
            return
        try:
            sentry_sdk.get_client().close()
        except Exception:
            pass
        self._initialized = False


class MemoryBackend(ErrorBackend):
    """
    Keeps submitted events in memory. For tests and dry runs.

    Set ``fail_with`` to make the next initialize() raise BackendInitError.
    """

    def __init__(self, fail_with: str | None = None):
        self.fail_with = fail_with
        self.dsn: str | None = None
        self.environment: str | None = None
        self.drain_calls: list[float] = []
        self.closed = False
        self._events: list[ErrorEvent] = []
        self._lock = threading.Lock()

    def initialize(self, dsn: str, environment: str) -> None:
        if self.fail_with is not None:
            reason, self.fail_with = self.fail_with, None
            raise BackendInitError(reason)
        self.dsn = dsn
        self.environment = environment

    def submit(self, event: ErrorEvent) -> None:
        with self._lock:
            self._events.append(event)

    def drain(self, timeout: float) -> None:
        self.drain_calls.append(timeout)

    def close(self) -> None:
        self.closed = True

    @property
    def events(self) -> list[ErrorEvent]:
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
