"""Exceptions raised by FaultlineLogger."""


class LoggerError(Exception):
    """Base class for logger errors."""


class AlreadyInitializedError(LoggerError):
    """init() was called on a logger that is already initialized."""

    def __init__(self, message: str = "logger already initialized"):
        super().__init__(message)


class BackendInitError(LoggerError):
    """The remote error-tracking backend rejected its configuration."""
