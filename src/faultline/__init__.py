"""Faultline: a process-wide logging facade with Sentry error reporting."""

from faultline.logger import FaultlineLogger, LogLevel

__version__ = "0.1.0"

__all__ = ["FaultlineLogger", "LogLevel", "__version__"]
