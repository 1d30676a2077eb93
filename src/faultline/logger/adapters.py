"""
Console adapter (line-oriented output sink).

Writes are serialized by a lock so concurrent callers never interleave
partial lines. The lock is reentrant: a signal handler that logs runs on
the main thread and may interrupt a write already holding it.
Write failures are swallowed: logging must never crash the caller.
"""

import sys
import threading
from typing import TextIO

from faultline.logger.formatters import LogFormatter, ConsoleFormatter
from faultline.logger.records import LogRecord


class ConsoleAdapter:
    """
    Writes one formatted line per record to a text stream.

    With no explicit stream, ``sys.stdout`` is looked up at write time so
    redirection (and pytest's capsys) is honored.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        formatter: LogFormatter | None = None,
    ):
        self._stream = stream
        self.formatter = formatter or ConsoleFormatter()
        self._lock = threading.RLock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def emit(self, record: LogRecord, formatter: LogFormatter | None = None) -> None:
        """Format and write a record. Best-effort."""
        try:
            line = (formatter or self.formatter).format(record)
        except Exception:
            line = f"[{record.level_name}] {record.message}"
        self.write_line(line)

    def write_line(self, line: str) -> None:
        with self._lock:
            try:
                stream = self.stream
                stream.write(line + "\n")
                stream.flush()
            except Exception:
                pass
