"""
In-app diagnostics log.

A logging handler that collects timestamped lines from every ``macrodeck``
logger into an append-only list, the way a status pane would show them.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from threading import Lock

ROOT_LOGGER_NAME = "macrodeck"


class DiagnosticsLog(logging.Handler):
    """
    Collects ``<timestamp>: <message>`` lines.

    Lines are only ever appended. An optional ``echo`` callable receives each
    line as it arrives (the CLI passes one that writes to stderr).
    """

    def __init__(self, echo: Callable[[str], None] | None = None, level: int = logging.INFO):
        super().__init__(level)
        self._echo = echo
        self._lines: list[str] = []
        self._lines_lock = Lock()
        self._logger: logging.Logger | None = None
        self._previous_level = logging.NOTSET

    @property
    def lines(self) -> list[str]:
        """Copy of every line collected so far."""
        with self._lines_lock:
            return list(self._lines)

    def messages(self) -> list[str]:
        """Collected lines without their timestamps."""
        return [line.split(": ", 1)[1] for line in self.lines]

    def emit(self, record: logging.LogRecord) -> None:
        try:
            timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
            line = f"{timestamp}: {record.getMessage()}"
            with self._lines_lock:
                self._lines.append(line)
            if self._echo is not None:
                self._echo(line)
        except Exception:
            self.handleError(record)

    def attach(self, logger_name: str = ROOT_LOGGER_NAME) -> "DiagnosticsLog":
        """
        Start collecting from a logger and its children.

        The logger's level is lowered to this handler's level if it would
        otherwise filter records out.
        """
        target = logging.getLogger(logger_name)
        self._previous_level = target.level
        if target.level == logging.NOTSET or target.level > self.level:
            target.setLevel(self.level)
        target.addHandler(self)
        self._logger = target
        return self

    def detach(self) -> None:
        """Stop collecting and restore the logger's level."""
        if self._logger is not None:
            self._logger.removeHandler(self)
            self._logger.setLevel(self._previous_level)
            self._logger = None
