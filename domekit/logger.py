"""Levelled, aligned log output to a console stream and an optional log file."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import Optional, TextIO


class LogLevel(IntEnum):
    """Log levels, from least to most verbose."""

    OFF = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5


_COLORS = {
    LogLevel.OFF: "\0330m",
    LogLevel.FATAL: "\033[31m",
    LogLevel.ERROR: "\033[31m",
    LogLevel.WARN: "\033[33m",
    LogLevel.INFO: "\033[32m",
    LogLevel.DEBUG: "\033[36m",
}
_RESET = "\033[0m"


class FatalLogError(RuntimeError):
    """Raised after a message is logged at the FATAL level."""


class Logger:
    """Writes messages whose text columns stay aligned across calls."""

    def __init__(
        self,
        level=LogLevel.INFO,
        color: bool = False,
        stream: Optional[TextIO] = None,
        logfile: Optional[TextIO] = None,
    ):
        self.level = LogLevel(level)
        self.color = color
        self.stream = stream
        self.logfile = logfile
        self.padding = 0

    def log(self, level, line: str, context: Optional[str] = None) -> Optional[str]:
        """Log a line and return it as written to the log file.

        Returns None when the level is filtered out. Raises FatalLogError
        after writing a FATAL message.
        """
        number = int(max(0.0, min(float(level), float(len(LogLevel) - 1))))
        if number > self.level:
            return None
        entry = LogLevel(number)
        if not isinstance(context, str):
            context = None

        line_length = (0 if context is None else 3 + len(context)) + len(entry.name)
        if line_length > self.padding:
            self.padding = line_length
        spaces = " " * (self.padding - line_length + 1)

        tag = f"[{entry.name}]"
        if context is not None:
            tag += f" [{context}]"
        plain = f"{tag}:{spaces}{line}"

        if self.logfile is not None:
            self.logfile.write(plain)
            self.logfile.write("\n")

        stream = self.stream if self.stream is not None else sys.stdout
        if self.color:
            stream.write(f"{_COLORS[entry]}{tag}{_RESET}:{spaces}{line}\n")
        else:
            stream.write(plain + "\n")

        if entry is LogLevel.FATAL:
            raise FatalLogError(line)
        return plain

    def set_level(self, name: str) -> None:
        """Set the level by its exact name; unknown names are ignored."""
        for member in LogLevel:
            if member.name == name:
                self.level = member
                return

    def level_name(self) -> str:
        """Return the name of the current level."""
        return self.level.name