"""Exception types raised while opening and parsing cluster logs."""
from __future__ import annotations

from typing import Optional


class ClusterLogError(Exception):
    """Base class for every cluster log failure."""


class OpenError(ClusterLogError, OSError):
    """The log path is missing, not a regular file, or empty."""


class LogReadError(ClusterLogError, OSError):
    """Reading from the underlying stream failed."""


class MalformedHeaderError(ClusterLogError, ValueError):
    """A frame did not start with a valid header line."""

    def __init__(self, line_number: int, line: Optional[str] = None) -> None:
        self.line_number = line_number
        self.line = line
        message = f'Missing frame header at line {line_number}'
        if line is not None:
            message += f': {line!r}'
        super().__init__(message)


class EndOfStream(ClusterLogError):
    """Every frame has been read; not a failure."""


class PixelNotFoundError(ClusterLogError, KeyError):
    """No pixel is stored under the requested sequence number."""

    def __init__(self, key: int) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f'No pixel stored under key {self.key}'
