"""Streaming frame reader for cluster logs."""
from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TextIO, Union

from ..fs.logfile import inspect_log
from ..models.core import Frame, LogMetadata, Pixel
from ..models.errors import EndOfStream, LogReadError, MalformedHeaderError
from .lines import try_parse_cluster, try_parse_header

logger = logging.getLogger(__name__)


class ParserState(enum.Enum):
    EXPECT_HEADER = 'expect_header'
    EXPECT_CLUSTER_OR_END = 'expect_cluster_or_end'
    END_OF_STREAM = 'end_of_stream'


class LineCursor:
    """Line reader over a text handle with one line of lookahead.

    ``peek`` reads the next line without consuming it; ``advance`` consumes
    the peeked line.  At most one line is ever buffered.
    """

    def __init__(self, handle: TextIO) -> None:
        self._handle = handle
        self._pending: Optional[str] = None
        self._exhausted = False
        self.line_number = 0

    def peek(self) -> Optional[str]:
        """Return the next line without its newline, or ``None`` at end of input."""

        if self._pending is None and not self._exhausted:
            try:
                raw = self._handle.readline()
            except OSError as exc:
                raise LogReadError(f'Failed reading line {self.line_number + 1}: {exc}') from exc
            if raw == '':
                self._exhausted = True
            else:
                self._pending = raw.rstrip('\r\n')
        return self._pending

    def advance(self) -> Optional[str]:
        """Consume and return the next line (``None`` at end of input)."""

        line = self.peek()
        if line is not None:
            self._pending = None
            self.line_number += 1
        return line

    def at_end(self) -> bool:
        return self.peek() is None


class FrameStreamParser:
    """Assemble Frame records one at a time from an open cluster log.

    A frame is a header line followed by zero or more cluster lines; the first
    line that is not cluster data ends the frame and is discarded.  A missing
    header or a read failure is fatal: the parser re-raises the same error on
    every later call.
    """

    def __init__(
        self,
        handle: TextIO,
        *,
        strict: bool = False,
        value_type: Callable[[int], Any] = int,
        metadata: Optional[LogMetadata] = None,
    ) -> None:
        self._handle: Optional[TextIO] = handle
        self._cursor = LineCursor(handle)
        self._strict = strict
        self._value_type = value_type
        self._pixel_seq = 0
        self._failure: Optional[Union[MalformedHeaderError, LogReadError]] = None
        self.state = ParserState.EXPECT_HEADER
        self.metadata = metadata

    @property
    def line_number(self) -> int:
        """Number of lines consumed so far."""

        return self._cursor.line_number

    @property
    def closed(self) -> bool:
        return self._handle is None

    def has_more(self) -> bool:
        self._check_open()
        if self._failure is not None:
            return False
        try:
            return not self._cursor.at_end()
        except LogReadError as exc:
            self._failure = exc
            raise

    def next_frame(self) -> Frame:
        """Read the next complete frame.

        Raises ``EndOfStream`` once the input is exhausted,
        ``MalformedHeaderError`` when a frame does not start with a header and
        ``LogReadError`` when the underlying stream fails.
        """

        self._check_open()
        if self._failure is not None:
            raise self._failure
        try:
            return self._read_frame()
        except LogReadError as exc:
            self._failure = exc
            raise

    def _read_frame(self) -> Frame:
        cursor = self._cursor
        line = cursor.peek()
        if line is None:
            self.state = ParserState.END_OF_STREAM
            raise EndOfStream()

        header = try_parse_header(line, strict=self._strict)
        if header is None:
            self._failure = MalformedHeaderError(cursor.line_number + 1, line)
            raise self._failure
        cursor.advance()

        frame = Frame(capture_time=header.capture_time, running_time=header.running_time)
        self.state = ParserState.EXPECT_CLUSTER_OR_END
        self._pixel_seq = 0

        while True:
            line = cursor.peek()
            if line is None:
                break
            record = try_parse_cluster(line, strict=self._strict, value_type=self._value_type)
            cursor.advance()
            if record is None:
                break
            self._pixel_seq += 1
            frame.set_pixel(self._pixel_seq, Pixel(record.x, record.y, record.count))

        self.state = ParserState.EXPECT_HEADER
        return frame

    def __iter__(self) -> Iterator[Frame]:
        while True:
            try:
                yield self.next_frame()
            except EndOfStream:
                return

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> 'FrameStreamParser':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._handle is None:
            raise ValueError('Cluster log parser is closed')


def open_log(
    path: Path,
    *,
    strict: bool = False,
    value_type: Callable[[int], Any] = int,
) -> FrameStreamParser:
    """Inspect and open ``path``; use the result as a context manager."""

    metadata = inspect_log(path)
    try:
        handle = path.open('r', encoding='ascii', errors='replace', newline='')
    except OSError as exc:
        raise LogReadError(f'Failed to open cluster log {path}: {exc}') from exc
    logger.debug('Opened cluster log %s (%d bytes, %d lines)', path, metadata.size_bytes, metadata.line_count)
    return FrameStreamParser(handle, strict=strict, value_type=value_type, metadata=metadata)
