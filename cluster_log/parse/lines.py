"""Line grammars for frame header and cluster data lines.

Header lines look like ``Frame 1 (1335967757.2905033 s, 0.1 s)`` and cluster
lines like ``[19, 0, 55]``.  Both classifiers are pure: they only inspect the
string they are given and return ``None`` when it does not belong to their
grammar.

By default numbers are converted leniently, much like the historical
acquisition tools did: the longest decimal prefix of a token is used and a
token without one becomes ``0``.  Only plain decimal notation (with an
optional exponent) is recognised, so ``inf``, ``nan`` and hex floats read
as ``0``.  Existing datasets were ingested with that
tolerance, so strict validation is only applied when ``strict=True``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional, Tuple

HEADER_OPEN = '('
HEADER_SEPARATOR = ' s, '
CLUSTER_OPEN = '['
CLUSTER_CLOSE = ']'
CLUSTER_SEPARATOR = ', '

_HEADER_STOPS: FrozenSet[str] = frozenset(' ')
_CLUSTER_STOPS: FrozenSet[str] = frozenset(', ]')

_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class FrameHeader:
    """Timing fields extracted from a header line."""

    capture_time: float
    running_time: float


@dataclass(frozen=True)
class ClusterRecord:
    """Pixel fields extracted from a cluster line."""

    x: Any
    y: Any
    count: Any


def lenient_int(token: str) -> int:
    """Convert the leading integer of ``token``; ``0`` when there is none."""

    match = _INT_PREFIX_RE.match(token)
    if not match:
        return 0
    return int(match.group(1))


def lenient_float(token: str) -> float:
    """Convert the leading decimal number of ``token``; ``0.0`` when there is none."""

    match = _FLOAT_PREFIX_RE.match(token)
    if not match:
        return 0.0
    return float(match.group(1))


def try_parse_header(line: str, *, strict: bool = False) -> Optional[FrameHeader]:
    """Return the header fields of ``line`` or ``None`` if it is not a header."""

    pos = line.find(HEADER_OPEN)
    if pos < 0:
        return None
    pos += len(HEADER_OPEN)

    first, pos = _take_token(line, pos, _HEADER_STOPS)
    if strict and not line.startswith(HEADER_SEPARATOR, pos):
        return None
    # Legacy logs are trusted to carry the separator, so it is skipped by width.
    pos += len(HEADER_SEPARATOR)
    second, _ = _take_token(line, pos, _HEADER_STOPS)

    if strict:
        if not (_FLOAT_RE.fullmatch(first) and _FLOAT_RE.fullmatch(second)):
            return None
        return FrameHeader(capture_time=float(first), running_time=float(second))
    return FrameHeader(capture_time=lenient_float(first), running_time=lenient_float(second))


def try_parse_cluster(
    line: str,
    *,
    strict: bool = False,
    value_type: Callable[[int], Any] = int,
) -> Optional[ClusterRecord]:
    """Return the pixel fields of ``line`` or ``None`` if it is not cluster data."""

    pos = line.find(CLUSTER_OPEN)
    if pos < 0:
        return None
    pos += len(CLUSTER_OPEN)

    tokens = []
    for field_idx in range(3):
        token, pos = _take_token(line, pos, _CLUSTER_STOPS)
        tokens.append(token)
        if field_idx == 2:
            break
        if line.startswith(CLUSTER_SEPARATOR, pos):
            pos += len(CLUSTER_SEPARATOR)
        elif strict:
            return None
        else:
            pos = _skip_loose_separator(line, pos)

    if strict:
        if not line.startswith(CLUSTER_CLOSE, pos):
            return None
        if not all(_INT_RE.fullmatch(token) for token in tokens):
            return None
        values = [int(token) for token in tokens]
    else:
        values = [lenient_int(token) for token in tokens]

    x, y, count = (value_type(value) for value in values)
    return ClusterRecord(x=x, y=y, count=count)


def _take_token(line: str, pos: int, stops: FrozenSet[str]) -> Tuple[str, int]:
    """Collect characters from ``pos`` up to the next stop character or line end."""

    end = pos
    length = len(line)
    while end < length and line[end] not in stops:
        end += 1
    return line[pos:end], end


def _skip_loose_separator(line: str, pos: int) -> int:
    # Accept "," / ", " / " ,"-style separators; a closing bracket ends the
    # record and leaves any remaining fields empty.
    length = len(line)
    while pos < length and line[pos] == ' ':
        pos += 1
    if pos < length and line[pos] == ',':
        pos += 1
    else:
        return length
    while pos < length and line[pos] == ' ':
        pos += 1
    return pos
