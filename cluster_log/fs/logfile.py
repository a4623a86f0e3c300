"""Path inspection helpers for cluster logs."""
from __future__ import annotations

import logging
from pathlib import Path, PurePath
from typing import Tuple

from ..models.core import LogMetadata
from ..models.errors import LogReadError, OpenError

logger = logging.getLogger(__name__)


def derive_labels(path: PurePath) -> Tuple[str, str]:
    """Return the ``(source, settings)`` labels encoded in a log's location.

    Logs are filed as ``<detector>/<run>/<settings>/<log file>``: the source is
    the detector directory three levels up and the settings label is the
    immediate parent.  Missing ancestors yield empty labels.
    """

    parents = path.parents
    settings = parents[0].name if len(parents) > 0 else ''
    source = parents[2].name if len(parents) > 2 else ''
    return source, settings


def inspect_log(path: Path) -> LogMetadata:
    if not path.exists():
        raise OpenError(f"Cluster log '{path}' doesn't exist")
    if not path.is_file():
        raise OpenError(f"Cluster log '{path}' isn't a regular file")
    size_bytes = path.stat().st_size
    if size_bytes == 0:
        raise OpenError(f"Cluster log '{path}' is empty")

    source, settings = derive_labels(path)
    line_count = count_lines(path)
    logger.debug('Inspected %s | source=%r settings=%r lines=%d', path.name, source, settings, line_count)
    return LogMetadata(
        path=path,
        source=source,
        settings=settings,
        size_bytes=size_bytes,
        line_count=line_count,
    )


def count_lines(path: Path) -> int:
    """Count lines with a full pass; a trailing line without newline counts."""

    try:
        with path.open('r', encoding='ascii', errors='replace', newline='') as handle:
            return sum(1 for _ in handle)
    except OSError as exc:
        raise LogReadError(f'Failed to scan {path}: {exc}') from exc
