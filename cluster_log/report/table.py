"""Wiki table rows summarising an ingested cluster log."""
from __future__ import annotations

from pathlib import Path

from ..models.core import IngestResult

ROW_DELIMITER = '|-'


def format_table_entry(
    source: str,
    size_bytes: int,
    line_count: int,
    frame_count: int,
    settings: str,
) -> str:
    """Return one MediaWiki table row, including the ``|-`` row delimiter."""

    cells = ' || '.join(
        [source, str(size_bytes), str(line_count), str(frame_count), settings]
    )
    return f'{ROW_DELIMITER}\n| {cells}\n'


def table_entry_for(result: IngestResult) -> str:
    meta = result.metadata
    return format_table_entry(
        meta.source,
        meta.size_bytes,
        meta.line_count,
        result.frame_count,
        meta.settings,
    )


def append_table_entry(path: Path, entry: str) -> None:
    """Append ``entry`` to a wiki table file, creating it when missing."""

    with path.open('a', encoding='utf-8') as handle:
        handle.write(entry)
