"""Command-line entry points for cluster log ingestion."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ..config.schema import IngestConfig, ParseOptions
from ..ingest.pipeline import ingest_log
from ..models.core import IngestResult
from ..models.errors import ClusterLogError
from ..report.table import append_table_entry, table_entry_for


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Read a detector cluster log and summarise its frames',
    )
    parser.add_argument(
        'log_path',
        type=Path,
        help='Cluster log to ingest (e.g. <detector>/<run>/<settings>/clusters.txt)',
    )
    parser.add_argument(
        '--table',
        action='store_true',
        help='Print a wiki table row (source, size, lines, frames, settings) to stdout.',
    )
    parser.add_argument(
        '--table-out',
        type=Path,
        default=None,
        help='Append the wiki table row to this file.',
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Reject lines with malformed numbers instead of reading them as 0.',
    )
    parser.add_argument(
        '--log-frames',
        action='store_true',
        help='Log every frame and its pixels at DEBUG level.',
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        help='Logging level (DEBUG, INFO, WARNING, ...)',
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=None,
        help='Also write log messages to this file.',
    )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        handlers=_build_log_handlers(args.log_file),
    )
    logger = logging.getLogger(__name__)

    cfg = IngestConfig(
        log_path=args.log_path,
        parse=ParseOptions(strict=args.strict),
        log_frames=args.log_frames,
    )
    logger.debug('Ingest config: %s', cfg)

    try:
        result = ingest_log(cfg)
    except ClusterLogError as exc:
        logger.error('Failed to ingest %s: %s', cfg.log_path, exc)
        return 1

    if args.table or args.table_out is not None:
        entry = table_entry_for(result)
        logger.info('Generated table entry:\n%s', entry.rstrip('\n'))
        if args.table:
            print(entry, end='')
        if args.table_out is not None:
            append_table_entry(args.table_out, entry)
            logger.info('Appended table entry to %s', args.table_out)
    else:
        print(_format_summary(result))

    return 0


def _build_log_handlers(log_file: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    return handlers


def _format_summary(result: IngestResult) -> str:
    meta = result.metadata
    return (
        f'{meta.path.name}: {result.frame_count} frames | '
        f'{meta.line_count} lines | {meta.size_bytes} bytes | '
        f'source={meta.source or "?"} settings={meta.settings or "?"}'
    )
