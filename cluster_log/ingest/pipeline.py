"""Ingestion driver that reads every frame of one cluster log."""
from __future__ import annotations

import logging

from ..config.schema import IngestConfig
from ..models.core import IngestResult
from ..models.errors import EndOfStream
from ..parse.reader import open_log

logger = logging.getLogger(__name__)


def ingest_log(config: IngestConfig) -> IngestResult:
    """Read all frames from ``config.log_path`` in file order.

    Fatal parse and I/O errors propagate; the log file is closed either way.
    """

    logger.info('Opening cluster log: %s', config.log_path)
    with open_log(
        config.log_path,
        strict=config.parse.strict,
        value_type=config.parse.value_type,
    ) as parser:
        result = IngestResult(metadata=parser.metadata)
        logger.info('Starting frame retrieval loop...')
        frame_number = 1
        while True:
            try:
                frame = parser.next_frame()
            except EndOfStream:
                break
            if config.log_frames:
                logger.debug('Frame no: %d\n%s', frame_number, frame.describe())
            result.frames[frame_number] = frame
            frame_number += 1

    logger.info(
        'Finished reading "%s" (%d frames, %d lines)',
        config.log_path.name,
        result.frame_count,
        result.metadata.line_count,
    )
    return result
