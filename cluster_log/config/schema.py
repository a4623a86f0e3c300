"""Configuration dataclasses for cluster log ingestion."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable


@dataclass(frozen=True)
class ParseOptions:
    """Controls how individual lines are interpreted."""

    strict: bool = False
    value_type: Callable[[int], Any] = int


@dataclass(frozen=True)
class IngestConfig:
    """High-level knobs for ingesting one log."""

    log_path: Path
    parse: ParseOptions = field(default_factory=ParseOptions)
    log_frames: bool = False
