"""Shared data structures used across the ingestion pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .errors import PixelNotFoundError

# Sensor rows are 256 pixels wide.
ROW_WIDTH = 256


@dataclass(frozen=True)
class Pixel:
    """Single activated sensor coordinate with its intensity count.

    The values keep whatever numeric type the parser was asked to build
    (plain ``int`` by default).  ``linear_index`` is evaluated with that same
    type, so callers that depend on fixed-width wraparound must pass a
    wrapping type to the parser instead of relying on ``int``.
    """

    x: Any = 0
    y: Any = 0
    count: Any = 0

    @property
    def linear_index(self) -> Any:
        """Flattened ``256*y + x`` coordinate."""

        return ROW_WIDTH * self.y + self.x


@dataclass
class Frame:
    """One exposure: capture/running time plus its pixels keyed from 1."""

    capture_time: float = 0.0
    running_time: float = 0.0
    _pixels: Dict[int, Pixel] = field(default_factory=dict, init=False, repr=False)

    def set_pixel(self, key: int, pixel: Pixel) -> None:
        self._pixels[key] = pixel

    def get_pixel(self, key: int) -> Pixel:
        try:
            return self._pixels[key]
        except KeyError:
            raise PixelNotFoundError(key) from None

    @property
    def pixels(self) -> Mapping[int, Pixel]:
        """Read-only view of the pixels in read order."""

        return MappingProxyType(self._pixels)

    def __len__(self) -> int:
        return len(self._pixels)

    def describe(self) -> str:
        """Render metadata followed by every pixel, for debug logging."""

        lines = [
            f'Capture time: {self.capture_time!r}',
            f'Running time: {self.running_time!r}',
        ]
        for key, pixel in sorted(self._pixels.items()):
            lines.append(
                f'No. {key} pixel: x={pixel.x} y={pixel.y} '
                f'count={pixel.count} index={pixel.linear_index}'
            )
        return '\n'.join(lines)


@dataclass(frozen=True)
class LogMetadata:
    """Facts about a cluster log gathered once when it is opened."""

    path: Path
    source: str
    settings: str
    size_bytes: int
    line_count: int


@dataclass
class IngestResult:
    """Every frame read from one log, keyed densely from 1 in file order."""

    metadata: LogMetadata
    frames: Dict[int, Frame] = field(default_factory=dict)

    @property
    def frame_count(self) -> int:
        return len(self.frames)
