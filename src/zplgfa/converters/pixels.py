"""Pixel grid access for the Graphic Field encoder.

The encoder only needs the grid size and a way to read one pixel as a
16-bit, alpha-premultiplied ``(r, g, b, a)`` sample. Pillow images are
adapted by ``PILPixelGrid``, which picks a per-mode conversion once
instead of going through a generic conversion for every pixel.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from PIL import Image

from zplgfa.converters.color import MAX_CHANNEL, PixelSample

logger = logging.getLogger(__name__)


@runtime_checkable
class PixelGrid(Protocol):
    """Anything the encoder can read pixels from."""

    @property
    def size(self) -> tuple[int, int]:
        """Width and height in pixels."""
        ...

    def rgba64_at(self, x: int, y: int) -> PixelSample:
        """Premultiplied 16-bit sample at (x, y)."""
        ...


# Pillow stores 8-bit channels; scale to 16 bits the way Go does (v * 0x101)


def _from_bilevel(value: int) -> PixelSample:
    # Any nonzero bilevel value is white
    if value:
        return (MAX_CHANNEL, MAX_CHANNEL, MAX_CHANNEL, MAX_CHANNEL)
    return (0, 0, 0, MAX_CHANNEL)


def _from_gray8(value: int) -> PixelSample:
    v = value * 0x101
    return (v, v, v, MAX_CHANNEL)


def _from_gray_alpha8(value: tuple[int, int]) -> PixelSample:
    gray, alpha = value
    a = alpha * 0x101
    v = gray * 0x101 * a // MAX_CHANNEL
    return (v, v, v, a)


def _from_premultiplied_gray_alpha8(value: tuple[int, int]) -> PixelSample:
    gray, alpha = value
    v = gray * 0x101
    return (v, v, v, alpha * 0x101)


def _from_gray16(value: int) -> PixelSample:
    return (value, value, value, MAX_CHANNEL)


def _from_gray32(value: float) -> PixelSample:
    # 32-bit integer and float modes are read as 16-bit gray, clamped
    v = min(max(int(value), 0), MAX_CHANNEL)
    return (v, v, v, MAX_CHANNEL)


def _from_rgb8(value: tuple[int, ...]) -> PixelSample:
    return (value[0] * 0x101, value[1] * 0x101, value[2] * 0x101, MAX_CHANNEL)


def _from_straight_rgba8(value: tuple[int, int, int, int]) -> PixelSample:
    r, g, b, alpha = value
    a = alpha * 0x101
    return (
        r * 0x101 * a // MAX_CHANNEL,
        g * 0x101 * a // MAX_CHANNEL,
        b * 0x101 * a // MAX_CHANNEL,
        a,
    )


def _from_premultiplied_rgba8(value: tuple[int, int, int, int]) -> PixelSample:
    r, g, b, a = value
    return (r * 0x101, g * 0x101, b * 0x101, a * 0x101)


SAMPLE_CONVERTERS: dict[str, Callable[[Any], PixelSample]] = {
    "1": _from_bilevel,
    "L": _from_gray8,
    "LA": _from_gray_alpha8,
    "La": _from_premultiplied_gray_alpha8,
    "I;16": _from_gray16,
    "I;16L": _from_gray16,
    "I;16B": _from_gray16,
    "I;16N": _from_gray16,
    "I": _from_gray32,
    "F": _from_gray32,
    "RGB": _from_rgb8,
    "RGBX": _from_rgb8,
    "RGBA": _from_straight_rgba8,
    "RGBa": _from_premultiplied_rgba8,
}


class PILPixelGrid:
    """Pixel grid backed by a Pillow image.

    Modes without a dedicated conversion (palette, CMYK, YCbCr, ...) are
    converted to RGBA once up front.
    """

    def __init__(self, image: Image.Image) -> None:
        if image.mode not in SAMPLE_CONVERTERS:
            logger.debug(f"Converting image mode {image.mode} to RGBA")
            image = image.convert("RGBA")
        self.image = image
        self._convert = SAMPLE_CONVERTERS[image.mode]
        width, height = image.size
        # Nothing to read from an empty image
        self._pixels = image.load() if width and height else None

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def rgba64_at(self, x: int, y: int) -> PixelSample:
        return self._convert(self._pixels[x, y])  # type: ignore[index]


class SampleGrid:
    """Pixel grid over samples that are already 16-bit and premultiplied.

    Samples are stored row-major.
    """

    def __init__(self, size: tuple[int, int], samples: Sequence[PixelSample]) -> None:
        width, height = size
        if width < 0 or height < 0:
            raise ValueError(f"Invalid grid size: {size}")
        if len(samples) != width * height:
            raise ValueError(f"Expected {width * height} samples for a {width}x{height} grid, got {len(samples)}")
        self._size = (width, height)
        self._samples = list(samples)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[PixelSample]]) -> "SampleGrid":
        """Build a grid from a list of equally long rows."""
        width = len(rows[0]) if rows else 0
        for row in rows:
            if len(row) != width:
                raise ValueError("All rows must have the same width")
        return cls((width, len(rows)), [sample for row in rows for sample in row])

    @classmethod
    def filled(cls, size: tuple[int, int], sample: PixelSample) -> "SampleGrid":
        """Build a grid where every pixel is the same sample."""
        width, height = size
        return cls(size, [sample] * (width * height))

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def rgba64_at(self, x: int, y: int) -> PixelSample:
        return self._samples[y * self._size[0] + x]


def as_pixel_grid(source: Image.Image | PixelGrid) -> PixelGrid:
    """Adapt a Pillow image or pass an existing pixel grid through.

    Raises:
        TypeError: If the source is neither.
    """
    if isinstance(source, Image.Image):
        return PILPixelGrid(source)
    if isinstance(source, PixelGrid):
        return source
    raise TypeError(f"Cannot read pixels from {type(source).__name__}")
