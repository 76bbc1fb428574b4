"""Threshold luminance to 1-bit rows and render them as hex."""

from zplgfa.converters.color import luminance
from zplgfa.converters.pixels import PixelGrid

# Gray values below this print as black
THRESHOLD = 0x8000


def is_black(gray: int) -> bool:
    """Check if a 16-bit gray value prints as black."""
    return gray < THRESHOLD


def row_byte_width(width: int) -> int:
    """Bytes needed for one row at one bit per pixel."""
    return (width + 7) // 8


def monochrome_row(grid: PixelGrid, y: int) -> bytes:
    """Pack row ``y`` of the grid into bytes.

    Pixels are packed left to right starting at the most significant bit.
    A set bit is a black (printed) dot. Unused low bits of the last byte
    stay zero (white).
    """
    width = grid.size[0]
    row = bytearray(row_byte_width(width))
    for x in range(width):
        if is_black(luminance(grid.rgba64_at(x, y))):
            row[x >> 3] |= 0x80 >> (x & 7)
    return bytes(row)


def to_hex(row: bytes) -> str:
    """Render row bytes as uppercase hex digits, most significant nibble first."""
    return row.hex().upper()
