"""Pytest configuration and fixtures."""

import io

import pytest
from PIL import Image, ImageDraw

from zplgfa.converters.compression import HIGH_CODES, LOW_CODES


@pytest.fixture
def bar_image() -> Image.Image:
    """16x4 white image with the left half of rows 1 and 2 black.

    Rows as hex: 0000, FF00, FF00, 0000.
    """
    image = Image.new("L", (16, 4), color=255)
    draw = ImageDraw.Draw(image)
    draw.rectangle([(0, 1), (7, 2)], fill=0)
    return image


@pytest.fixture
def bar_png(bar_image: Image.Image) -> bytes:
    """The bar image encoded as PNG."""
    buf = io.BytesIO()
    bar_image.save(buf, format="PNG")
    return buf.getvalue()


def decode_compressed(body: str, row_hex_len: int) -> list[str]:
    """Expand a compressed ^GF body back into hex rows.

    Test helper only; the package itself does not decode.
    """
    rows: list[str] = []
    current = ""
    count = 0
    for char in body:
        if char in HIGH_CODES[1:]:
            count += 20 * HIGH_CODES.index(char)
            continue
        if char in LOW_CODES[1:]:
            count += LOW_CODES.index(char)
            continue
        if char == ":":
            rows.append(rows[-1])
            continue
        if char == ",":
            current += "0" * (row_hex_len - len(current))
        elif char == "!":
            current += "F" * (row_hex_len - len(current))
        else:
            current += char * (count or 1)
            count = 0
        if len(current) >= row_hex_len:
            assert len(current) == row_hex_len, f"Row overflow: {current}"
            rows.append(current)
            current = ""
    assert current == "", f"Trailing partial row: {current}"
    return rows


@pytest.fixture
def decode_rows():
    """Decoder for compressed ^GF bodies."""
    return decode_compressed
