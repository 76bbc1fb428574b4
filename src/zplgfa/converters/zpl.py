"""Convert images to ZPL ^GF (Graphic Field) commands."""

import io
import logging

from PIL import Image, UnidentifiedImageError

from zplgfa.converters.color import luminance
from zplgfa.converters.compression import REPEAT_ROW, compress_ascii
from zplgfa.converters.monochrome import monochrome_row, row_byte_width, to_hex
from zplgfa.converters.pixels import PixelGrid, as_pixel_grid
from zplgfa.models.graphic import GraphicField, GraphicType

logger = logging.getLogger(__name__)

ZPL_START = b"^XA,^FS\n^FO0,0\n"
ZPL_END = b"^FS,^XZ\n"


class ConversionError(Exception):
    """Exception raised when an image cannot be converted."""

    pass


class ImageTooLargeError(ConversionError):
    """Exception raised when an image has more pixels than allowed."""

    pass


def load_image(data: bytes, max_pixels: int = 0) -> Image.Image:
    """Decode image file contents (PNG, JPEG, GIF, ...) with Pillow.

    Pillow reads the header first, so the pixel limit is checked before
    any pixel data is decoded.

    Args:
        data: Image file contents.
        max_pixels: Largest allowed width * height, 0 for no limit.

    Raises:
        ImageTooLargeError: If the image exceeds ``max_pixels`` or Pillow's
            decompression bomb limit.
        ConversionError: If the data is not a readable image.
    """
    try:
        image = Image.open(io.BytesIO(data))
    except Image.DecompressionBombError as e:
        raise ImageTooLargeError(str(e)) from e
    except (UnidentifiedImageError, OSError) as e:
        raise ConversionError(f"Could not decode image: {e}") from e

    width, height = image.size
    if max_pixels and width * height > max_pixels:
        image.close()
        raise ImageTooLargeError(f"Image is {width}x{height}, limit is {max_pixels} pixels")

    try:
        image.load()
    except Image.DecompressionBombError as e:
        raise ImageTooLargeError(str(e)) from e
    except OSError as e:
        raise ConversionError(f"Could not decode image: {e}") from e
    return image


def encode_graphic_field(
    source: Image.Image | PixelGrid,
    graphic_type: GraphicType | str = GraphicType.COMPRESSED_ASCII,
) -> GraphicField:
    """Encode an image as a Graphic Field.

    Every pixel is flattened to luminance and thresholded to one bit. Rows
    are then written as hex lines (ASCII), raw bytes (BINARY) or compressed
    hex (COMPRESSED_ASCII). In compressed mode a row identical to the one
    before it is written as ``:``.

    An image with no pixels gives an empty field with zero row width.

    Args:
        source: Pillow image or any pixel grid.
        graphic_type: Output data format.

    Returns:
        The encoded field.
    """
    graphic_type = GraphicType.parse(graphic_type)
    grid = as_pixel_grid(source)
    width, height = grid.size

    if width <= 0 or height <= 0:
        logger.debug(f"Empty image ({width}x{height}), writing empty graphic field")
        return GraphicField(graphic_type=graphic_type, body=b"", row_bytes=0, total_bytes=0)

    row_bytes = row_byte_width(width)
    body = bytearray()
    last_row: str | None = None

    for y in range(height):
        row = monochrome_row(grid, y)

        if graphic_type == GraphicType.BINARY:
            body += row
        elif graphic_type == GraphicType.ASCII:
            body += to_hex(row).encode("ascii") + b"\n"
        else:
            compressed = compress_ascii(to_hex(row))
            if compressed == last_row:
                body += REPEAT_ROW.encode("ascii")
            else:
                body += compressed.encode("ascii")
            last_row = compressed

    field = GraphicField(
        graphic_type=graphic_type,
        body=bytes(body),
        row_bytes=row_bytes,
        total_bytes=row_bytes * height,
    )
    logger.debug(
        f"Encoded {width}x{height} image as {graphic_type}: "
        f"{field.byte_count} bytes for {field.total_bytes} bitmap bytes"
    )
    return field


def image_to_graphic_field(
    source: Image.Image | PixelGrid,
    graphic_type: GraphicType | str = GraphicType.COMPRESSED_ASCII,
) -> bytes:
    """Convert an image to a ^GF command (header and data).

    ^GF format:
    ^GF<A|B>,<byte_count>,<total_bytes>,<bytes_per_row>,\\n<data>
    """
    return encode_graphic_field(source, graphic_type).to_bytes()


def image_to_zpl(
    source: Image.Image | PixelGrid,
    graphic_type: GraphicType | str = GraphicType.COMPRESSED_ASCII,
) -> bytes:
    """Convert an image to a complete ZPL label.

    The graphic field is placed at the origin between ^XA and ^XZ.
    """
    return ZPL_START + image_to_graphic_field(source, graphic_type) + ZPL_END


def flatten_image(source: Image.Image | PixelGrid) -> Image.Image:
    """Flatten an image to 16-bit grayscale (Pillow mode ``I;16``).

    Each pixel holds the luminance the encoder would compute for it, so
    encoding the result gives the same field as encoding the source.
    """
    grid = as_pixel_grid(source)
    width, height = grid.size
    if not width or not height:
        return Image.new("I;16", (max(width, 0), max(height, 0)))
    # I;16 is little-endian, two bytes per pixel
    data = b"".join(
        luminance(grid.rgba64_at(x, y)).to_bytes(2, "little") for y in range(height) for x in range(width)
    )
    return Image.frombytes("I;16", (width, height), data)
