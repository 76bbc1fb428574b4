"""Image to ZPL Graphic Field converters."""

from zplgfa.converters.compression import compress_ascii
from zplgfa.converters.pixels import PILPixelGrid, PixelGrid, SampleGrid
from zplgfa.converters.zpl import (
    ConversionError,
    ImageTooLargeError,
    encode_graphic_field,
    flatten_image,
    image_to_graphic_field,
    image_to_zpl,
    load_image,
)

__all__ = [
    "ConversionError",
    "ImageTooLargeError",
    "PILPixelGrid",
    "PixelGrid",
    "SampleGrid",
    "compress_ascii",
    "encode_graphic_field",
    "flatten_image",
    "image_to_graphic_field",
    "image_to_zpl",
    "load_image",
]
