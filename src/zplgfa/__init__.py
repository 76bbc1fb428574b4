"""zplgfa - convert images to ZPL Graphic Fields."""

from zplgfa.converters import (
    ConversionError,
    compress_ascii,
    encode_graphic_field,
    flatten_image,
    image_to_graphic_field,
    image_to_zpl,
)
from zplgfa.models import GraphicField, GraphicType

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "GraphicField",
    "GraphicType",
    "compress_ascii",
    "encode_graphic_field",
    "flatten_image",
    "image_to_graphic_field",
    "image_to_zpl",
]
