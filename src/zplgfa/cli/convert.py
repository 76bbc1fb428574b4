"""CLI tool for converting image files to ZPL."""

import argparse
import logging
import sys
from pathlib import Path

from zplgfa.models.graphic import GraphicType


def main(argv: list[str] | None = None) -> int:
    """Main entry point for zplgfa-convert CLI."""
    parser = argparse.ArgumentParser(
        description="Convert an image file to a ZPL Graphic Field.",
        prog="zplgfa-convert",
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Path to image file (PNG, JPEG, GIF, ...)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="graphic_type",
        choices=[graphic_type.value for graphic_type in GraphicType],
        default=GraphicType.COMPRESSED_ASCII.value,
        help="Graphic field data format (default: compressed_ascii)",
    )
    parser.add_argument(
        "--field-only",
        action="store_true",
        help="Only write the ^GF command, without ^XA/^XZ",
    )
    parser.add_argument(
        "--flatten",
        action="store_true",
        help="Flatten the image to 16-bit grayscale before converting",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Check image exists
    if not args.image.exists():
        print(f"Error: Image file not found: {args.image}", file=sys.stderr)
        return 1

    from zplgfa.converters.zpl import (
        ConversionError,
        flatten_image,
        image_to_graphic_field,
        image_to_zpl,
        load_image,
    )

    try:
        image = load_image(args.image.read_bytes())
    except (ConversionError, OSError) as e:
        print(f"Error loading image: {e}", file=sys.stderr)
        return 1

    if args.flatten:
        image = flatten_image(image)

    graphic_type = GraphicType(args.graphic_type)
    if args.field_only:
        output = image_to_graphic_field(image, graphic_type)
    else:
        output = image_to_zpl(image, graphic_type)

    # Write output
    try:
        if args.output is None:
            sys.stdout.buffer.write(output)
            sys.stdout.buffer.flush()
        else:
            with open(args.output, "wb") as f:
                f.write(output)
            print(f"Converted to {args.output}", file=sys.stderr)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
