"""Flatten alpha-premultiplied 16-bit colors to a single luminance value.

Samples follow the convention of Go's ``color.Color.RGBA()``: four
channels in ``[0, 0xFFFF]`` with red, green and blue already
premultiplied by alpha.
"""

PixelSample = tuple[int, int, int, int]

MAX_CHANNEL = 0xFFFF

# Channel bounds for the pure white / pure black shortcut
WHITEISH_ABOVE = 0xFF00
BLACKISH_BELOW = 0x00FF


def _round(value: float) -> int:
    """Round half up."""
    return int(value + 0.5)


def gray16_model(r: int, g: int, b: int) -> int:
    """Convert 16-bit RGB to a 16-bit gray value.

    These coefficients (the fractions 0.299, 0.587 and 0.114) are the JFIF
    luma weights; 19595 + 38470 + 7471 equals 65536, so adding 1 << 15
    before the shift rounds half up. The resulting 8-bit luma is
    replicated into both bytes of the result.
    """
    y = (19595 * r + 38470 * g + 7471 * b + (1 << 15)) >> 16
    return (y >> 8) * 0x101


def flatten(sample: PixelSample) -> int:
    """Flatten a sample onto a white backdrop and return its luminance.

    The backdrop is OR-ed into each channel, not added.
    """
    r, g, b, a = sample
    alpha = a / MAX_CHANNEL
    val = MAX_CHANNEL - _round(MAX_CHANNEL * alpha)

    def composite(c: int) -> int:
        return val | _round(c * alpha)

    return gray16_model(composite(r), composite(g), composite(b))


WHITE = flatten((MAX_CHANNEL, MAX_CHANNEL, MAX_CHANNEL, MAX_CHANNEL))
BLACK = flatten((0, 0, 0, MAX_CHANNEL))


def shortcircuit(sample: PixelSample) -> int | None:
    """Return WHITE or BLACK for near-saturated or near-zero samples.

    All four channels, alpha included, must pass the bound. Returns None
    when the sample needs the full flatten.
    """
    if all(channel > WHITEISH_ABOVE for channel in sample):
        return WHITE
    if all(channel < BLACKISH_BELOW for channel in sample):
        return BLACK
    return None


def luminance(sample: PixelSample) -> int:
    """Luminance of a sample, using the shortcut where possible."""
    gray = shortcircuit(sample)
    if gray is None:
        gray = flatten(sample)
    return gray
