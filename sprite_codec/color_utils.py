#!/usr/bin/env python3
"""
Color parsing and quantization utilities
Snaps 8-bit channels to the bit depths of console color spaces
"""

from enum import Enum
from typing import Optional, Tuple, Union

from .constants import ALPHA_THRESHOLD, RGB888_MAX_VALUE, TRANSPARENT_COLOR

RGB = Tuple[int, int, int]
ColorLike = Union[str, Tuple[int, ...]]


class PaletteSpace(Enum):
    """Color spaces a console profile can restrict colors to"""

    NONE = 'none'
    FIXED = 'fixed'
    RGB555 = 'rgb555'
    RGB333 = 'rgb333'
    RGB444 = 'rgb444'
    RGB222 = 'rgb222'
    RGB565 = 'rgb565'

    @property
    def channel_bits(self) -> Optional[RGB]:
        """Bits per (r, g, b) channel, or None for non-arithmetic spaces."""
        return _CHANNEL_BITS.get(self)

    @property
    def is_arithmetic(self) -> bool:
        return self in _CHANNEL_BITS


_CHANNEL_BITS = {
    PaletteSpace.RGB555: (5, 5, 5),
    PaletteSpace.RGB333: (3, 3, 3),
    PaletteSpace.RGB444: (4, 4, 4),
    PaletteSpace.RGB222: (2, 2, 2),
    PaletteSpace.RGB565: (5, 6, 5),
}


def round_div(numerator: int, denominator: int) -> int:
    """Integer division rounding halves up, for non-negative operands."""
    return (2 * numerator + denominator) // (2 * denominator)


def to_n_bit(value: int, bits: int) -> int:
    """
    Reduce an 8-bit channel value to the given bit depth.

    Args:
        value: Channel value (0-255)
        bits: Target bit depth

    Returns:
        Channel value in 0..(2^bits - 1)
    """
    return round_div(value * ((1 << bits) - 1), RGB888_MAX_VALUE)


def expand_n_bit(value: int, bits: int) -> int:
    """
    Expand an n-bit channel value back to the 8-bit range.

    Args:
        value: Channel value (0..2^bits - 1)
        bits: Source bit depth

    Returns:
        Channel value in 0-255
    """
    return round_div(value * RGB888_MAX_VALUE, (1 << bits) - 1)


def snap_channel(value: int, bits: int) -> int:
    return expand_n_bit(to_n_bit(value, bits), bits)


def parse_color(color: ColorLike) -> Tuple[int, int, int, int]:
    """
    Parse a color into an (r, g, b, a) tuple.

    Accepts '#RRGGBB', 'RRGGBB', '#RGB', '#RRGGBBAA' hex strings and
    (r, g, b) or (r, g, b, a) tuples.

    Raises:
        ValueError: If the color cannot be parsed
    """
    if isinstance(color, str):
        text = color.strip()
        if text.startswith('#'):
            text = text[1:]
        if len(text) == 3:
            text = ''.join(ch * 2 for ch in text)
        if len(text) not in (6, 8):
            raise ValueError(f"Invalid hex color: {color!r}")
        try:
            value = int(text, 16)
        except ValueError:
            raise ValueError(f"Invalid hex color: {color!r}") from None
        if len(text) == 6:
            return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255
        return (value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF

    components = tuple(color)
    if len(components) not in (3, 4):
        raise ValueError(f"Expected 3 or 4 color components, got {len(components)}")
    if any(not 0 <= int(c) <= 255 for c in components):
        raise ValueError(f"Color components must be in 0-255: {components}")
    if len(components) == 3:
        return int(components[0]), int(components[1]), int(components[2]), 255
    return tuple(int(c) for c in components)


def is_transparent(color: Optional[ColorLike]) -> bool:
    """Check whether a color stands for transparency rather than a palette entry."""
    if color is None:
        return True
    if isinstance(color, str) and color.strip().lower() == TRANSPARENT_COLOR:
        return True
    return parse_color(color)[3] < ALPHA_THRESHOLD


def to_rgb(color: ColorLike) -> RGB:
    r, g, b, _ = parse_color(color)
    return r, g, b


def rgb_to_hex(rgb: RGB) -> str:
    return '#{:02X}{:02X}{:02X}'.format(*rgb)


def normalize_color(color: ColorLike) -> str:
    """Normalize any accepted color form to upper-case '#RRGGBB'."""
    return rgb_to_hex(to_rgb(color))


def snap_color(color: ColorLike, space: PaletteSpace) -> str:
    """
    Snap a color to the values representable in an arithmetic color space.

    Alpha is ignored; the result is the normalized '#RRGGBB' of the
    re-expanded channels. Snapping an already snapped color is a no-op.

    Raises:
        ValueError: If the space has no channel bit depths
    """
    bits = space.channel_bits
    if bits is None:
        raise ValueError(f"Color space {space.value} is not arithmetic")
    r, g, b = to_rgb(color)
    return rgb_to_hex((
        snap_channel(r, bits[0]),
        snap_channel(g, bits[1]),
        snap_channel(b, bits[2]),
    ))


def quantize_channels(color: ColorLike, space: PaletteSpace) -> RGB:
    """Reduce a color to its n-bit channel values in an arithmetic space."""
    bits = space.channel_bits
    if bits is None:
        raise ValueError(f"Color space {space.value} is not arithmetic")
    r, g, b = to_rgb(color)
    return to_n_bit(r, bits[0]), to_n_bit(g, bits[1]), to_n_bit(b, bits[2])
