#!/usr/bin/env python3
"""
Console palette utilities
Serializes a sprite's ordered colors into console-native palette buffers
"""

import struct
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple

from .color_utils import (
    ColorLike, PaletteSpace, expand_n_bit, normalize_color, quantize_channels,
    to_rgb
)
from .console_palettes import (
    GAMEBOY_PALETTE, MSX_PALETTE, NES_PALETTE, SMS_PALETTE, FixedPalette,
    nes_register_value
)
from .constants import (
    BGR555_BLUE_MASK, BGR555_BLUE_SHIFT, BGR555_GREEN_MASK, BGR555_GREEN_SHIFT,
    BGR555_RED_MASK, BGR555_RED_SHIFT
)
from .exceptions import PaletteColorError
from .logging_config import get_logger

logger = get_logger('palette_utils')


class PaletteFormat(Enum):
    """Palette buffer layouts, valued by their short format name"""

    SMS_CRAM = 'sms_cram'              # 1 byte, --BBGGRR
    GENESIS_CRAM = 'genesis_cram'      # 2 bytes, 3 bits/channel shifted left
    BGR555 = 'bgr555'                  # 2 bytes little-endian
    MSX2_PALETTE = 'msx2_palette'      # 2 bytes, V9938/V9958 palette register
    GAMEGEAR_CRAM = 'gamegear_cram'    # 2 bytes little-endian RGB444
    NES_REGISTER = 'nes_register'      # 1 byte PPU palette register
    GAMEBOY_SHADE = 'gameboy_shade'    # 1 byte shade 0-3
    MSX1_INDEX = 'msx1_index'          # 1 byte VDP color 1-15

    @property
    def bytes_per_color(self) -> int:
        return _ENCODERS[self][1]


def rgb888_to_bgr555(r: int, g: int, b: int) -> int:
    """
    Convert RGB888 color to BGR555.

    Args:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)

    Returns:
        16-bit BGR555 color value
    """
    r5, g5, b5 = quantize_channels((r, g, b), PaletteSpace.RGB555)

    return (
        (b5 << BGR555_BLUE_SHIFT)
        | (g5 << BGR555_GREEN_SHIFT)
        | (r5 << BGR555_RED_SHIFT)
    )


def bgr555_to_rgb888(bgr555: int) -> Tuple[int, int, int]:
    """
    Convert BGR555 color to RGB888.

    Args:
        bgr555: 16-bit BGR555 color value

    Returns:
        Tuple of (r, g, b) values in 0-255 range
    """
    b = (bgr555 & BGR555_BLUE_MASK) >> BGR555_BLUE_SHIFT
    g = (bgr555 & BGR555_GREEN_MASK) >> BGR555_GREEN_SHIFT
    r = (bgr555 & BGR555_RED_MASK) >> BGR555_RED_SHIFT

    return expand_n_bit(r, 5), expand_n_bit(g, 5), expand_n_bit(b, 5)


def bgr555_bytes(color: ColorLike) -> bytes:
    """Two-byte little-endian BGR555 entry (Game Boy Color, SNES, GBA)."""
    return struct.pack('<H', rgb888_to_bgr555(*to_rgb(color)))


def sms_cram_byte(color: ColorLike) -> int:
    """
    Master System CRAM byte for a color.

    Colors from the hardware table use their listed code; anything else is
    reduced to 2 bits per channel as --BBGGRR.
    """
    code = SMS_PALETTE.code_for(color)
    if code is not None:
        return code
    r2, g2, b2 = quantize_channels(color, PaletteSpace.RGB222)
    return (b2 << 4) | (g2 << 2) | r2


def genesis_cram_bytes(color: ColorLike) -> bytes:
    """Genesis CRAM entry: low byte GGG0RRR0, high byte 0000BBB0."""
    r3, g3, b3 = quantize_channels(color, PaletteSpace.RGB333)
    return bytes(((g3 << 5) | (r3 << 1), b3 << 1))


def msx2_palette_bytes(color: ColorLike) -> bytes:
    """MSX2/2+ palette register pair: 0RRR0GGG then 0BBB0000."""
    r3, g3, b3 = quantize_channels(color, PaletteSpace.RGB333)
    return bytes(((r3 << 4) | g3, b3 << 4))


def gamegear_cram_bytes(color: ColorLike) -> bytes:
    """Game Gear CRAM entry, little-endian ----BBBBGGGGRRRR."""
    r4, g4, b4 = quantize_channels(color, PaletteSpace.RGB444)
    return bytes(((g4 << 4) | r4, b4))


def _fixed_code(palette: FixedPalette, color: ColorLike):
    code = palette.code_for(color)
    if code is None:
        color_hex = normalize_color(color)
        raise PaletteColorError(
            f"Color {color_hex} is not in the {palette.name} palette", [color_hex]
        )
    return code


def nes_register_byte(color: ColorLike) -> int:
    """PPU palette register value for an NES color."""
    return nes_register_value(_fixed_code(NES_PALETTE, color))


def gameboy_shade(color: ColorLike) -> int:
    """Game Boy DMG shade (0-3) for one of the four LCD colors."""
    return _fixed_code(GAMEBOY_PALETTE, color)


def msx1_color_index(color: ColorLike) -> int:
    """TMS9918A color index (1-15) for an MSX1 color."""
    return _fixed_code(MSX_PALETTE, color)


_ENCODERS: Dict[PaletteFormat, Tuple[Callable[[ColorLike], bytes], int]] = {
    PaletteFormat.SMS_CRAM: (lambda c: bytes((sms_cram_byte(c),)), 1),
    PaletteFormat.GENESIS_CRAM: (genesis_cram_bytes, 2),
    PaletteFormat.BGR555: (bgr555_bytes, 2),
    PaletteFormat.MSX2_PALETTE: (msx2_palette_bytes, 2),
    PaletteFormat.GAMEGEAR_CRAM: (gamegear_cram_bytes, 2),
    PaletteFormat.NES_REGISTER: (lambda c: bytes((nes_register_byte(c),)), 1),
    PaletteFormat.GAMEBOY_SHADE: (lambda c: bytes((gameboy_shade(c),)), 1),
    PaletteFormat.MSX1_INDEX: (lambda c: bytes((msx1_color_index(c),)), 1),
}


def color_to_palette_bytes(color: ColorLike, palette_format: PaletteFormat) -> bytes:
    """Encode a single color as one palette entry."""
    return _ENCODERS[palette_format][0](color)


def serialize_palette(colors: Sequence[ColorLike], palette_format: PaletteFormat,
                      slot_count: int) -> bytes:
    """
    Serialize slot-ordered colors into a fixed-size palette buffer.

    Slot 0 is the transparent slot and is always written as zero bytes.
    colors[0] goes to slot 1, colors[1] to slot 2 and so on. Slots beyond
    the used colors, and None entries, are zero filled.

    Args:
        colors: Opaque colors in slot order (slot 1 first), None for unused slots
        palette_format: Target entry layout
        slot_count: Total number of palette slots, including slot 0

    Returns:
        slot_count * bytes_per_color bytes

    Raises:
        ValueError: If the colors don't fit in slot_count - 1 slots
        PaletteColorError: If a fixed-palette format gets a color outside its table
    """
    if len(colors) + 1 > slot_count:
        raise ValueError(
            f"{len(colors)} colors don't fit in a {slot_count}-slot palette"
        )

    entry_size = palette_format.bytes_per_color
    output = bytearray(slot_count * entry_size)
    for slot, color in enumerate(colors, start=1):
        if color is None:
            continue
        entry = color_to_palette_bytes(color, palette_format)
        output[slot * entry_size:(slot + 1) * entry_size] = entry

    logger.debug(
        f"Serialized {len(colors)} colors as {palette_format.value} "
        f"({len(output)} bytes)"
    )
    return bytes(output)


def decode_bgr555_palette(data: bytes) -> List[Tuple[int, int, int]]:
    """
    Decode a little-endian BGR555 palette buffer.

    Args:
        data: Palette bytes, 2 per color

    Returns:
        List of (r, g, b) tuples
    """
    count = len(data) // 2
    return [bgr555_to_rgb888(word) for word in struct.unpack(f'<{count}H', data[:count * 2])]
