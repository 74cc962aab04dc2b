#!/usr/bin/env python3
"""
Fixed hardware palettes
Consoles whose colors are hardwired into the video chip, with the code the
hardware uses for each color (PPU register, shade, VDP index, CRAM byte)
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from .color_utils import ColorLike, normalize_color

PaletteCode = Union[int, str]


@dataclass(frozen=True)
class FixedPalette:
    """An enumerated hardware palette: ordered colors and their hardware codes"""

    name: str
    entries: Tuple[Tuple[str, PaletteCode], ...]
    _lookup: Dict[str, PaletteCode] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        lookup = {}
        for color, code in self.entries:
            # First entry wins for colors listed twice (NES black)
            lookup.setdefault(color.upper(), code)
        object.__setattr__(self, '_lookup', lookup)

    @property
    def colors(self) -> Tuple[str, ...]:
        return tuple(color for color, _ in self.entries)

    def __len__(self):
        return len(self.entries)

    def __contains__(self, color) -> bool:
        return self.code_for(color) is not None

    def code_for(self, color: ColorLike) -> Optional[PaletteCode]:
        """Return the hardware code for an exact (case-insensitive) match, else None."""
        try:
            key = normalize_color(color)
        except ValueError:
            return None
        return self._lookup.get(key)

    def codes_for(self, color: ColorLike) -> Tuple[PaletteCode, ...]:
        """Every hardware code a color is listed under."""
        key = normalize_color(color)
        return tuple(code for c, code in self.entries if c.upper() == key)


def nes_register_value(register: str) -> int:
    """Convert a PPU register string such as '$16' to its byte value."""
    return int(register.lstrip('$'), 16)


# Official NES palette, 54 usable colors in four brightness rows
NES_PALETTE = FixedPalette('NES', (
    ('#7C7C7C', '$00'), ('#0000FC', '$01'), ('#0000BC', '$02'), ('#4428BC', '$03'),
    ('#940084', '$04'), ('#A80020', '$05'), ('#A81000', '$06'), ('#881400', '$07'),
    ('#503000', '$08'), ('#007800', '$09'), ('#006800', '$0A'), ('#005800', '$0B'),
    ('#004058', '$0C'), ('#000000', '$0F'),
    ('#BCBCBC', '$10'), ('#0078F8', '$11'), ('#0058F8', '$12'), ('#6844FC', '$13'),
    ('#D800CC', '$14'), ('#E40058', '$15'), ('#F83800', '$16'), ('#E45C10', '$17'),
    ('#AC7C00', '$18'), ('#00B800', '$19'), ('#00A800', '$1A'), ('#00A844', '$1B'),
    ('#008888', '$1C'), ('#000000', '$1F'),
    ('#F8F8F8', '$20'), ('#3CBCFC', '$21'), ('#6888FC', '$22'), ('#9878F8', '$23'),
    ('#F878F8', '$24'), ('#F85898', '$25'), ('#F87858', '$26'), ('#FCA044', '$27'),
    ('#F8B800', '$28'), ('#B8F818', '$29'), ('#58D854', '$2A'), ('#58F898', '$2B'),
    ('#00E8D8', '$2C'), ('#787878', '$2D'),
    ('#FCFCFC', '$30'), ('#A4E4FC', '$31'), ('#B8B8F8', '$32'), ('#D8B8F8', '$33'),
    ('#F8B8F8', '$34'), ('#F8A4C0', '$35'), ('#F0D0B0', '$36'), ('#FCE0A8', '$37'),
    ('#F8D878', '$38'), ('#D8F878', '$39'), ('#B8F8B8', '$3A'), ('#B8F8D8', '$3B'),
    ('#00FCFC', '$3C'), ('#F8D8F8', '$3D'),
))

# Game Boy DMG green LCD shades, lightest to darkest
GAMEBOY_PALETTE = FixedPalette('Game Boy', (
    ('#9BBC0F', 0),
    ('#8BAC0F', 1),
    ('#306230', 2),
    ('#0F380F', 3),
))

# TMS9918A VDP colors 1-15 (0 is transparent)
MSX_PALETTE = FixedPalette('MSX', (
    ('#000000', 1),   # Black
    ('#21C842', 2),   # Medium green
    ('#5EDC78', 3),   # Light green
    ('#5455ED', 4),   # Dark blue
    ('#7D76FC', 5),   # Light blue
    ('#D4524D', 6),   # Dark red
    ('#42EBF5', 7),   # Cyan
    ('#FC5554', 8),   # Medium red
    ('#FF7978', 9),   # Light red
    ('#D4C154', 10),  # Dark yellow
    ('#E6CE80', 11),  # Light yellow
    ('#21B03B', 12),  # Dark green
    ('#C95BBA', 13),  # Magenta
    ('#CCCCCC', 14),  # Gray
    ('#FFFFFF', 15),  # White
))

# Master System RGB222 colors with their --BBGGRR CRAM byte
SMS_PALETTE = FixedPalette('Master System', (
    ('#000000', 0x00), ('#550000', 0x01), ('#005500', 0x04), ('#000055', 0x10),
    ('#555500', 0x05), ('#550055', 0x11), ('#005555', 0x14), ('#555555', 0x15),
    ('#AA0000', 0x02), ('#00AA00', 0x08), ('#0000AA', 0x20), ('#AAAA00', 0x0A),
    ('#AA00AA', 0x22), ('#00AAAA', 0x28), ('#AA5500', 0x06), ('#55AA00', 0x09),
    ('#0055AA', 0x24), ('#5500AA', 0x21), ('#AA0055', 0x12), ('#00AA55', 0x18),
    ('#55AA55', 0x19), ('#AA55AA', 0x26), ('#55AAAA', 0x29), ('#AAAAAA', 0x2A),
    ('#FF0000', 0x03), ('#00FF00', 0x0C), ('#0000FF', 0x30), ('#FFFF00', 0x0F),
    ('#FF00FF', 0x33), ('#00FFFF', 0x3C), ('#FF5500', 0x07), ('#55FF00', 0x0D),
    ('#0055FF', 0x34), ('#5500FF', 0x31), ('#FF0055', 0x13), ('#00FF55', 0x1C),
    ('#FF5555', 0x17), ('#55FF55', 0x1D), ('#5555FF', 0x35), ('#FFAA00', 0x0B),
    ('#FFAA55', 0x1B), ('#55FFAA', 0x2D), ('#AA55FF', 0x36), ('#AAFF55', 0x1E),
    ('#55AAFF', 0x39), ('#FF55AA', 0x27), ('#AAFFAA', 0x2E), ('#FFAAAA', 0x2B),
    ('#AAAAFF', 0x3A), ('#FFAAFF', 0x3B), ('#AAFFFF', 0x3E), ('#FFFFAA', 0x2F),
    ('#00AAFF', 0x38), ('#AA00FF', 0x32), ('#FF00AA', 0x23), ('#AAFF00', 0x0E),
    ('#FFFF55', 0x1F), ('#FF55FF', 0x37), ('#55FFFF', 0x3D), ('#AAAA55', 0x1A),
    ('#5555AA', 0x25), ('#00FFAA', 0x2C), ('#AA5555', 0x16), ('#FFFFFF', 0x3F),
))
