#!/usr/bin/env python3
"""
Console profiles
Immutable descriptors of each console's sprite constraints and export formats
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .color_utils import ColorLike, PaletteSpace, normalize_color, snap_color
from .console_palettes import (
    GAMEBOY_PALETTE, MSX_PALETTE, NES_PALETTE, SMS_PALETTE, FixedPalette
)
from .constants import (
    DEFAULT_COLORS_PER_ROW, EXT_1BPP, EXT_2BPP, EXT_4BPP, EXT_8BPP, EXT_CHR,
    PALETTE_SLOTS_2BPP, PALETTE_SLOTS_4BPP, PALETTE_SLOTS_8BPP, TILE_WIDTH
)
from .palette_utils import PaletteFormat
from .tile_utils import TileFormat
from .validation import ValidationResult, Validators


class ConsoleKind(Enum):
    DEFAULT = 'default'
    NES = 'nes'
    GAMEBOY = 'gameboy'
    GBC = 'gbc'
    GENESIS = 'genesis'
    SMS = 'sms'
    GAMEGEAR = 'gamegear'
    GBA = 'gba'
    GBA8BPP = 'gba8bpp'
    SNES = 'snes'
    MSX = 'msx'
    MSX2PLUS = 'msx2plus'
    DREAMCAST = 'dreamcast'


@dataclass(frozen=True)
class ConsoleProfile:
    """
    Everything the codec needs to know about one console.

    The kind-specific behavior comes from palette_space: fixed-palette
    consoles check colors against ``palette``, arithmetic spaces snap
    channels to their bit depths, and ``none`` leaves colors alone.
    """

    id: str
    name: str
    kind: ConsoleKind
    palette_space: PaletteSpace = PaletteSpace.NONE
    palette: Optional[FixedPalette] = None
    max_colors: Optional[int] = None
    tile_size: Optional[int] = None
    default_size: Optional[Tuple[int, int]] = None
    tile_format: Optional[TileFormat] = None
    palette_format: Optional[PaletteFormat] = None
    palette_slots: Optional[int] = None
    tile_extension: Optional[str] = None
    texture: bool = False
    badge: Optional[str] = None

    def __post_init__(self):
        if (self.palette_space is PaletteSpace.FIXED) != (self.palette is not None):
            raise ValueError(f"Profile {self.id}: a fixed palette space needs a palette table")

    def has_restrictions(self) -> bool:
        return (self.palette is not None or self.max_colors is not None
                or self.tile_size is not None or self.texture)

    def is_valid_color(self, color: ColorLike) -> bool:
        """Fixed palettes accept only their own colors; other spaces accept anything."""
        if self.palette is not None:
            return self.palette.code_for(color) is not None
        return True

    def quantize(self, color: ColorLike) -> Optional[str]:
        """
        Snap a color to what this console can display.

        Returns:
            Normalized '#RRGGBB', or None for a color outside a fixed palette
        """
        if self.palette_space is PaletteSpace.FIXED:
            return normalize_color(color) if self.is_valid_color(color) else None
        if self.palette_space is PaletteSpace.NONE:
            return normalize_color(color)
        return snap_color(color, self.palette_space)

    def validate_dimensions(self, width: int, height: int) -> ValidationResult:
        if self.texture:
            return Validators.validate_texture_dimensions(width, height)
        if not self.tile_size:
            return ValidationResult(True)
        return Validators.validate_tile_dimensions(width, height, self.tile_size)

    def validate_color_count(self, colors: Iterable[ColorLike]) -> ValidationResult:
        return Validators.validate_color_count(colors, self.max_colors, self.name)

    def validate_palette_membership(self, colors: Iterable[ColorLike]) -> ValidationResult:
        if self.palette is None:
            return ValidationResult(True)
        result, _ = Validators.validate_palette_membership(colors, self.palette, self.name)
        return result

    def palette_rows(self, colors_per_row: int = DEFAULT_COLORS_PER_ROW) -> List[List[str]]:
        """Fixed palette split into rows for a picker grid (empty for open spaces)."""
        if self.palette is None:
            return []
        colors = list(self.palette.colors)
        return [colors[i:i + colors_per_row] for i in range(0, len(colors), colors_per_row)]


def _tiled(profile_id, name, kind, space, max_colors, default_size, tile_format,
           palette_format, palette_slots, extension, badge, palette=None):
    return ConsoleProfile(
        id=profile_id,
        name=name,
        kind=kind,
        palette_space=space,
        palette=palette,
        max_colors=max_colors,
        tile_size=TILE_WIDTH,
        default_size=default_size,
        tile_format=tile_format,
        palette_format=palette_format,
        palette_slots=palette_slots,
        tile_extension=extension,
        badge=badge,
    )


DEFAULT_PROFILE = ConsoleProfile(id='default', name='Original', kind=ConsoleKind.DEFAULT)

NES_PROFILE = _tiled(
    'nes', 'NES / Famicom', ConsoleKind.NES, PaletteSpace.FIXED, 3, (16, 16),
    TileFormat.PLANAR_2BPP, PaletteFormat.NES_REGISTER, PALETTE_SLOTS_2BPP,
    EXT_CHR, 'NES', palette=NES_PALETTE,
)

GAMEBOY_PROFILE = _tiled(
    'gameboy', 'Game Boy (DMG)', ConsoleKind.GAMEBOY, PaletteSpace.FIXED, 3, (8, 16),
    TileFormat.INTERLEAVED_2BPP, PaletteFormat.GAMEBOY_SHADE, PALETTE_SLOTS_2BPP,
    EXT_2BPP, 'GB', palette=GAMEBOY_PALETTE,
)

GBC_PROFILE = _tiled(
    'gbc', 'Game Boy Color', ConsoleKind.GBC, PaletteSpace.RGB555, 3, (16, 16),
    TileFormat.INTERLEAVED_2BPP, PaletteFormat.BGR555, PALETTE_SLOTS_2BPP,
    EXT_2BPP, 'GBC',
)

GENESIS_PROFILE = _tiled(
    'genesis', 'Sega Genesis / Mega Drive', ConsoleKind.GENESIS, PaletteSpace.RGB333,
    15, (16, 16), TileFormat.PACKED_4BPP_HIGH, PaletteFormat.GENESIS_CRAM,
    PALETTE_SLOTS_4BPP, EXT_4BPP, 'GEN',
)

SMS_PROFILE = _tiled(
    'sms', 'Sega Master System', ConsoleKind.SMS, PaletteSpace.FIXED, 15, (8, 16),
    TileFormat.PACKED_4BPP_HIGH, PaletteFormat.SMS_CRAM, PALETTE_SLOTS_4BPP,
    EXT_4BPP, 'SMS', palette=SMS_PALETTE,
)

GAMEGEAR_PROFILE = _tiled(
    'gamegear', 'Sega Game Gear', ConsoleKind.GAMEGEAR, PaletteSpace.RGB444, 15, (8, 16),
    TileFormat.PACKED_4BPP_HIGH, PaletteFormat.GAMEGEAR_CRAM, PALETTE_SLOTS_4BPP,
    EXT_4BPP, 'GG',
)

SNES_PROFILE = _tiled(
    'snes', 'SNES / Super Famicom', ConsoleKind.SNES, PaletteSpace.RGB555, 15, (16, 16),
    TileFormat.BITPLANE_4BPP, PaletteFormat.BGR555, PALETTE_SLOTS_4BPP,
    EXT_4BPP, 'SNES',
)

GBA_PROFILE = _tiled(
    'gba', 'Game Boy Advance (4bpp)', ConsoleKind.GBA, PaletteSpace.RGB555, 15, (16, 16),
    TileFormat.PACKED_4BPP_LOW, PaletteFormat.BGR555, PALETTE_SLOTS_4BPP,
    EXT_4BPP, 'GBA',
)

GBA8BPP_PROFILE = _tiled(
    'gba8bpp', 'Game Boy Advance (8bpp)', ConsoleKind.GBA8BPP, PaletteSpace.RGB555, 255,
    (32, 32), TileFormat.LINEAR_8BPP, PaletteFormat.BGR555, PALETTE_SLOTS_8BPP,
    EXT_8BPP, 'GBA8',
)

MSX_PROFILE = _tiled(
    'msx', 'MSX (TMS9918)', ConsoleKind.MSX, PaletteSpace.FIXED, 1, (16, 16),
    TileFormat.MONOCHROME_1BPP, PaletteFormat.MSX1_INDEX, PALETTE_SLOTS_4BPP,
    EXT_1BPP, 'MSX', palette=MSX_PALETTE,
)

MSX2PLUS_PROFILE = _tiled(
    'msx2plus', 'MSX2+ (V9958)', ConsoleKind.MSX2PLUS, PaletteSpace.RGB333, 15, (16, 16),
    TileFormat.PACKED_4BPP_HIGH, PaletteFormat.MSX2_PALETTE, PALETTE_SLOTS_4BPP,
    EXT_4BPP, 'MSX2+',
)

DREAMCAST_PROFILE = ConsoleProfile(
    id='dreamcast',
    name='Sega Dreamcast',
    kind=ConsoleKind.DREAMCAST,
    palette_space=PaletteSpace.RGB565,
    default_size=(32, 32),
    texture=True,
    badge='DC',
)

BUILTIN_PROFILES = (
    DEFAULT_PROFILE,
    NES_PROFILE,
    GAMEBOY_PROFILE,
    GBC_PROFILE,
    GENESIS_PROFILE,
    SMS_PROFILE,
    GAMEGEAR_PROFILE,
    GBA_PROFILE,
    GBA8BPP_PROFILE,
    SNES_PROFILE,
    MSX_PROFILE,
    MSX2PLUS_PROFILE,
    DREAMCAST_PROFILE,
)
