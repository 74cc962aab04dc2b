#!/usr/bin/env python3
"""
Sprite export
Validates a sprite against a console profile and produces the console's
tile, palette and texture buffers
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .color_mapping import ColorIndexMapping, collect_colors
from .color_utils import ColorLike
from .console_profiles import ConsoleProfile
from .constants import EXT_COLOR_TABLE, EXT_PALETTE, EXT_PVR, EXT_RAW, TILE_WIDTH
from .exceptions import ColorLimitError, DimensionError, PaletteColorError
from .logging_config import get_logger
from .palette_utils import serialize_palette
from .pvr_utils import PixelFormat, encode_pvr, encode_texels
from .tile_encoder import (
    encode_color_table, encode_frames, msx_foreground_index, tiles_per_frame
)
from .tile_utils import TileFormat
from .validation import ValidationResult, Validators, distinct_opaque_colors

logger = get_logger('sprite_exporter')


@dataclass
class ExportResult:
    """Buffers produced by a tile export"""

    profile_id: str
    tile_data: bytes
    palette_data: Optional[bytes]
    color_table: Optional[bytes]
    frame_count: int
    tiles_per_frame: int
    tile_extension: str
    palette_colors: List[Optional[str]] = field(default_factory=list)
    palette_extension: str = EXT_PALETTE
    color_table_extension: str = EXT_COLOR_TABLE

    @property
    def tile_count(self) -> int:
        return self.frame_count * self.tiles_per_frame

    def files(self, base_name: str) -> dict:
        """File names mapped to their contents, for a file-writing collaborator."""
        output = {base_name + self.tile_extension: self.tile_data}
        if self.palette_data is not None:
            output[base_name + self.palette_extension] = self.palette_data
        if self.color_table is not None:
            output[base_name + self.color_table_extension] = self.color_table
        return output


def validate_export(profile: ConsoleProfile, width: int, height: int,
                    colors: Iterable[ColorLike]) -> List[ValidationResult]:
    """
    Run every export check for a profile.

    Returns:
        Failing results only; an empty list means the sprite can be exported
    """
    colors = list(colors)
    results = [
        profile.validate_dimensions(width, height),
        profile.validate_color_count(colors),
        profile.validate_palette_membership(colors),
    ]
    return [result for result in results if not result.valid]


def ensure_exportable(profile: ConsoleProfile, width: int, height: int,
                      colors: Iterable[ColorLike]) -> None:
    """
    Block an export that a console cannot represent.

    Raises:
        DimensionError: If the frame size breaks the tile or texture rules
        ColorLimitError: If there are more colors than the console allows
        PaletteColorError: If a fixed-palette console gets a foreign color
    """
    colors = list(colors)

    dimensions = profile.validate_dimensions(width, height)
    if not dimensions.valid:
        logger.info(f"Export blocked: {dimensions.message}")
        raise DimensionError(dimensions.message, dimensions.issues)

    count = profile.validate_color_count(colors)
    if not count.valid:
        logger.info(f"Export blocked: {count.message}")
        raise ColorLimitError(count.message, count.count, profile.max_colors)

    if profile.palette is not None:
        membership, missing = Validators.validate_palette_membership(
            colors, profile.palette, profile.name
        )
        if not membership.valid:
            logger.info(f"Export blocked: {membership.message}")
            raise PaletteColorError(membership.message, missing)


def export_tiles(profile: ConsoleProfile, frames: Sequence, width: int, height: int,
                 colors: Optional[Iterable[ColorLike]] = None,
                 include_palette: bool = True,
                 sprite_size: int = TILE_WIDTH,
                 hardware_shades: bool = False) -> ExportResult:
    """
    Export sprite frames as console tile data.

    Args:
        profile: Tiled console profile
        frames: Row-major RGBA buffers, all width x height
        width: Frame width
        height: Frame height
        colors: Distinct sprite colors in first-seen order; collected from
            the frames when omitted
        include_palette: Also serialize the palette
        sprite_size: 16 for MSX1 16x16 sprite patterns
        hardware_shades: Put Game Boy (DMG) colors on their LCD shades

    Returns:
        ExportResult with tile data, palette and (MSX1) color table

    Raises:
        ValueError: If the profile has no tile format
        DimensionError, ColorLimitError, PaletteColorError: If validation fails
    """
    if profile.tile_format is None:
        raise ValueError(f"{profile.name} has no tile format")

    frames = list(frames)
    if colors is None:
        colors = collect_colors(frames, width, height)
    colors = distinct_opaque_colors(colors)

    ensure_exportable(profile, width, height, colors)

    mapping = ColorIndexMapping.for_profile(colors, profile, hardware_shades)
    tile_data = encode_frames(frames, width, height, mapping, profile.tile_format, sprite_size)
    per_frame = tiles_per_frame(width, height)

    palette_data = None
    if include_palette and profile.palette_format is not None:
        palette_data = serialize_palette(
            mapping.palette_colors(), profile.palette_format, profile.palette_slots
        )

    color_table = None
    if profile.tile_format is TileFormat.MONOCHROME_1BPP:
        color_table = encode_color_table(len(frames) * per_frame, msx_foreground_index(mapping))

    logger.info(
        f"Exported {len(frames)} frame(s) for {profile.name}: "
        f"{len(tile_data)} bytes of tiles"
    )
    return ExportResult(
        profile_id=profile.id,
        tile_data=tile_data,
        palette_data=palette_data,
        color_table=color_table,
        frame_count=len(frames),
        tiles_per_frame=per_frame,
        tile_extension=profile.tile_extension,
        palette_colors=mapping.palette_colors(),
    )


def export_textures(profile: ConsoleProfile, frames: Sequence, width: int, height: int,
                    pixel_format: PixelFormat = PixelFormat.ARGB1555,
                    twiddled: bool = True,
                    include_global_index: bool = False,
                    raw: bool = False) -> List[bytes]:
    """
    Export each frame as a 16-bit texture.

    Args:
        profile: Texture console profile
        frames: Row-major RGBA buffers
        width: Texture width, power of two in [8, 1024]
        height: Texture height, power of two in [8, 1024]
        pixel_format: Texel layout
        twiddled: Store texels in Morton order (PVR only)
        include_global_index: Prepend a GBIX header holding the frame index
        raw: Produce bare little-endian texels with no header instead of PVR

    Returns:
        One buffer per frame

    Raises:
        ValueError: If the profile is not a texture profile
        DimensionError: If the dimensions are invalid
    """
    if not profile.texture:
        raise ValueError(f"{profile.name} does not export textures")

    dimensions = profile.validate_dimensions(width, height)
    if not dimensions.valid:
        logger.info(f"Export blocked: {dimensions.message}")
        raise DimensionError(dimensions.message, dimensions.issues)

    outputs = []
    for index, frame in enumerate(frames):
        if raw:
            outputs.append(encode_texels(frame, width, height, pixel_format))
        else:
            outputs.append(encode_pvr(
                frame, width, height, pixel_format, twiddled,
                global_index=index if include_global_index else None,
            ))

    logger.info(f"Exported {len(outputs)} texture(s) for {profile.name}")
    return outputs


def texture_extension(raw: bool) -> str:
    return EXT_RAW if raw else EXT_PVR
