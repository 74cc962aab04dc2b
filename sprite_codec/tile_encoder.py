#!/usr/bin/env python3
"""
Sprite frame to tile encoding
Turns RGBA frames into palette slots and packs them tile by tile
"""

import warnings
from typing import Iterator, List, Sequence

import numpy as np

from .color_mapping import ColorIndexMapping
from .console_palettes import MSX_PALETTE
from .constants import (
    ALPHA_THRESHOLD, BYTES_PER_TILE_1BPP, FALLBACK_SLOT, MSX_DEFAULT_FOREGROUND,
    MSX_LARGE_SPRITE_SIZE, TILE_HEIGHT, TILE_WIDTH, TRANSPARENT_SLOT
)
from .exceptions import DimensionError, UnmappedColorWarning
from .image_utils import as_rgba_array
from .logging_config import get_logger
from .tile_utils import TileFormat, encode_tile
from .validation import Validators

logger = get_logger('tile_encoder')


def frame_to_slots(frame, width: int, height: int,
                   mapping: ColorIndexMapping) -> np.ndarray:
    """
    Resolve every pixel of a frame to its palette slot.

    Pixels with alpha below 128 become slot 0. Opaque pixels are looked up
    by exact RGB. An opaque color missing from the mapping is written as
    slot 1, logged, and reported with UnmappedColorWarning.

    Args:
        frame: Row-major RGBA buffer
        width: Frame width
        height: Frame height
        mapping: Color to slot table

    Returns:
        (height, width) array of slot numbers
    """
    pixels = as_rgba_array(frame, width, height).reshape(-1, 4).astype(np.uint32)
    opaque = pixels[:, 3] >= ALPHA_THRESHOLD
    keys = (pixels[:, 0] << 16) | (pixels[:, 1] << 8) | pixels[:, 2]

    unique_keys, inverse = np.unique(keys, return_inverse=True)
    table = mapping.packed_table()
    lut = np.array([table.get(int(key), -1) for key in unique_keys], dtype=np.int32)
    slots = lut[inverse.reshape(-1)]

    unmapped = opaque & (slots < 0)
    if unmapped.any():
        for key in np.unique(keys[unmapped]):
            color = '#{:06X}'.format(int(key))
            logger.warning(f"Color {color} has no palette slot, using slot {FALLBACK_SLOT}")
            warnings.warn(
                f"Color {color} is missing from the color mapping",
                UnmappedColorWarning,
                stacklevel=2,
            )
        slots[unmapped] = FALLBACK_SLOT

    slots[~opaque] = TRANSPARENT_SLOT
    return slots.reshape(height, width)


def iter_tile_blocks(slots: np.ndarray, sprite_size: int = TILE_WIDTH) -> Iterator[np.ndarray]:
    """
    Yield 8x8 slot blocks in export order.

    With the default sprite size, tiles go left-to-right, top-to-bottom.
    With 16x16 sprites each 16x16 block is emitted as its four quadrants in
    top-left, bottom-left, top-right, bottom-right order.
    """
    height, width = slots.shape
    for block_y in range(0, height, sprite_size):
        for block_x in range(0, width, sprite_size):
            if sprite_size == TILE_WIDTH:
                yield slots[block_y:block_y + TILE_HEIGHT, block_x:block_x + TILE_WIDTH]
                continue
            for dx in range(0, sprite_size, TILE_WIDTH):
                for dy in range(0, sprite_size, TILE_HEIGHT):
                    y = block_y + dy
                    x = block_x + dx
                    yield slots[y:y + TILE_HEIGHT, x:x + TILE_WIDTH]


def _check_frame_size(width: int, height: int, sprite_size: int) -> None:
    result = Validators.validate_tile_dimensions(width, height, sprite_size)
    if not result.valid:
        raise DimensionError(result.message, result.issues)


def _check_sprite_size(tile_format: TileFormat, sprite_size: int) -> None:
    if sprite_size == TILE_WIDTH:
        return
    if sprite_size == MSX_LARGE_SPRITE_SIZE and tile_format is TileFormat.MONOCHROME_1BPP:
        return
    raise ValueError(f"Sprite size {sprite_size} is not supported for {tile_format.value}")


def encode_frame(frame, width: int, height: int, mapping: ColorIndexMapping,
                 tile_format: TileFormat, sprite_size: int = TILE_WIDTH) -> bytes:
    """
    Encode one RGBA frame as tile data.

    Args:
        frame: Row-major RGBA buffer
        width: Frame width, a multiple of sprite_size
        height: Frame height, a multiple of sprite_size
        mapping: Color to slot table
        tile_format: Target tile layout
        sprite_size: 8, or 16 for MSX1 16x16 sprite patterns

    Returns:
        (width / 8) * (height / 8) tiles of tile_format.bytes_per_tile bytes

    Raises:
        DimensionError: If the frame doesn't divide into whole tiles
    """
    _check_sprite_size(tile_format, sprite_size)
    _check_frame_size(width, height, sprite_size)

    slots = frame_to_slots(frame, width, height, mapping)
    output = bytearray()
    for block in iter_tile_blocks(slots, sprite_size):
        output.extend(encode_tile(block.ravel().tolist(), tile_format))
    return bytes(output)


def encode_frames(frames: Sequence, width: int, height: int,
                  mapping: ColorIndexMapping, tile_format: TileFormat,
                  sprite_size: int = TILE_WIDTH) -> bytes:
    """
    Encode frames in order and concatenate their tile data.

    All frames share one mapping and one size. Dimensions are checked once,
    before any frame is encoded.
    """
    _check_sprite_size(tile_format, sprite_size)
    _check_frame_size(width, height, sprite_size)

    chunks: List[bytes] = []
    for index, frame in enumerate(frames):
        chunks.append(encode_frame(frame, width, height, mapping, tile_format, sprite_size))
        logger.debug(f"Encoded frame {index} ({len(chunks[-1])} bytes)")

    data = b''.join(chunks)
    logger.debug(
        f"Encoded {len(chunks)} frames as {tile_format.value}: {len(data)} bytes"
    )
    return data


def tiles_per_frame(width: int, height: int) -> int:
    return (width // TILE_WIDTH) * (height // TILE_HEIGHT)


def msx_foreground_index(mapping: ColorIndexMapping) -> int:
    """
    VDP color index of an MSX1 sprite's single color.

    White (15) when the sprite has no color or the color is not a TMS9918A color.
    """
    colors = mapping.colors
    if not colors:
        return MSX_DEFAULT_FOREGROUND
    index = MSX_PALETTE.code_for(colors[0])
    return index if index is not None else MSX_DEFAULT_FOREGROUND


def encode_color_table(tile_count: int, foreground_index: int) -> bytes:
    """
    MSX1 sprite color table: one byte per pattern row.

    Each byte is (foreground << 4) | 0, one byte for each of the 8 rows of
    every tile.
    """
    if not 0 <= foreground_index <= 15:
        raise ValueError(f"Foreground index must be 0-15, got {foreground_index}")
    return bytes([(foreground_index << 4) & 0xF0]) * (tile_count * BYTES_PER_TILE_1BPP)
