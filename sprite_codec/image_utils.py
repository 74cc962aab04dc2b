"""
Image helpers: RGBA frame buffers, PNG loading and tile previews.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from .color_utils import ColorLike, to_rgb
from .constants import TILE_HEIGHT, TILE_WIDTH
from .logging_config import get_logger
from .tile_utils import TileFormat, decode_tiles

logger = get_logger('image_utils')


def as_rgba_array(frame, width: int, height: int) -> np.ndarray:
    """
    View a row-major RGBA frame as a (height, width, 4) uint8 array.

    Args:
        frame: bytes, bytearray, memoryview, PIL image or numpy array holding
            width * height * 4 values
        width: Frame width in pixels
        height: Frame height in pixels

    Returns:
        numpy array of shape (height, width, 4)

    Raises:
        ValueError: If the buffer size doesn't match the dimensions
    """
    if isinstance(frame, Image.Image):
        if frame.size != (width, height):
            raise ValueError(f"Image is {frame.size[0]}x{frame.size[1]}, expected {width}x{height}")
        return np.asarray(frame.convert('RGBA'), dtype=np.uint8)

    if isinstance(frame, (bytes, bytearray, memoryview)):
        pixels = np.frombuffer(frame, dtype=np.uint8)
    else:
        pixels = np.asarray(frame, dtype=np.uint8)

    expected = width * height * 4
    if pixels.size != expected:
        raise ValueError(
            f"Expected {expected} RGBA bytes for {width}x{height}, got {pixels.size}"
        )
    return pixels.reshape(height, width, 4)


def load_png_frame(path: str | Path) -> np.ndarray:
    """Load an image file as a (height, width, 4) RGBA array."""
    with Image.open(path) as img:
        frame = np.asarray(img.convert('RGBA'), dtype=np.uint8)
    logger.debug(f"Loaded {path}: {frame.shape[1]}x{frame.shape[0]}")
    return frame


def render_tiles(
    tile_data: bytes,
    width_tiles: int,
    height_tiles: int,
    tile_format: TileFormat,
    colors: Sequence[ColorLike | None],
) -> Image.Image:
    """
    Render encoded tile data back to an RGBA image.

    Slot 0 is drawn transparent and slot n uses colors[n - 1]. Slots with no
    color (past the end of colors, or None) are drawn as grayscale.

    Args:
        tile_data: Encoded tiles, left-to-right and top-to-bottom
        width_tiles: Width in tiles
        height_tiles: Height in tiles
        tile_format: Layout of tile_data
        colors: Slot-ordered colors, slot 1 first

    Returns:
        PIL Image of (width_tiles * 8) x (height_tiles * 8) pixels
    """
    tile_count = width_tiles * height_tiles
    expected_size = tile_count * tile_format.bytes_per_tile
    if len(tile_data) < expected_size:
        logger.debug(f"Padded tile data from {len(tile_data)} to {expected_size} bytes")
        tile_data = tile_data + b'\x00' * (expected_size - len(tile_data))

    max_slot = tile_format.max_slot
    lut = np.zeros((max_slot + 1, 4), dtype=np.uint8)
    for slot in range(1, max_slot + 1):
        if slot <= len(colors) and colors[slot - 1] is not None:
            lut[slot, :3] = to_rgb(colors[slot - 1])
        else:
            gray = slot * 255 // max_slot
            lut[slot, :3] = (gray, gray, gray)
        lut[slot, 3] = 255

    slots = np.zeros((height_tiles * TILE_HEIGHT, width_tiles * TILE_WIDTH), dtype=np.uint8)
    tiles = decode_tiles(tile_data, tile_count, tile_format)
    for index, tile in enumerate(tiles):
        ty, tx = divmod(index, width_tiles)
        block = np.array(tile, dtype=np.uint8).reshape(TILE_HEIGHT, TILE_WIDTH)
        slots[ty * TILE_HEIGHT:(ty + 1) * TILE_HEIGHT,
              tx * TILE_WIDTH:(tx + 1) * TILE_WIDTH] = block

    return Image.fromarray(lut[slots])
