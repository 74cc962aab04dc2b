#!/usr/bin/env python3
"""
Tile encoding/decoding utilities
Bit packing of 8x8 slot tiles for every supported console tile format
"""

from enum import Enum
from typing import Callable, Dict, List, Sequence

from .constants import (
    BYTES_PER_TILE_1BPP, BYTES_PER_TILE_2BPP, BYTES_PER_TILE_4BPP,
    BYTES_PER_TILE_8BPP, PIXEL_1BPP_MASK, PIXEL_4BPP_MASK,
    PIXEL_8BPP_MASK, PIXELS_PER_TILE, TILE_BITPLANE_OFFSET, TILE_HEIGHT,
    TILE_PLANE_OFFSET_2BPP, TILE_WIDTH
)


class TileFormat(Enum):
    """Tile layouts, valued by their short format name"""

    PLANAR_2BPP = 'planar_2bpp'               # NES CHR
    INTERLEAVED_2BPP = 'interleaved_2bpp'     # Game Boy / Game Boy Color
    PACKED_4BPP_HIGH = 'packed_4bpp_high'     # Genesis, Master System, Game Gear, MSX2
    PACKED_4BPP_LOW = 'packed_4bpp_low'       # GBA
    BITPLANE_4BPP = 'bitplane_4bpp'           # SNES
    LINEAR_8BPP = 'linear_8bpp'               # GBA 8bpp
    MONOCHROME_1BPP = 'monochrome_1bpp'       # MSX1

    @property
    def bytes_per_tile(self) -> int:
        return _BYTES_PER_TILE[self]

    @property
    def bits_per_pixel(self) -> int:
        return _BITS_PER_PIXEL[self]

    @property
    def max_slot(self) -> int:
        return (1 << self.bits_per_pixel) - 1


_BYTES_PER_TILE = {
    TileFormat.PLANAR_2BPP: BYTES_PER_TILE_2BPP,
    TileFormat.INTERLEAVED_2BPP: BYTES_PER_TILE_2BPP,
    TileFormat.PACKED_4BPP_HIGH: BYTES_PER_TILE_4BPP,
    TileFormat.PACKED_4BPP_LOW: BYTES_PER_TILE_4BPP,
    TileFormat.BITPLANE_4BPP: BYTES_PER_TILE_4BPP,
    TileFormat.LINEAR_8BPP: BYTES_PER_TILE_8BPP,
    TileFormat.MONOCHROME_1BPP: BYTES_PER_TILE_1BPP,
}

_BITS_PER_PIXEL = {
    TileFormat.PLANAR_2BPP: 2,
    TileFormat.INTERLEAVED_2BPP: 2,
    TileFormat.PACKED_4BPP_HIGH: 4,
    TileFormat.PACKED_4BPP_LOW: 4,
    TileFormat.BITPLANE_4BPP: 4,
    TileFormat.LINEAR_8BPP: 8,
    TileFormat.MONOCHROME_1BPP: 1,
}


def _check_pixel_count(tile_pixels: Sequence[int]) -> None:
    if len(tile_pixels) != PIXELS_PER_TILE:
        raise ValueError(f"Expected {PIXELS_PER_TILE} pixels, got {len(tile_pixels)}")


def _check_bounds(data: bytes, offset: int, size: int) -> None:
    if offset < 0 or offset + size > len(data):
        raise IndexError(f"Tile data out of bounds at offset {offset}")


def _row_plane(tile_pixels: Sequence[int], y: int, bit: int) -> int:
    """Collect one bit of every pixel in a row, leftmost pixel in bit 7."""
    value = 0
    for x in range(TILE_WIDTH):
        if (int(tile_pixels[y * TILE_WIDTH + x]) >> bit) & 1:
            value |= 1 << (7 - x)
    return value


def encode_2bpp_planar_tile(tile_pixels: Sequence[int]) -> bytes:
    """
    Encode an 8x8 tile to NES CHR format.

    Bytes 0-7 hold bit 0 of every pixel, bytes 8-15 hold bit 1.

    Args:
        tile_pixels: List of 64 pixel values (0-3)

    Returns:
        16 bytes of encoded tile data

    Raises:
        ValueError: If tile_pixels doesn't contain exactly 64 values
    """
    _check_pixel_count(tile_pixels)
    output = bytearray(BYTES_PER_TILE_2BPP)
    for y in range(TILE_HEIGHT):
        output[y] = _row_plane(tile_pixels, y, 0)
        output[TILE_PLANE_OFFSET_2BPP + y] = _row_plane(tile_pixels, y, 1)
    return bytes(output)


def decode_2bpp_planar_tile(data: bytes, offset: int = 0) -> List[int]:
    """Decode a single NES CHR tile into 64 pixel values (0-3)."""
    _check_bounds(data, offset, BYTES_PER_TILE_2BPP)
    tile = []
    for y in range(TILE_HEIGHT):
        low = data[offset + y]
        high = data[offset + TILE_PLANE_OFFSET_2BPP + y]
        for x in range(TILE_WIDTH):
            bit = 7 - x
            tile.append(((low >> bit) & 1) | (((high >> bit) & 1) << 1))
    return tile


def encode_2bpp_interleaved_tile(tile_pixels: Sequence[int]) -> bytes:
    """
    Encode an 8x8 tile to Game Boy 2bpp format.

    Each row is stored as its low-bit byte followed by its high-bit byte.

    Args:
        tile_pixels: List of 64 pixel values (0-3)

    Returns:
        16 bytes of encoded tile data

    Raises:
        ValueError: If tile_pixels doesn't contain exactly 64 values
    """
    _check_pixel_count(tile_pixels)
    output = bytearray(BYTES_PER_TILE_2BPP)
    for y in range(TILE_HEIGHT):
        output[y * 2] = _row_plane(tile_pixels, y, 0)
        output[y * 2 + 1] = _row_plane(tile_pixels, y, 1)
    return bytes(output)


def decode_2bpp_interleaved_tile(data: bytes, offset: int = 0) -> List[int]:
    """Decode a single Game Boy 2bpp tile into 64 pixel values (0-3)."""
    _check_bounds(data, offset, BYTES_PER_TILE_2BPP)
    tile = []
    for y in range(TILE_HEIGHT):
        low = data[offset + y * 2]
        high = data[offset + y * 2 + 1]
        for x in range(TILE_WIDTH):
            bit = 7 - x
            tile.append(((low >> bit) & 1) | (((high >> bit) & 1) << 1))
    return tile


def encode_4bpp_packed_tile(tile_pixels: Sequence[int],
                            low_nibble_first: bool = False) -> bytes:
    """
    Encode an 8x8 tile to packed 4bpp (two pixels per byte).

    Genesis, Master System, Game Gear and MSX2 store the left pixel in the
    high nibble. The GBA stores the left pixel in the low nibble.

    Args:
        tile_pixels: List of 64 pixel values (0-15)
        low_nibble_first: Put the left pixel of each pair in the low nibble

    Returns:
        32 bytes of encoded tile data

    Raises:
        ValueError: If tile_pixels doesn't contain exactly 64 values
    """
    _check_pixel_count(tile_pixels)
    output = bytearray(BYTES_PER_TILE_4BPP)
    for i in range(0, PIXELS_PER_TILE, 2):
        left = int(tile_pixels[i]) & PIXEL_4BPP_MASK
        right = int(tile_pixels[i + 1]) & PIXEL_4BPP_MASK
        if low_nibble_first:
            output[i // 2] = (right << 4) | left
        else:
            output[i // 2] = (left << 4) | right
    return bytes(output)


def decode_4bpp_packed_tile(data: bytes, offset: int = 0,
                            low_nibble_first: bool = False) -> List[int]:
    """Decode a single packed 4bpp tile into 64 pixel values (0-15)."""
    _check_bounds(data, offset, BYTES_PER_TILE_4BPP)
    tile = []
    for byte in data[offset:offset + BYTES_PER_TILE_4BPP]:
        high, low = byte >> 4, byte & PIXEL_4BPP_MASK
        tile.extend((low, high) if low_nibble_first else (high, low))
    return tile


def decode_4bpp_tile(data: bytes, offset: int = 0) -> List[int]:
    """
    Decode a single 8x8 4bpp SNES tile.

    Args:
        data: Raw tile data bytes
        offset: Starting offset in the data

    Returns:
        List of 64 pixel values (0-15)

    Raises:
        IndexError: If offset + BYTES_PER_TILE_4BPP exceeds data length
    """
    _check_bounds(data, offset, BYTES_PER_TILE_4BPP)

    tile = []
    for y in range(TILE_HEIGHT):
        # Read bitplanes for this row
        bp0 = data[offset + y * 2]
        bp1 = data[offset + y * 2 + 1]
        bp2 = data[offset + TILE_BITPLANE_OFFSET + y * 2]
        bp3 = data[offset + TILE_BITPLANE_OFFSET + y * 2 + 1]

        for x in range(TILE_WIDTH):
            bit = 7 - x
            pixel = ((bp0 >> bit) & 1) | \
                (((bp1 >> bit) & 1) << 1) | \
                (((bp2 >> bit) & 1) << 2) | \
                (((bp3 >> bit) & 1) << 3)
            tile.append(pixel)

    return tile


def encode_4bpp_tile(tile_pixels: Sequence[int]) -> bytes:
    """
    Encode an 8x8 tile to SNES 4bpp format.

    Args:
        tile_pixels: List of 64 pixel values (0-15)

    Returns:
        32 bytes of encoded tile data

    Raises:
        ValueError: If tile_pixels doesn't contain exactly 64 values
    """
    _check_pixel_count(tile_pixels)

    output = bytearray(BYTES_PER_TILE_4BPP)
    for y in range(TILE_HEIGHT):
        # Planes 0/1 in the first half, planes 2/3 in the second
        output[y * 2] = _row_plane(tile_pixels, y, 0)
        output[y * 2 + 1] = _row_plane(tile_pixels, y, 1)
        output[TILE_BITPLANE_OFFSET + y * 2] = _row_plane(tile_pixels, y, 2)
        output[TILE_BITPLANE_OFFSET + y * 2 + 1] = _row_plane(tile_pixels, y, 3)

    return bytes(output)


def encode_8bpp_linear_tile(tile_pixels: Sequence[int]) -> bytes:
    """Encode an 8x8 tile as one byte per pixel, row-major."""
    _check_pixel_count(tile_pixels)
    return bytes(int(pixel) & PIXEL_8BPP_MASK for pixel in tile_pixels)


def decode_8bpp_linear_tile(data: bytes, offset: int = 0) -> List[int]:
    _check_bounds(data, offset, BYTES_PER_TILE_8BPP)
    return list(data[offset:offset + BYTES_PER_TILE_8BPP])


def encode_1bpp_tile(tile_pixels: Sequence[int]) -> bytes:
    """
    Encode an 8x8 tile to MSX1 1bpp pattern format.

    A bit is set for every non-transparent pixel (slot != 0), MSB first.

    Raises:
        ValueError: If tile_pixels doesn't contain exactly 64 values
    """
    _check_pixel_count(tile_pixels)
    output = bytearray(BYTES_PER_TILE_1BPP)
    for y in range(TILE_HEIGHT):
        row = 0
        for x in range(TILE_WIDTH):
            if tile_pixels[y * TILE_WIDTH + x]:
                row |= 1 << (7 - x)
        output[y] = row
    return bytes(output)


def decode_1bpp_tile(data: bytes, offset: int = 0) -> List[int]:
    """Decode an MSX1 pattern into 64 pixel values (0 or 1)."""
    _check_bounds(data, offset, BYTES_PER_TILE_1BPP)
    tile = []
    for y in range(TILE_HEIGHT):
        row = data[offset + y]
        tile.extend((row >> (7 - x)) & PIXEL_1BPP_MASK for x in range(TILE_WIDTH))
    return tile


_ENCODERS: Dict[TileFormat, Callable[[Sequence[int]], bytes]] = {
    TileFormat.PLANAR_2BPP: encode_2bpp_planar_tile,
    TileFormat.INTERLEAVED_2BPP: encode_2bpp_interleaved_tile,
    TileFormat.PACKED_4BPP_HIGH: encode_4bpp_packed_tile,
    TileFormat.PACKED_4BPP_LOW: lambda pixels: encode_4bpp_packed_tile(pixels, low_nibble_first=True),
    TileFormat.BITPLANE_4BPP: encode_4bpp_tile,
    TileFormat.LINEAR_8BPP: encode_8bpp_linear_tile,
    TileFormat.MONOCHROME_1BPP: encode_1bpp_tile,
}

_DECODERS: Dict[TileFormat, Callable[[bytes, int], List[int]]] = {
    TileFormat.PLANAR_2BPP: decode_2bpp_planar_tile,
    TileFormat.INTERLEAVED_2BPP: decode_2bpp_interleaved_tile,
    TileFormat.PACKED_4BPP_HIGH: decode_4bpp_packed_tile,
    TileFormat.PACKED_4BPP_LOW: lambda data, offset: decode_4bpp_packed_tile(data, offset, low_nibble_first=True),
    TileFormat.BITPLANE_4BPP: decode_4bpp_tile,
    TileFormat.LINEAR_8BPP: decode_8bpp_linear_tile,
    TileFormat.MONOCHROME_1BPP: decode_1bpp_tile,
}


def encode_tile(tile_pixels: Sequence[int], tile_format: TileFormat) -> bytes:
    """Encode one 8x8 tile of slot values in the given format."""
    return _ENCODERS[tile_format](tile_pixels)


def decode_tile(data: bytes, offset: int, tile_format: TileFormat) -> List[int]:
    """Decode one 8x8 tile at offset in the given format."""
    return _DECODERS[tile_format](data, offset)


def decode_tiles(data: bytes, num_tiles: int, tile_format: TileFormat,
                 start_offset: int = 0) -> List[List[int]]:
    """
    Decode multiple tiles from data.

    Args:
        data: Raw tile data bytes
        num_tiles: Number of tiles to decode
        tile_format: Layout of the tile data
        start_offset: Starting offset in the data

    Returns:
        List of decoded tiles (each tile is a list of 64 pixels)
    """
    size = tile_format.bytes_per_tile
    tiles = []
    for i in range(num_tiles):
        offset = start_offset + (i * size)
        if offset + size <= len(data):
            tiles.append(decode_tile(data, offset, tile_format))
        else:
            break

    return tiles


def encode_tiles(tiles: Sequence[Sequence[int]], tile_format: TileFormat) -> bytes:
    """
    Encode multiple tiles in the given format.

    Args:
        tiles: List of tiles (each tile is a list of 64 pixels)
        tile_format: Target layout

    Returns:
        Encoded tile data
    """
    output = bytearray()
    for tile in tiles:
        output.extend(encode_tile(tile, tile_format))

    return bytes(output)
