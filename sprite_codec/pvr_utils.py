#!/usr/bin/env python3
"""
Dreamcast PVR texture utilities
16-bit texel conversion, GBIX/PVRT headers and texture file assembly
"""

import struct
from enum import Enum
from typing import NamedTuple, Optional

import numpy as np

from .color_utils import ColorLike, parse_color, to_n_bit
from .constants import (
    ALPHA_THRESHOLD, BYTES_PER_TEXEL, GBIX_MAGIC, GBIX_SECTION_SIZE,
    PVR_DATA_RECTANGLE, PVR_DATA_TWIDDLED, PVR_HEADER_SIZE, PVR_PIXEL_ARGB1555,
    PVR_PIXEL_ARGB4444, PVR_PIXEL_RGB565, PVRT_MAGIC
)
from .exceptions import DimensionError
from .image_utils import as_rgba_array
from .logging_config import get_logger
from .twiddle import twiddle, untwiddle, validate_texture_size

logger = get_logger('pvr_utils')

GBIX_FORMAT = '<IIII'
PVRT_FORMAT = '<IIBBHHH'


class PixelFormat(Enum):
    """PVR 16-bit texel formats, valued by their header code"""

    ARGB1555 = PVR_PIXEL_ARGB1555
    RGB565 = PVR_PIXEL_RGB565
    ARGB4444 = PVR_PIXEL_ARGB4444


class PvrHeader(NamedTuple):
    global_index: Optional[int]
    data_size: int
    pixel_format: PixelFormat
    twiddled: bool
    width: int
    height: int
    data_offset: int


def convert_pixels(rgba, pixel_format: PixelFormat) -> np.ndarray:
    """
    Convert RGBA pixels to 16-bit texels.

    Args:
        rgba: Array-like of RGBA values, any shape ending in 4
        pixel_format: Target texel layout

    Returns:
        Flat uint16 array, one texel per pixel
    """
    pixels = np.asarray(rgba, dtype=np.int32).reshape(-1, 4)
    r, g, b, a = pixels[:, 0], pixels[:, 1], pixels[:, 2], pixels[:, 3]

    if pixel_format is PixelFormat.ARGB1555:
        alpha = np.where(a >= ALPHA_THRESHOLD, 0x8000, 0)
        texels = alpha | (to_n_bit(r, 5) << 10) | (to_n_bit(g, 5) << 5) | to_n_bit(b, 5)
    elif pixel_format is PixelFormat.RGB565:
        texels = (to_n_bit(r, 5) << 11) | (to_n_bit(g, 6) << 5) | to_n_bit(b, 5)
    elif pixel_format is PixelFormat.ARGB4444:
        texels = ((to_n_bit(a, 4) << 12) | (to_n_bit(r, 4) << 8)
                  | (to_n_bit(g, 4) << 4) | to_n_bit(b, 4))
    else:
        raise ValueError(f"Unsupported pixel format: {pixel_format}")

    return texels.astype(np.uint16)


def texel_value(color: ColorLike, pixel_format: PixelFormat) -> int:
    """16-bit texel for a single color."""
    return int(convert_pixels([parse_color(color)], pixel_format)[0])


def build_gbix_header(global_index: int) -> bytes:
    """16-byte GBIX header: magic, section size, global index, padding."""
    return struct.pack(GBIX_FORMAT, GBIX_MAGIC, GBIX_SECTION_SIZE, global_index, 0)


def build_pvrt_header(width: int, height: int, pixel_format: PixelFormat,
                      twiddled: bool = True) -> bytes:
    """
    16-byte PVRT header.

    Args:
        width: Texture width
        height: Texture height
        pixel_format: Texel layout code
        twiddled: Whether the payload is Morton ordered

    Returns:
        Packed header bytes
    """
    data_format = PVR_DATA_TWIDDLED if twiddled else PVR_DATA_RECTANGLE
    data_size = width * height * BYTES_PER_TEXEL
    return struct.pack(PVRT_FORMAT, PVRT_MAGIC, data_size, pixel_format.value,
                       data_format, 0, width, height)


def encode_texels(frame, width: int, height: int, pixel_format: PixelFormat,
                  twiddled: bool = False) -> bytes:
    """Little-endian 16-bit texel payload for one RGBA frame."""
    texels = convert_pixels(as_rgba_array(frame, width, height), pixel_format)
    if twiddled:
        texels = twiddle(texels, width, height)
    return texels.astype('<u2').tobytes()


def encode_pvr(frame, width: int, height: int,
               pixel_format: PixelFormat = PixelFormat.ARGB1555,
               twiddled: bool = True,
               global_index: Optional[int] = None) -> bytes:
    """
    Build a complete PVR texture file for one RGBA frame.

    Args:
        frame: Row-major RGBA buffer
        width: Texture width, power of two in [8, 1024]
        height: Texture height, power of two in [8, 1024]
        pixel_format: Texel layout
        twiddled: Store texels in Morton order
        global_index: Prepend a GBIX header with this index when given

    Returns:
        [GBIX header] + PVRT header + texel payload

    Raises:
        DimensionError: If the dimensions are not valid texture sizes
    """
    result = validate_texture_size(width, height)
    if not result.valid:
        raise DimensionError(result.message, result.issues)

    payload = encode_texels(frame, width, height, pixel_format, twiddled)
    header = build_pvrt_header(width, height, pixel_format, twiddled)
    if global_index is not None:
        header = build_gbix_header(global_index) + header

    logger.debug(
        f"Built PVR {width}x{height} {pixel_format.name} "
        f"({'twiddled' if twiddled else 'rectangle'}, {len(payload)} bytes)"
    )
    return header + payload


def read_pvr_header(data: bytes) -> PvrHeader:
    """
    Parse the GBIX (optional) and PVRT headers of a PVR file.

    Raises:
        ValueError: If the data doesn't start with a GBIX or PVRT header
    """
    offset = 0
    global_index = None
    if len(data) >= PVR_HEADER_SIZE:
        magic, _, index, _ = struct.unpack_from(GBIX_FORMAT, data, 0)
        if magic == GBIX_MAGIC:
            global_index = index
            offset = PVR_HEADER_SIZE

    if len(data) < offset + PVR_HEADER_SIZE:
        raise ValueError("Data too short for a PVRT header")

    magic, data_size, pixel_code, data_code, _, width, height = struct.unpack_from(
        PVRT_FORMAT, data, offset
    )
    if magic != PVRT_MAGIC:
        raise ValueError(f"Missing PVRT header at offset {offset}")

    return PvrHeader(
        global_index=global_index,
        data_size=data_size,
        pixel_format=PixelFormat(pixel_code),
        twiddled=data_code == PVR_DATA_TWIDDLED,
        width=width,
        height=height,
        data_offset=offset + PVR_HEADER_SIZE,
    )


def read_pvr_texels(data: bytes) -> np.ndarray:
    """Row-major uint16 texels of a PVR file, untwiddled when needed."""
    header = read_pvr_header(data)
    count = header.width * header.height
    texels = np.frombuffer(data, dtype='<u2', count=count, offset=header.data_offset)
    if header.twiddled:
        texels = untwiddle(texels, header.width, header.height)
    return texels.astype(np.uint16)
