#!/usr/bin/env python3
"""
Morton (Z-order) texture twiddling

PowerVR hardware reads textures in Morton order: the bits of x sit at the
even bit positions of the texel index and the bits of y at the odd ones.
Square textures are twiddled as a whole. Rectangular textures are split
into square blocks of side min(width, height), laid out in raster order,
each twiddled on its own.

All bit helpers accept plain ints as well as numpy integer arrays.
"""

import numpy as np

from .exceptions import DimensionError
from .logging_config import get_logger
from .validation import ValidationResult, Validators

logger = get_logger('twiddle')


def spread_bits(n):
    """Move the low 16 bits of n to the even bit positions."""
    n = (n | (n << 8)) & 0x00FF00FF
    n = (n | (n << 4)) & 0x0F0F0F0F
    n = (n | (n << 2)) & 0x33333333
    n = (n | (n << 1)) & 0x55555555
    return n


def morton_code(x, y):
    """Interleave x (even bits) and y (odd bits) into a Morton index."""
    return spread_bits(x) | (spread_bits(y) << 1)


def deinterleave_even(n):
    """Collect the even bits of n, inverse of spread_bits."""
    n = n & 0x55555555
    n = (n | (n >> 1)) & 0x33333333
    n = (n | (n >> 2)) & 0x0F0F0F0F
    n = (n | (n >> 4)) & 0x00FF00FF
    n = (n | (n >> 8)) & 0x0000FFFF
    return n


def deinterleave_odd(n):
    """Collect the odd bits of n."""
    return deinterleave_even(n >> 1)


def validate_texture_size(width: int, height: int) -> ValidationResult:
    """Power of two in [8, 1024] on both axes."""
    return Validators.validate_texture_dimensions(width, height)


def _check_texture_size(width: int, height: int) -> None:
    result = validate_texture_size(width, height)
    if not result.valid:
        raise DimensionError(result.message, result.issues)


def twiddle_order(width: int, height: int) -> np.ndarray:
    """
    Linear source index of every texel in twiddled order.

    twiddled[i] == linear[order[i]] for all i.

    Raises:
        DimensionError: If either side is not a power of two in [8, 1024]
    """
    _check_texture_size(width, height)

    block = min(width, height)
    local = np.arange(block * block, dtype=np.int64)
    local_x = deinterleave_even(local)
    local_y = deinterleave_odd(local)

    order = []
    for base_y in range(0, height, block):
        for base_x in range(0, width, block):
            order.append((base_y + local_y) * width + base_x + local_x)
    return np.concatenate(order)


def _as_texels(buffer, width: int, height: int) -> np.ndarray:
    texels = np.asarray(buffer)
    if texels.ndim != 1:
        texels = texels.reshape(-1)
    if texels.size != width * height:
        raise ValueError(
            f"Expected {width * height} texels for {width}x{height}, got {texels.size}"
        )
    return texels


def twiddle(buffer, width: int, height: int) -> np.ndarray:
    """
    Reorder a row-major texel buffer into Morton order.

    Args:
        buffer: width * height texels (sequence or numpy array)
        width: Texture width, power of two in [8, 1024]
        height: Texture height, power of two in [8, 1024]

    Returns:
        New numpy array in twiddled order, same dtype as the input

    Raises:
        DimensionError: If the dimensions are invalid
        ValueError: If the buffer length doesn't match the dimensions
    """
    texels = _as_texels(buffer, width, height)
    order = twiddle_order(width, height)
    logger.debug(f"Twiddling {width}x{height} texture")
    return texels[order]


def untwiddle(buffer, width: int, height: int) -> np.ndarray:
    """
    Restore row-major order from a twiddled texel buffer.

    Exact inverse of twiddle() for the same dimensions.
    """
    texels = _as_texels(buffer, width, height)
    order = twiddle_order(width, height)
    linear = np.empty_like(texels)
    linear[order] = texels
    return linear
