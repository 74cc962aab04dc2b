"""
Shared pytest fixtures and configuration for sprite codec tests
"""

import tempfile
import warnings
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from sprite_codec.color_utils import parse_color
from sprite_codec.exceptions import UnmappedColorWarning
from sprite_codec.profile_registry import create_default_registry


def build_frame(width, height, fill=None, pixels=None):
    """
    Build a (height, width, 4) RGBA frame.

    Args:
        fill: Color for every pixel (transparent when None)
        pixels: Dict of (x, y) -> color drawn over the fill
    """
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    if fill is not None:
        frame[:, :] = parse_color(fill)
    for (x, y), color in (pixels or {}).items():
        frame[y, x] = parse_color(color)
    return frame


@pytest.fixture
def make_frame():
    """Factory for RGBA test frames"""
    return build_frame


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registry():
    """Registry with every built-in profile and the default profile active"""
    return create_default_registry()


@pytest.fixture
def no_unmapped_colors():
    """Turn UnmappedColorWarning into an error for the duration of a test"""
    with warnings.catch_warnings():
        warnings.simplefilter("error", UnmappedColorWarning)
        yield


@pytest.fixture
def quadrant_frame():
    """16x16 frame with a different color in each 8x8 quadrant"""
    frame = build_frame(16, 16)
    frame[0:8, 0:8] = parse_color('#FF0000')    # top-left
    frame[0:8, 8:16] = parse_color('#00FF00')   # top-right
    frame[8:16, 0:8] = parse_color('#0000FF')   # bottom-left
    # bottom-right stays transparent
    return frame


@pytest.fixture
def png_file(temp_dir):
    """Factory writing an RGBA frame to a PNG file"""
    def _write(frame, name="sprite.png"):
        path = temp_dir / name
        Image.fromarray(frame).save(path)
        return path
    return _write
