#!/usr/bin/env python3
"""
Tests for pvr_utils.py
Texel conversion and PVR container layout
"""

import struct

import numpy as np
import pytest

from sprite_codec.exceptions import DimensionError
from sprite_codec.pvr_utils import (
    PixelFormat, build_gbix_header, build_pvrt_header, convert_pixels,
    encode_pvr, encode_texels, read_pvr_header, read_pvr_texels, texel_value
)


@pytest.mark.unit
class TestTexelConversion:
    """Test 16-bit texel packing"""

    def test_argb1555(self):
        """Test one alpha bit and five bits per channel"""
        assert texel_value('#FFFFFF', PixelFormat.ARGB1555) == 0xFFFF
        assert texel_value('#FF0000', PixelFormat.ARGB1555) == 0xFC00
        assert texel_value('#0000FF', PixelFormat.ARGB1555) == 0x801F
        assert texel_value('#FFFFFF7F', PixelFormat.ARGB1555) == 0x7FFF

    def test_rgb565(self):
        """Test six green bits and no alpha"""
        assert texel_value('#FF0000', PixelFormat.RGB565) == 0xF800
        assert texel_value('#00FF00', PixelFormat.RGB565) == 0x07E0
        assert texel_value('#0000FF', PixelFormat.RGB565) == 0x001F

    def test_argb4444(self):
        """Test four bits for every channel including alpha"""
        assert texel_value('#FF000080', PixelFormat.ARGB4444) == 0x8F00
        assert texel_value('#FFFFFF', PixelFormat.ARGB4444) == 0xFFFF
        assert texel_value('#00000000', PixelFormat.ARGB4444) == 0

    def test_convert_frame(self, make_frame):
        """Test conversion of a whole frame keeps row-major order"""
        frame = make_frame(8, 8, pixels={(1, 0): '#FFFFFF'})
        texels = convert_pixels(frame, PixelFormat.RGB565)
        assert texels.dtype == np.uint16
        assert texels.shape == (64,)
        assert texels[1] == 0xFFFF
        assert texels[0] == 0


@pytest.mark.unit
class TestHeaders:
    """Test header layouts"""

    def test_gbix(self):
        """Test GBIX magic, section size and index"""
        header = build_gbix_header(7)
        assert header == b'GBIX' + struct.pack('<III', 8, 7, 0)

    def test_pvrt_twiddled(self):
        """Test PVRT layout for a twiddled texture"""
        header = build_pvrt_header(16, 8, PixelFormat.RGB565)
        assert len(header) == 16
        assert header[:4] == b'PVRT'
        assert struct.unpack('<I', header[4:8])[0] == 16 * 8 * 2
        assert header[8] == 0x01
        assert header[9] == 0x01
        assert struct.unpack('<HHH', header[10:16]) == (0, 16, 8)

    def test_pvrt_rectangle(self):
        """Test the data format code of a linear texture"""
        header = build_pvrt_header(8, 8, PixelFormat.ARGB4444, twiddled=False)
        assert header[8] == 0x02
        assert header[9] == 0x09


@pytest.mark.unit
class TestEncodePvr:
    """Test complete texture files"""

    def test_file_layout(self, make_frame):
        """Test header followed by the texel payload"""
        data = encode_pvr(make_frame(8, 8, fill='#FFFFFF'), 8, 8)
        assert len(data) == 16 + 128
        assert data[:4] == b'PVRT'
        assert data[16:] == b'\xFF\xFF' * 64

    def test_global_index(self, make_frame):
        """Test the optional GBIX header comes first"""
        data = encode_pvr(make_frame(8, 8), 8, 8, global_index=3)
        assert len(data) == 32 + 128
        assert data[:4] == b'GBIX'
        assert data[16:20] == b'PVRT'

    def test_payload_is_twiddled(self, make_frame):
        """Test the texel at (0, 1) is third in a twiddled payload"""
        frame = make_frame(8, 8, pixels={(0, 1): '#FFFFFF'})
        twiddled = encode_texels(frame, 8, 8, PixelFormat.ARGB1555, twiddled=True)
        linear = encode_texels(frame, 8, 8, PixelFormat.ARGB1555)
        assert twiddled[4:6] == b'\xFF\xFF'
        assert linear[16:18] == b'\xFF\xFF'

    def test_invalid_size(self, make_frame):
        """Test textures must be powers of two even when not twiddled"""
        with pytest.raises(DimensionError):
            encode_pvr(make_frame(24, 8), 24, 8, twiddled=False)

    def test_read_back(self, make_frame):
        """Test headers and texels read back from an encoded file"""
        frame = make_frame(16, 8, pixels={(9, 3): '#FF0000', (0, 7): '#0000FF'})
        data = encode_pvr(frame, 16, 8, PixelFormat.ARGB1555, global_index=42)

        header = read_pvr_header(data)
        assert header.global_index == 42
        assert header.pixel_format is PixelFormat.ARGB1555
        assert header.twiddled
        assert (header.width, header.height) == (16, 8)
        assert header.data_offset == 32

        texels = read_pvr_texels(data)
        assert texels[3 * 16 + 9] == 0xFC00
        assert texels[7 * 16] == 0x801F
        assert np.count_nonzero(texels) == 2

    def test_read_rejects_garbage(self):
        """Test data without a PVRT header"""
        with pytest.raises(ValueError, match="PVRT"):
            read_pvr_header(b'\x00' * 32)
