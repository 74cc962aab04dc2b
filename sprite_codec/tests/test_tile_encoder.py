#!/usr/bin/env python3
"""
Tests for tile_encoder.py
Frame to slot resolution, tile ordering and MSX color tables
"""

import pytest

from sprite_codec.color_mapping import ColorIndexMapping, collect_colors
from sprite_codec.exceptions import DimensionError, UnmappedColorWarning
from sprite_codec.tile_encoder import (
    encode_color_table, encode_frame, encode_frames, frame_to_slots,
    iter_tile_blocks, msx_foreground_index, tiles_per_frame
)
from sprite_codec.tile_utils import TileFormat


@pytest.mark.unit
class TestFrameToSlots:
    """Test pixel to slot resolution"""

    def test_slots_follow_mapping(self, make_frame, no_unmapped_colors):
        """Test opaque pixels take their mapped slot and transparent ones slot 0"""
        frame = make_frame(8, 8, pixels={(0, 0): '#FF0000', (1, 0): '#00FF00'})
        mapping = ColorIndexMapping.build(['#FF0000', '#00FF00'])
        slots = frame_to_slots(frame, 8, 8, mapping)
        assert slots.shape == (8, 8)
        assert slots[0, 0] == 1
        assert slots[0, 1] == 2
        assert slots[0, 2] == 0
        assert slots.sum() == 3

    def test_alpha_threshold(self, make_frame, no_unmapped_colors):
        """Test alpha 127 is transparent and alpha 128 is opaque"""
        frame = make_frame(8, 8, pixels={(0, 0): '#FF00007F', (1, 0): '#FF000080'})
        mapping = ColorIndexMapping.build(['#FF0000'])
        slots = frame_to_slots(frame, 8, 8, mapping)
        assert slots[0, 0] == 0
        assert slots[0, 1] == 1

    def test_unmapped_color_warns(self, make_frame):
        """Test an unmapped opaque color falls back to slot 1 with a warning"""
        frame = make_frame(8, 8, fill='#00FF00', pixels={(0, 0): '#FF0000'})
        mapping = ColorIndexMapping.build(['#FF0000', '#0000FF'])
        with pytest.warns(UnmappedColorWarning, match="#00FF00"):
            slots = frame_to_slots(frame, 8, 8, mapping)
        assert (slots == 1).all()

    def test_transparent_color_never_warns(self, make_frame, no_unmapped_colors):
        """Test low-alpha pixels of unmapped colors are just transparent"""
        frame = make_frame(8, 8, fill='#12345600')
        slots = frame_to_slots(frame, 8, 8, ColorIndexMapping.build([]))
        assert not slots.any()


@pytest.mark.unit
class TestTileOrder:
    """Test tile block iteration"""

    def test_raster_order(self, quadrant_frame, no_unmapped_colors):
        """Test 8x8 blocks go left-to-right, top-to-bottom"""
        mapping = ColorIndexMapping.build(collect_colors([quadrant_frame], 16, 16))
        slots = frame_to_slots(quadrant_frame, 16, 16, mapping)
        firsts = [int(block[0, 0]) for block in iter_tile_blocks(slots)]
        assert firsts == [1, 2, 3, 0]

    def test_quadrant_order(self, quadrant_frame, no_unmapped_colors):
        """Test 16x16 blocks go top-left, bottom-left, top-right, bottom-right"""
        mapping = ColorIndexMapping.build(collect_colors([quadrant_frame], 16, 16))
        slots = frame_to_slots(quadrant_frame, 16, 16, mapping)
        firsts = [int(block[0, 0]) for block in iter_tile_blocks(slots, 16)]
        assert firsts == [1, 3, 2, 0]

    def test_tiles_per_frame(self):
        """Test tile count of a frame"""
        assert tiles_per_frame(16, 16) == 4
        assert tiles_per_frame(32, 8) == 4
        assert tiles_per_frame(8, 8) == 1


@pytest.mark.unit
class TestEncodeFrame:
    """Test whole-frame encoding"""

    def test_nes_quadrants(self, quadrant_frame, no_unmapped_colors):
        """Test a 16x16 three-color sprite as NES CHR"""
        mapping = ColorIndexMapping.build(['#FF0000', '#00FF00', '#0000FF'])
        data = encode_frame(quadrant_frame, 16, 16, mapping, TileFormat.PLANAR_2BPP)

        assert len(data) == 64
        assert data[0] & 0x80
        assert not data[8] & 0x80
        # red (slot 1), green (slot 2), blue (slot 3), transparent
        assert data[0:16] == b'\xFF' * 8 + b'\x00' * 8
        assert data[16:32] == b'\x00' * 8 + b'\xFF' * 8
        assert data[32:48] == b'\xFF' * 16
        assert data[48:64] == bytes(16)

    def test_gameboy_transparent_frame(self, make_frame, no_unmapped_colors):
        """Test a fully transparent 8x8 frame encodes to zeros"""
        data = encode_frame(make_frame(8, 8), 8, 8, ColorIndexMapping.build([]),
                            TileFormat.INTERLEAVED_2BPP)
        assert data == bytes(16)

    def test_msx_16x16_pattern(self, make_frame, no_unmapped_colors):
        """Test MSX 16x16 patterns are written quadrant by quadrant"""
        frame = make_frame(16, 16, pixels={(8, 0): '#FFFFFF'})
        frame[0:8, 0:8] = (255, 255, 255, 255)
        mapping = ColorIndexMapping.build(['#FFFFFF'])
        data = encode_frame(frame, 16, 16, mapping, TileFormat.MONOCHROME_1BPP, sprite_size=16)

        assert len(data) == 32
        assert data[0:8] == b'\xFF' * 8          # top-left
        assert data[8:16] == bytes(8)            # bottom-left
        assert data[16:24] == b'\x80' + bytes(7)  # top-right
        assert data[24:32] == bytes(8)           # bottom-right

    def test_large_sprites_msx_only(self, make_frame):
        """Test 16x16 ordering is refused for other formats"""
        with pytest.raises(ValueError, match="not supported"):
            encode_frame(make_frame(16, 16), 16, 16, ColorIndexMapping.build([]),
                         TileFormat.PACKED_4BPP_HIGH, sprite_size=16)

    def test_bad_dimensions(self, make_frame):
        """Test frames that don't divide into tiles"""
        with pytest.raises(DimensionError) as exc_info:
            encode_frame(make_frame(12, 8), 12, 8, ColorIndexMapping.build([]),
                         TileFormat.PLANAR_2BPP)
        assert exc_info.value.suggestions == {'width': 16}

    def test_buffer_size_mismatch(self, make_frame):
        """Test a frame buffer that doesn't match the dimensions"""
        with pytest.raises(ValueError, match="Expected 512 RGBA bytes"):
            encode_frame(make_frame(8, 8).tobytes()[:100], 8, 16,
                         ColorIndexMapping.build([]), TileFormat.PLANAR_2BPP)

    def test_frames_concatenate_in_order(self, make_frame, no_unmapped_colors):
        """Test multiple frames are joined in input order"""
        mapping = ColorIndexMapping.build(['#FF0000', '#00FF00'])
        first = make_frame(8, 8, fill='#FF0000')
        second = make_frame(8, 8, fill='#00FF00')
        data = encode_frames([first, second], 8, 8, mapping, TileFormat.PACKED_4BPP_HIGH)
        assert data == b'\x11' * 32 + b'\x22' * 32

    def test_encoding_is_deterministic(self, quadrant_frame, no_unmapped_colors):
        """Test encoding the same frame twice gives identical bytes"""
        mapping = ColorIndexMapping.build(collect_colors([quadrant_frame], 16, 16))
        first = encode_frame(quadrant_frame, 16, 16, mapping, TileFormat.BITPLANE_4BPP)
        second = encode_frame(quadrant_frame.copy(), 16, 16, mapping, TileFormat.BITPLANE_4BPP)
        assert first == second


@pytest.mark.unit
class TestMsxColorTable:
    """Test MSX1 color tables"""

    def test_color_table_bytes(self):
        """Test one foreground byte per pattern row"""
        assert encode_color_table(4, 15) == b'\xF0' * 32
        assert encode_color_table(1, 8) == b'\x80' * 8
        assert encode_color_table(0, 8) == b''

    def test_foreground_range(self):
        """Test indices outside 0-15 are rejected"""
        with pytest.raises(ValueError, match="0-15"):
            encode_color_table(1, 16)

    def test_foreground_index(self):
        """Test the sprite color resolves to its VDP index"""
        assert msx_foreground_index(ColorIndexMapping.build(['#FC5554'])) == 8
        assert msx_foreground_index(ColorIndexMapping.build([])) == 15
        assert msx_foreground_index(ColorIndexMapping.build(['#123456'])) == 15
