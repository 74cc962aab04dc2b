#!/usr/bin/env python3
"""
Tests for color_utils.py
Color parsing, normalization and bit-depth quantization
"""

import pytest

from sprite_codec.color_utils import (
    PaletteSpace, expand_n_bit, is_transparent, normalize_color, parse_color,
    quantize_channels, round_div, snap_color, to_n_bit
)
from sprite_codec.constants import TRANSPARENT_COLOR

ARITHMETIC_SPACES = [
    PaletteSpace.RGB555,
    PaletteSpace.RGB333,
    PaletteSpace.RGB444,
    PaletteSpace.RGB222,
    PaletteSpace.RGB565,
]


@pytest.mark.unit
class TestParseColor:
    """Test color parsing and normalization"""

    def test_parse_hex_forms(self):
        """Test every accepted hex spelling"""
        assert parse_color('#FF8040') == (255, 128, 64, 255)
        assert parse_color('ff8040') == (255, 128, 64, 255)
        assert parse_color('#f80') == (255, 136, 0, 255)
        assert parse_color('#FF804080') == (255, 128, 64, 128)

    def test_parse_tuples(self):
        """Test RGB and RGBA tuples"""
        assert parse_color((1, 2, 3)) == (1, 2, 3, 255)
        assert parse_color((1, 2, 3, 4)) == (1, 2, 3, 4)

    def test_parse_invalid(self):
        """Test rejected inputs"""
        with pytest.raises(ValueError, match="Invalid hex color"):
            parse_color('#12345')
        with pytest.raises(ValueError, match="Invalid hex color"):
            parse_color('#GGGGGG')
        with pytest.raises(ValueError, match="Expected 3 or 4 color components"):
            parse_color((1, 2))
        with pytest.raises(ValueError, match="0-255"):
            parse_color((256, 0, 0))

    def test_normalize_is_case_insensitive(self):
        """Test normalized form is upper-case #RRGGBB"""
        assert normalize_color('#abcdef') == '#ABCDEF'
        assert normalize_color((171, 205, 239)) == '#ABCDEF'

    def test_transparency(self):
        """Test the transparency sentinel and low-alpha colors"""
        assert is_transparent(TRANSPARENT_COLOR)
        assert is_transparent(None)
        assert is_transparent((10, 20, 30, 0))
        assert is_transparent('#FFFFFF7F')
        assert not is_transparent('#FFFFFF80')
        assert not is_transparent('#000000')


@pytest.mark.unit
class TestQuantization:
    """Test bit-depth reduction and expansion"""

    def test_round_div_rounds_half_up(self):
        """Test halves round up rather than to even"""
        assert round_div(1, 2) == 1
        assert round_div(5, 2) == 3
        assert round_div(4, 3) == 1

    def test_to_n_bit_edges(self):
        """Test channel extremes map to the ends of the range"""
        for bits in (2, 3, 4, 5, 6):
            assert to_n_bit(0, bits) == 0
            assert to_n_bit(255, bits) == (1 << bits) - 1

    def test_expand_n_bit_edges(self):
        """Test expansion endpoints"""
        for bits in (2, 3, 4, 5, 6):
            assert expand_n_bit(0, bits) == 0
            assert expand_n_bit((1 << bits) - 1, bits) == 255

    def test_genesis_orange_snap(self):
        """Test #FF8040 snaps to #FF9249 in 3 bits per channel"""
        assert to_n_bit(128, 3) == 4
        assert expand_n_bit(4, 3) == 146
        assert to_n_bit(64, 3) == 2
        assert expand_n_bit(2, 3) == 73
        assert snap_color('#FF8040', PaletteSpace.RGB333) == '#FF9249'

    def test_rgb222_levels(self):
        """Test the four 2-bit levels match the Master System palette values"""
        assert [expand_n_bit(n, 2) for n in range(4)] == [0, 85, 170, 255]

    def test_rgb565_uses_six_green_bits(self):
        """Test green keeps more precision than red and blue"""
        assert quantize_channels('#FFFFFF', PaletteSpace.RGB565) == (31, 63, 31)
        assert snap_color('#000400', PaletteSpace.RGB565) == '#000400'
        assert snap_color('#040000', PaletteSpace.RGB565) == '#000000'

    @pytest.mark.parametrize("space", ARITHMETIC_SPACES)
    def test_snap_is_idempotent(self, space):
        """Test snapping a snapped color changes nothing"""
        for value in range(256):
            color = (value, 255 - value, (value * 7) % 256)
            once = snap_color(color, space)
            assert snap_color(once, space) == once

    def test_snap_rejects_non_arithmetic_space(self):
        """Test fixed and open spaces can't be snapped"""
        with pytest.raises(ValueError, match="not arithmetic"):
            snap_color('#123456', PaletteSpace.FIXED)
        with pytest.raises(ValueError, match="not arithmetic"):
            snap_color('#123456', PaletteSpace.NONE)

    def test_channel_bits(self):
        """Test channel depth table"""
        assert PaletteSpace.RGB555.channel_bits == (5, 5, 5)
        assert PaletteSpace.RGB565.channel_bits == (5, 6, 5)
        assert PaletteSpace.FIXED.channel_bits is None
        assert PaletteSpace.RGB444.is_arithmetic
        assert not PaletteSpace.NONE.is_arithmetic
