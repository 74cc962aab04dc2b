#!/usr/bin/env python3
"""
Tests for palette_utils.py
Per-console palette entry encodings and palette buffer layout
"""

import pytest

from sprite_codec.exceptions import PaletteColorError
from sprite_codec.palette_utils import (
    PaletteFormat, bgr555_bytes, bgr555_to_rgb888, color_to_palette_bytes,
    decode_bgr555_palette, gameboy_shade, gamegear_cram_bytes,
    genesis_cram_bytes, msx1_color_index, msx2_palette_bytes,
    nes_register_byte, rgb888_to_bgr555, serialize_palette, sms_cram_byte
)


@pytest.mark.unit
class TestColorConversion:
    """Test BGR555 conversion"""

    def test_rgb888_to_bgr555_primaries(self):
        """Test channel placement"""
        assert rgb888_to_bgr555(255, 0, 0) == 0x001F
        assert rgb888_to_bgr555(0, 255, 0) == 0x03E0
        assert rgb888_to_bgr555(0, 0, 255) == 0x7C00
        assert rgb888_to_bgr555(255, 255, 255) == 0x7FFF
        assert rgb888_to_bgr555(0, 0, 0) == 0

    def test_rgb888_to_bgr555_rounds(self):
        """Test channels round to the nearest 5-bit level"""
        # 132 * 31 / 255 = 16.05 and 123 * 31 / 255 = 14.95
        assert rgb888_to_bgr555(132, 0, 0) == 16
        assert rgb888_to_bgr555(123, 0, 0) == 15

    def test_bgr555_to_rgb888(self):
        """Test expansion back to 8 bits"""
        assert bgr555_to_rgb888(0x7FFF) == (255, 255, 255)
        assert bgr555_to_rgb888(0x001F) == (255, 0, 0)
        assert bgr555_to_rgb888(0) == (0, 0, 0)

    def test_bgr555_little_endian(self):
        """Test entry byte order"""
        assert bgr555_bytes('#0000FF') == b'\x00\x7C'
        assert bgr555_bytes('#FF0000') == b'\x1F\x00'

    def test_decode_palette(self):
        """Test decoding a BGR555 buffer"""
        data = b'\x1F\x00\xFF\x7F\x00'
        assert decode_bgr555_palette(data) == [(255, 0, 0), (255, 255, 255)]


@pytest.mark.unit
class TestSegaFormats:
    """Test Sega and MSX2 CRAM entries"""

    def test_genesis(self):
        """Test GGG0RRR0 / 0000BBB0 layout"""
        assert genesis_cram_bytes('#FF8040') == b'\x8E\x04'
        assert genesis_cram_bytes('#FFFFFF') == b'\xEE\x0E'

    def test_master_system_table(self):
        """Test table colors use their listed CRAM byte"""
        assert sms_cram_byte('#FF5500') == 0x07
        assert sms_cram_byte('#FFFFFF') == 0x3F
        assert sms_cram_byte('#000000') == 0x00

    def test_master_system_arithmetic_fallback(self):
        """Test colors outside the table are reduced to 2 bits per channel"""
        assert sms_cram_byte('#808080') == 0x2A
        assert sms_cram_byte('#FE0000') == 0x03

    def test_game_gear(self):
        """Test ----BBBBGGGGRRRR little-endian"""
        assert gamegear_cram_bytes('#FF8040') == b'\x8F\x04'
        assert gamegear_cram_bytes('#FFFFFF') == b'\xFF\x0F'

    def test_msx2(self):
        """Test 0RRR0GGG / 0BBB0000 layout"""
        assert msx2_palette_bytes('#FF8040') == b'\x74\x20'
        assert msx2_palette_bytes('#000000') == b'\x00\x00'


@pytest.mark.unit
class TestFixedPaletteFormats:
    """Test formats that write hardware codes"""

    def test_nes_register(self):
        """Test PPU register values"""
        assert nes_register_byte('#F83800') == 0x16
        assert nes_register_byte('#000000') == 0x0F
        assert nes_register_byte('#fcfcfc') == 0x30

    def test_gameboy_shade(self):
        """Test LCD shades"""
        assert gameboy_shade('#9BBC0F') == 0
        assert gameboy_shade('#0F380F') == 3

    def test_msx1_index(self):
        """Test TMS9918A color indices"""
        assert msx1_color_index('#FC5554') == 8
        assert msx1_color_index('#FFFFFF') == 15

    def test_miss_raises(self):
        """Test a color outside the table"""
        with pytest.raises(PaletteColorError) as exc_info:
            nes_register_byte('#123456')
        assert exc_info.value.colors == ('#123456',)
        assert 'NES palette' in str(exc_info.value)

        with pytest.raises(PaletteColorError):
            gameboy_shade('#FFFFFF')


@pytest.mark.unit
class TestSerializePalette:
    """Test palette buffer layout"""

    def test_entry_sizes(self):
        """Test bytes per entry for every format"""
        one_byte = {PaletteFormat.SMS_CRAM, PaletteFormat.NES_REGISTER,
                    PaletteFormat.GAMEBOY_SHADE, PaletteFormat.MSX1_INDEX}
        for palette_format in PaletteFormat:
            expected = 1 if palette_format in one_byte else 2
            assert palette_format.bytes_per_color == expected

    def test_slot_zero_is_zero(self):
        """Test slot 0 stays zero and colors start at slot 1"""
        data = serialize_palette(['#FF0000', '#00FF00'], PaletteFormat.BGR555, 16)
        assert len(data) == 32
        assert data[0:2] == b'\x00\x00'
        assert data[2:4] == b'\x1F\x00'
        assert data[4:6] == b'\xE0\x03'
        assert data[6:] == bytes(26)

    def test_gaps_are_zero(self):
        """Test None entries leave their slot zeroed"""
        data = serialize_palette([None, '#306230'], PaletteFormat.GAMEBOY_SHADE, 4)
        assert data == b'\x00\x00\x02\x00'

    def test_full_palette(self):
        """Test slot_count - 1 colors fill the buffer"""
        colors = ['#F83800'] * 3
        data = serialize_palette(colors, PaletteFormat.NES_REGISTER, 4)
        assert data == b'\x00\x16\x16\x16'

    def test_too_many_colors(self):
        """Test colors must leave room for slot 0"""
        with pytest.raises(ValueError, match="don't fit in a 4-slot palette"):
            serialize_palette(['#000000'] * 4, PaletteFormat.SMS_CRAM, 4)

    def test_empty_palette(self):
        """Test a sprite with no colors still gets a full buffer"""
        assert serialize_palette([], PaletteFormat.GENESIS_CRAM, 16) == bytes(32)

    def test_single_entry_dispatch(self):
        """Test the per-format entry encoder"""
        assert color_to_palette_bytes('#FF5500', PaletteFormat.SMS_CRAM) == b'\x07'
        assert color_to_palette_bytes('#FC5554', PaletteFormat.MSX1_INDEX) == b'\x08'
