#!/usr/bin/env python3
"""
Constants for the sprite codec
All magic numbers and hardware specifications in one place
"""

# Tile specifications
TILE_WIDTH = 8  # pixels
TILE_HEIGHT = 8  # pixels
PIXELS_PER_TILE = 64  # 8x8
MSX_LARGE_SPRITE_SIZE = 16  # 16x16 sprite mode, stored as four 8x8 patterns

# Bytes per 8x8 tile for each encoding
BYTES_PER_TILE_1BPP = 8
BYTES_PER_TILE_2BPP = 16
BYTES_PER_TILE_4BPP = 32
BYTES_PER_TILE_8BPP = 64

# Tile encoding offsets
TILE_PLANE_OFFSET_2BPP = 8  # Second plane of a planar 2bpp (NES CHR) tile
TILE_BITPLANE_OFFSET = 16  # Offset between bitplane pairs in SNES 4bpp tiles

# Pixel masks
PIXEL_1BPP_MASK = 0x01
PIXEL_4BPP_MASK = 0x0F
PIXEL_8BPP_MASK = 0xFF

# Transparency
TRANSPARENT_SLOT = 0  # Slot 0 is always transparent
FALLBACK_SLOT = 1  # Used when an opaque pixel has no slot
ALPHA_THRESHOLD = 128  # alpha < 128 counts as transparent
TRANSPARENT_COLOR = 'rgba(0, 0, 0, 0)'

# Color conversion
RGB888_MAX_VALUE = 255  # 8 bits per color component

# Palette slot counts
PALETTE_SLOTS_2BPP = 4
PALETTE_SLOTS_4BPP = 16
PALETTE_SLOTS_8BPP = 256

# BGR555 layout
BGR555_BLUE_MASK = 0x7C00   # Bits 14-10 for blue
BGR555_GREEN_MASK = 0x03E0  # Bits 9-5 for green
BGR555_RED_MASK = 0x001F    # Bits 4-0 for red
BGR555_BLUE_SHIFT = 10
BGR555_GREEN_SHIFT = 5
BGR555_RED_SHIFT = 0

# MSX1 (TMS9918A)
MSX_DEFAULT_FOREGROUND = 15  # White

# Texture (Dreamcast PVR) limits
TEXTURE_MIN_SIZE = 8
TEXTURE_MAX_SIZE = 1024

# PVR container
PVR_HEADER_SIZE = 16
GBIX_MAGIC = 0x58494247  # 'GBIX' little-endian
PVRT_MAGIC = 0x54525650  # 'PVRT' little-endian
GBIX_SECTION_SIZE = 8
PVR_PIXEL_ARGB1555 = 0x00
PVR_PIXEL_RGB565 = 0x01
PVR_PIXEL_ARGB4444 = 0x02
PVR_DATA_TWIDDLED = 0x01
PVR_DATA_RECTANGLE = 0x09
BYTES_PER_TEXEL = 2

# Palette grid layout for pickers
DEFAULT_COLORS_PER_ROW = 14

# Output file extensions
EXT_CHR = '.chr'
EXT_2BPP = '.2bpp'
EXT_4BPP = '.4bpp'
EXT_8BPP = '.8bpp'
EXT_1BPP = '.pat'
EXT_COLOR_TABLE = '.col'
EXT_PALETTE = '.pal'
EXT_PVR = '.pvr'
EXT_RAW = '.bin'

# Environment variables
ENV_DEBUG = 'SPRITE_CODEC_DEBUG'
ENV_CONSOLE = 'SPRITE_CODEC_CONSOLE'
DEFAULT_PROFILE_ID = 'default'
