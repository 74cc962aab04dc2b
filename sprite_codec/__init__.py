"""
Sprite codec - converts RGBA sprite frames to retro console tile, palette
and texture formats
"""

from .color_mapping import ColorIndexMapping, collect_colors
from .color_utils import PaletteSpace, normalize_color, snap_color
from .console_profiles import BUILTIN_PROFILES, ConsoleKind, ConsoleProfile
from .exceptions import (
    ColorLimitError, DimensionError, PaletteColorError, ProfileNotFoundError,
    SpriteCodecError, UnmappedColorWarning
)
from .palette_utils import PaletteFormat, serialize_palette
from .profile_registry import ProfileChange, ProfileRegistry, create_default_registry
from .pvr_utils import PixelFormat, encode_pvr
from .sprite_exporter import (
    ExportResult, ensure_exportable, export_textures, export_tiles, validate_export
)
from .tile_utils import TileFormat, encode_tile
from .twiddle import morton_code, twiddle, untwiddle
from .validation import DimensionIssue, ValidationResult

__version__ = "1.0.0"
