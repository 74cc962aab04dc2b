#!/usr/bin/env python3
"""
Color to palette slot mapping
Builds the per-export table that assigns every opaque sprite color a slot
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .color_utils import RGB, ColorLike, is_transparent, rgb_to_hex, to_rgb
from .console_profiles import ConsoleKind, ConsoleProfile
from .constants import ALPHA_THRESHOLD, TRANSPARENT_SLOT
from .exceptions import ColorLimitError, PaletteColorError
from .image_utils import as_rgba_array
from .logging_config import get_logger
from .validation import Validators, distinct_opaque_colors

logger = get_logger('color_mapping')


def pack_rgb(r: int, g: int, b: int) -> int:
    return (r << 16) | (g << 8) | b


class ColorIndexMapping:
    """
    Ordered color -> slot table for one export.

    Slot 0 is reserved for transparency. Opaque colors take slots 1..n in
    the order they were first seen, so identical input always gives
    identical slots.
    """

    def __init__(self, slots: Dict[RGB, int], allow_slot_zero: bool = False):
        if not allow_slot_zero and TRANSPARENT_SLOT in slots.values():
            raise ValueError("Slot 0 is reserved for transparency")
        self._slots = dict(slots)

    @classmethod
    def build(cls, colors: Iterable[ColorLike],
              max_colors: Optional[int] = None,
              name: str = 'This console') -> 'ColorIndexMapping':
        """
        Assign slots 1..n to colors in first-seen order.

        Transparent entries and repeats are skipped.

        Args:
            colors: Distinct sprite colors in first-seen order
            max_colors: Largest allowed number of opaque colors (None = unlimited)
            name: Console name for the error message

        Returns:
            New mapping

        Raises:
            ColorLimitError: If there are more than max_colors colors
        """
        ordered = distinct_opaque_colors(colors)
        if max_colors is not None and len(ordered) > max_colors:
            raise ColorLimitError(
                f"{name} sprites support max {max_colors} colors (+ transparent). "
                f"Current: {len(ordered)} colors.",
                count=len(ordered),
                max_colors=max_colors,
            )

        slots = {to_rgb(color): slot for slot, color in enumerate(ordered, start=1)}
        logger.debug(f"Built color mapping with {len(slots)} colors")
        return cls(slots)

    @classmethod
    def for_profile(cls, colors: Iterable[ColorLike], profile: ConsoleProfile,
                    hardware_shades: bool = False) -> 'ColorIndexMapping':
        """
        Build the mapping a console profile exports with.

        With hardware_shades on a Game Boy (DMG) profile, every color is
        placed on its LCD shade (0-3) instead of its first-seen slot.

        Raises:
            ColorLimitError: If there are more colors than the profile allows
            PaletteColorError: If shade mode gets a color with no LCD shade
        """
        mapping = cls.build(colors, profile.max_colors, profile.name)
        if not hardware_shades:
            return mapping
        if profile.kind is not ConsoleKind.GAMEBOY:
            raise ValueError(f"Hardware shades are only available for Game Boy, not {profile.name}")

        membership, missing = Validators.validate_palette_membership(
            mapping.colors, profile.palette, profile.name
        )
        if not membership.valid:
            raise PaletteColorError(membership.message, missing)

        slots = {rgb: profile.palette.code_for(rgb) for rgb in mapping._slots}
        return cls(slots, allow_slot_zero=True)

    @property
    def colors(self) -> Tuple[str, ...]:
        """Opaque colors as '#RRGGBB', in slot order."""
        return tuple(rgb_to_hex(rgb) for rgb, _ in sorted(self._slots.items(), key=lambda item: item[1]))

    def slot_for(self, color: ColorLike) -> Optional[int]:
        """Slot of an opaque color, TRANSPARENT_SLOT for transparency, None if unmapped."""
        if is_transparent(color):
            return TRANSPARENT_SLOT
        return self._slots.get(to_rgb(color))

    def palette_colors(self) -> List[Optional[str]]:
        """
        Colors indexed by slot - 1 for palette serialization.

        Gaps (slots no color sits on) are None. Colors on slot 0 are left out.
        """
        used = [slot for slot in self._slots.values() if slot > TRANSPARENT_SLOT]
        if not used:
            return []
        entries: List[Optional[str]] = [None] * max(used)
        for rgb, slot in self._slots.items():
            if slot > TRANSPARENT_SLOT:
                entries[slot - 1] = rgb_to_hex(rgb)
        return entries

    def packed_table(self) -> Dict[int, int]:
        """Slots keyed by 0xRRGGBB integers, for vectorized pixel lookup."""
        return {pack_rgb(*rgb): slot for rgb, slot in self._slots.items()}

    def __contains__(self, color) -> bool:
        return self.slot_for(color) is not None

    def __len__(self):
        """Number of slots in use, including the transparent slot."""
        return len(self._slots) + 1

    def __repr__(self):
        return f"ColorIndexMapping({dict((rgb_to_hex(k), v) for k, v in self._slots.items())})"


def collect_colors(frames: Sequence, width: int, height: int) -> List[str]:
    """
    Distinct opaque colors of a sprite in first-seen order.

    Frames are scanned in order and each frame row-major. Pixels with
    alpha below the transparency threshold are ignored.

    Args:
        frames: RGBA frame buffers
        width: Frame width
        height: Frame height

    Returns:
        List of '#RRGGBB' colors
    """
    seen: Dict[int, None] = {}
    for frame in frames:
        pixels = as_rgba_array(frame, width, height).reshape(-1, 4).astype(np.uint32)
        opaque = pixels[pixels[:, 3] >= ALPHA_THRESHOLD]
        if not opaque.size:
            continue
        keys = (opaque[:, 0] << 16) | (opaque[:, 1] << 8) | opaque[:, 2]
        unique_keys, first_index = np.unique(keys, return_index=True)
        for key in unique_keys[np.argsort(first_index)]:
            seen.setdefault(int(key), None)

    return ['#{:06X}'.format(key) for key in seen]
