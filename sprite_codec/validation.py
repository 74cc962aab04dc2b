#!/usr/bin/env python3
"""
Input validation utilities
Dimension, color count and palette membership checks for console profiles
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .color_utils import ColorLike, is_transparent, normalize_color
from .constants import TEXTURE_MAX_SIZE, TEXTURE_MIN_SIZE


@dataclass(frozen=True)
class DimensionIssue:
    """A single failing axis with a suggested replacement value"""

    field: str
    message: str
    suggestion: Optional[int] = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check, ready to show as a warning or badge"""

    valid: bool
    message: str = ''
    count: Optional[int] = None
    issues: Tuple[DimensionIssue, ...] = ()

    def __bool__(self):
        return self.valid


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def next_multiple(n: int, step: int) -> int:
    """Smallest positive multiple of step >= n."""
    return max(step, -(-n // step) * step)


def distinct_opaque_colors(colors: Iterable[ColorLike]) -> List[str]:
    """Normalize colors, drop transparency and duplicates, keep first-seen order."""
    seen = {}
    for color in colors:
        if is_transparent(color):
            continue
        seen.setdefault(normalize_color(color), None)
    return list(seen)


class Validators:
    """Validation functions shared by every console profile"""

    @staticmethod
    def validate_tile_dimensions(width: int, height: int,
                                 tile_size: int) -> ValidationResult:
        """
        Check that both axes are multiples of the tile size.

        Args:
            width: Frame width in pixels
            height: Frame height in pixels
            tile_size: Required tile size

        Returns:
            ValidationResult with one issue per failing axis
        """
        issues = []
        for field, value in (('width', width), ('height', height)):
            if value <= 0 or value % tile_size != 0:
                issues.append(DimensionIssue(
                    field=field,
                    message=f"{field.capitalize()} {value} is not valid.",
                    suggestion=next_multiple(value, tile_size),
                ))

        if not issues:
            return ValidationResult(True)

        message = ' '.join(
            [f"Dimensions must be multiples of {tile_size}."]
            + [issue.message for issue in issues]
        )
        return ValidationResult(False, message, issues=tuple(issues))

    @staticmethod
    def validate_texture_dimensions(width: int, height: int,
                                    min_size: int = TEXTURE_MIN_SIZE,
                                    max_size: int = TEXTURE_MAX_SIZE) -> ValidationResult:
        """
        Check that both axes are powers of two within [min_size, max_size].

        Args:
            width: Texture width in pixels
            height: Texture height in pixels
            min_size: Smallest allowed side
            max_size: Largest allowed side

        Returns:
            ValidationResult with one issue per failing axis
        """
        issues = []
        for field, value in (('width', width), ('height', height)):
            label = field.capitalize()
            if value > max_size:
                message = f"{label} {value} exceeds maximum ({max_size})"
            elif value < min_size:
                message = f"{label} {value} is below minimum ({min_size})"
            elif not is_power_of_two(value):
                message = f"{label} {value} is not a power of 2"
            else:
                continue
            suggestion = min(max(next_power_of_two(value), min_size), max_size)
            issues.append(DimensionIssue(field, message, suggestion))

        if not issues:
            return ValidationResult(True)
        return ValidationResult(
            False, '. '.join(issue.message for issue in issues) + '.',
            issues=tuple(issues),
        )

    @staticmethod
    def validate_color_count(colors: Iterable[ColorLike], max_colors: Optional[int],
                             name: str) -> ValidationResult:
        """
        Count distinct opaque colors against a profile limit.

        The bound is inclusive: exactly max_colors colors is valid.

        Returns:
            ValidationResult carrying the distinct color count
        """
        count = len(distinct_opaque_colors(colors))
        if max_colors is None or count <= max_colors:
            return ValidationResult(True, '', count)

        message = (f"{name} sprites support max {max_colors} colors "
                   f"(+ transparent). Current: {count} colors.")
        return ValidationResult(False, message, count)

    @staticmethod
    def validate_palette_membership(colors: Iterable[ColorLike], palette,
                                    name: str) -> Tuple[ValidationResult, Sequence[str]]:
        """
        Check every opaque color against a fixed hardware palette.

        Returns:
            Tuple of (ValidationResult, colors missing from the palette)
        """
        missing = [color for color in distinct_opaque_colors(colors)
                   if palette.code_for(color) is None]
        if not missing:
            return ValidationResult(True), missing
        message = f"Colors not in the {name} palette: {', '.join(missing)}"
        return ValidationResult(False, message, len(missing)), missing
