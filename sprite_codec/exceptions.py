"""Custom exceptions for the sprite codec"""


class SpriteCodecError(Exception):
    """Base exception for all sprite codec errors."""


class DimensionError(SpriteCodecError, ValueError):
    """Raised when frame dimensions do not fit a profile's tile or texture rules."""

    def __init__(self, message, issues=()):
        super().__init__(message)
        self.message = message
        self.issues = tuple(issues)

    @property
    def suggestions(self):
        """Map of axis name to suggested value for every failing axis."""
        return {issue.field: issue.suggestion for issue in self.issues}


class ColorLimitError(SpriteCodecError, ValueError):
    """Raised when a sprite holds more distinct colors than the profile allows."""

    def __init__(self, message, count, max_colors):
        super().__init__(message)
        self.message = message
        self.count = count
        self.max_colors = max_colors


class PaletteColorError(SpriteCodecError, ValueError):
    """Raised when a color is not part of a console's fixed palette."""

    def __init__(self, message, colors=()):
        super().__init__(message)
        self.message = message
        self.colors = tuple(colors)


class ProfileNotFoundError(SpriteCodecError, KeyError):
    """Raised when activating a console profile that was never registered."""

    def __str__(self):
        return str(self.args[0]) if self.args else ''


class UnmappedColorWarning(UserWarning):
    """Emitted when an opaque pixel's color has no slot in the index mapping."""
