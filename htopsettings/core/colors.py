"""
Color scheme identifiers.
"""

from enum import IntEnum


class ColorScheme(IntEnum):
    """Color schemes known to the display layer, in on-disk order."""
    DEFAULT = 0
    MONOCHROME = 1
    BLACK_ON_WHITE = 2
    LIGHT_TERMINAL = 3
    MIDNIGHT = 4
    BLACK_NIGHT = 5
    BROKEN_GRAY = 6

    @classmethod
    def clamp(cls, value: int) -> int:
        """Return value if it names a scheme, otherwise the default scheme."""
        if 0 <= value < len(cls):
            return value
        return int(cls.DEFAULT)
