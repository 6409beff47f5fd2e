"""
Error taxonomy shared by the grid map and the scan generator.
"""


class GridMapError(Exception):
    """Base class for map and scan generation errors."""


class OutOfBoundsError(GridMapError, IndexError):
    """Access outside the extent of a bounded grid map."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            f"Cell ({x}, {y}) is outside of map extent {width}x{height}")
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class InvalidConfigurationError(GridMapError, ValueError):
    """Non-positive scale or density, empty beam fan, malformed config."""
