"""
Grid Map Patcher

Builds test maps from ASCII art.

    +-+
    | |
    | |

Each character becomes a w_zoom x h_zoom block of cells. The text grows
downward while world y grows upward, so text row i lands on cell rows
offset.y - i*h_zoom ... offset.y - i*h_zoom - (h_zoom - 1).

Characters:
- ' ' : certainly free
- '?' : left untouched
- anything else : certainly occupied
"""

from typing import Iterable, Tuple, Union

from core.errors import InvalidConfigurationError
from core.robot_pose import Point2D
from slam.grid_cell import AreaOccupancyObservation, Occupancy
from slam.grid_map import GridMap

FREE_CHAR = ' '
SKIP_CHAR = '?'


class GridMapPatcher:
    """Applies text rasters to a grid map."""

    def __init__(self, occupied: Occupancy = Occupancy(1.0, 1.0),
                 free: Occupancy = Occupancy(0.0, 1.0)):
        self.occupied = occupied
        self.free = free

    def apply_text_raster(self, grid: GridMap,
                          raster: Union[str, Iterable[str]],
                          offset: Tuple[int, int] = (0, 0),
                          w_zoom: int = 1, h_zoom: int = 1) -> int:
        """
        Fuse a text raster into the map.

        Args:
            grid: Map to patch (an unbounded map grows as needed)
            raster: Text, or an iterable of lines
            offset: Cell of the top-left character, relative to the cell
                containing the world origin
            w_zoom: Cells per character horizontally
            h_zoom: Cells per character vertically

        Returns:
            Number of cells patched
        """
        if w_zoom <= 0 or h_zoom <= 0:
            raise InvalidConfigurationError(
                f"Zoom must be positive, got {w_zoom}x{h_zoom}")

        lines = raster.splitlines() if isinstance(raster, str) else raster
        scale = grid.scale
        patched = 0

        for i, line in enumerate(lines):
            for j, char in enumerate(line.rstrip('\n')):
                if char == SKIP_CHAR:
                    continue
                is_occ = char != FREE_CHAR
                occupancy = self.occupied if is_occ else self.free
                for dy in range(h_zoom):
                    for dx in range(w_zoom):
                        # Cell centers are used so that growth of an
                        # unbounded map cannot shift the target
                        x = (offset[0] + j * w_zoom + dx + 0.5) * scale
                        y = (offset[1] - i * h_zoom - dy + 0.5) * scale
                        grid.fuse_world(x, y, AreaOccupancyObservation(
                            is_occ, occupancy, Point2D(x, y), 1))
                        patched += 1
        return patched
