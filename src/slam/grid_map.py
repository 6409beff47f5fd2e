"""
Grid Map contract

Abstract 2D grid of cells plus the world <-> cell geometry shared by every
map variant. The scan generator is written against this contract only.

Coordinates:
- World frame: (x, y) in world units, y up
- Cell frame: (cx, cy) integer indices, 0 <= cx < width, 0 <= cy < height
- The world origin lies in cell (map_center_x, map_center_y)

    cx = floor(x / scale) + map_center_x
    cy = floor(y / scale) + map_center_y

Raster order (cells(), values()) is top-down like an image: row 0 holds
the largest cy, so +y in the world is a decreasing row index.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from core.errors import InvalidConfigurationError
from core.math_utils import tolerant_floor
from .grid_cell import AreaOccupancyObservation, GridCell, UNKNOWN


class DiscretePoint2D(NamedTuple):
    """Cell coordinate."""
    x: int
    y: int

    def __add__(self, other):
        return DiscretePoint2D(self.x + other[0], self.y + other[1])


@dataclass(frozen=True)
class GridMapParams:
    """Grid geometry."""
    width: int = 100        # cells
    height: int = 100       # cells
    scale: float = 1.0      # world units per cell edge
    # Cell holding the world origin (default: middle of the grid)
    map_center_x: Optional[int] = None
    map_center_y: Optional[int] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfigurationError(
                f"Map size must be positive, got {self.width}x{self.height}")
        if not self.scale > 0 or math.isinf(self.scale):
            raise InvalidConfigurationError(
                f"Map scale must be positive, got {self.scale}")

    @property
    def center(self) -> Tuple[int, int]:
        cx = self.width // 2 if self.map_center_x is None else self.map_center_x
        cy = self.height // 2 if self.map_center_y is None else self.map_center_y
        return cx, cy


class GridMap(ABC):
    """Abstract occupancy grid map."""

    def __init__(self, prototype: GridCell, params: GridMapParams):
        self._prototype = prototype
        self._scale = float(params.scale)
        self._width = params.width
        self._height = params.height
        self._map_center_x, self._map_center_y = params.center

    # --- introspection -------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def map_center_x(self) -> int:
        return self._map_center_x

    @property
    def map_center_y(self) -> int:
        return self._map_center_y

    @property
    def prototype(self) -> GridCell:
        return self._prototype

    @property
    def params(self) -> GridMapParams:
        """Current geometry (changes when an unbounded map grows)."""
        return GridMapParams(self._width, self._height, self._scale,
                             self._map_center_x, self._map_center_y)

    # --- geometry ------------------------------------------------------

    def world_to_cell(self, x: float, y: float) -> DiscretePoint2D:
        """Convert world coordinates to a cell coordinate. Never fails."""
        return DiscretePoint2D(
            tolerant_floor(x / self._scale) + self._map_center_x,
            tolerant_floor(y / self._scale) + self._map_center_y)

    def world_to_cell_by_vec(self, x0: float, y0: float,
                             rng: float, angle: float) -> DiscretePoint2D:
        """Cell at distance `rng` from (x0, y0) along absolute `angle`."""
        return self.world_to_cell(x0 + rng * math.cos(angle),
                                  y0 + rng * math.sin(angle))

    def cell_to_world(self, cx: int, cy: int) -> Tuple[float, float]:
        """World coordinates of the cell center."""
        return ((cx - self._map_center_x + 0.5) * self._scale,
                (cy - self._map_center_y + 0.5) * self._scale)

    def world_bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) covered by the current extent."""
        return (-self._map_center_x * self._scale,
                -self._map_center_y * self._scale,
                (self._width - self._map_center_x) * self._scale,
                (self._height - self._map_center_y) * self._scale)

    def has_cell(self, cx: int, cy: int) -> bool:
        return 0 <= cx < self._width and 0 <= cy < self._height

    # --- access --------------------------------------------------------

    @abstractmethod
    def cell(self, cx: int, cy: int) -> GridCell:
        """Cell object at (cx, cy)."""
        pass

    @abstractmethod
    def read(self, cx: int, cy: int) -> float:
        """Belief stored at (cx, cy)."""
        pass

    @abstractmethod
    def fuse(self, cx: int, cy: int,
             observation: AreaOccupancyObservation) -> DiscretePoint2D:
        """
        Fuse an observation into the cell at (cx, cy).

        Returns:
            Coordinate of the updated cell after any growth
        """
        pass

    @abstractmethod
    def copy(self) -> 'GridMap':
        """Deep copy; the copy shares no cell with this map."""
        pass

    @abstractmethod
    def rows(self) -> List[List[GridCell]]:
        """Backing rows indexed by cy (bottom-up)."""
        pass

    def __getitem__(self, coord: Tuple[int, int]) -> float:
        return self.read(coord[0], coord[1])

    def fuse_world(self, x: float, y: float,
                   observation: AreaOccupancyObservation) -> DiscretePoint2D:
        """Fuse an observation into the cell containing world (x, y)."""
        cx, cy = self.world_to_cell(x, y)
        return self.fuse(cx, cy, observation)

    # --- bulk export ---------------------------------------------------

    def cells(self) -> Iterator[List[GridCell]]:
        """Rows of cells, top-down (row 0 = largest cy)."""
        return reversed(self.rows())

    def values(self) -> np.ndarray:
        """
        Beliefs as a (height, width) array in raster order.

        Unknown cells hold UNKNOWN (-1).
        """
        data = np.full((self._height, self._width), UNKNOWN, dtype=np.float64)
        for r, row in enumerate(self.cells()):
            data[r, :] = [c.value for c in row]
        return data

    def known_cell_count(self) -> int:
        return int(np.count_nonzero(self.values() != UNKNOWN))
