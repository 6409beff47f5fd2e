"""
Plain Grid Maps

Rectangular grid backed by rows of cell objects.

- PlainGridMap: bounded, out-of-range access raises OutOfBoundsError
- UnboundedPlainGridMap: grows on out-of-range fusion, reads outside the
  extent as UNKNOWN

Usage:
    grid = UnboundedPlainGridMap(GridCell(), GridMapParams(100, 100, 0.05))
    cx, cy = grid.world_to_cell(1.2, -0.4)
    grid.fuse(cx, cy, AreaOccupancyObservation(True, Occupancy(1.0, 1.0)))
"""

import logging
from typing import List, Optional

from core.errors import OutOfBoundsError
from .grid_cell import AreaOccupancyObservation, GridCell, UNKNOWN
from .grid_map import DiscretePoint2D, GridMap, GridMapParams

logger = logging.getLogger(__name__)


class PlainGridMap(GridMap):
    """Fixed-size grid map."""

    def __init__(self, prototype: Optional[GridCell] = None,
                 params: Optional[GridMapParams] = None):
        """
        Args:
            prototype: Cell cloned into every position (default: unknown
                GridCell)
            params: Map geometry (default: 100x100, scale 1)
        """
        super().__init__(prototype or GridCell(), params or GridMapParams())
        self._rows: List[List[GridCell]] = [
            [self._prototype.clone() for _ in range(self._width)]
            for _ in range(self._height)
        ]

    def rows(self) -> List[List[GridCell]]:
        return self._rows

    def _check(self, cx: int, cy: int):
        if not self.has_cell(cx, cy):
            raise OutOfBoundsError(cx, cy, self._width, self._height)

    def cell(self, cx: int, cy: int) -> GridCell:
        self._check(cx, cy)
        return self._rows[cy][cx]

    def read(self, cx: int, cy: int) -> float:
        self._check(cx, cy)
        return self._rows[cy][cx].value

    def fuse(self, cx: int, cy: int,
             observation: AreaOccupancyObservation) -> DiscretePoint2D:
        self._check(cx, cy)
        self._rows[cy][cx] += observation
        return DiscretePoint2D(cx, cy)

    def copy(self) -> 'PlainGridMap':
        duplicate = self.__class__.__new__(self.__class__)
        duplicate.__dict__.update(self.__dict__)
        duplicate._prototype = self._prototype.clone()
        duplicate._rows = [[c.clone() for c in row] for row in self._rows]
        return duplicate


class UnboundedPlainGridMap(PlainGridMap):
    """
    Grid map that extends its storage when fusion lands outside of it.

    Existing cells keep their world position: the map center shifts by the
    number of cells prepended on the left/bottom sides. New cells are unknown.
    """

    def __init__(self, prototype: Optional[GridCell] = None,
                 params: Optional[GridMapParams] = None,
                 expansion_margin: int = 10):
        """
        Args:
            prototype: Cell cloned into every starting position
            params: Initial map geometry
            expansion_margin: Extra cells added past the requested
                coordinate on each side that grows
        """
        super().__init__(prototype, params)
        self.expansion_margin = max(0, int(expansion_margin))

    def cell(self, cx: int, cy: int) -> GridCell:
        if not self.has_cell(cx, cy):
            return self._prototype.blank()
        return self._rows[cy][cx]

    def read(self, cx: int, cy: int) -> float:
        if not self.has_cell(cx, cy):
            return UNKNOWN
        return self._rows[cy][cx].value

    def fuse(self, cx: int, cy: int,
             observation: AreaOccupancyObservation) -> DiscretePoint2D:
        if not self.has_cell(cx, cy):
            cx, cy = self._ensure_inside(cx, cy)
        return super().fuse(cx, cy, observation)

    def _ensure_inside(self, cx: int, cy: int) -> DiscretePoint2D:
        """Grow storage so that (cx, cy) is valid; returns shifted coord."""
        margin = self.expansion_margin

        def extra(deficit: int) -> int:
            return deficit + margin if deficit > 0 else 0

        left = extra(-cx)
        right = extra(cx - (self._width - 1))
        down = extra(-cy)
        up = extra(cy - (self._height - 1))

        new_width = self._width + left + right
        blank = self._prototype.blank()

        rows = [[blank.clone() for _ in range(new_width)] for _ in range(down)]
        for row in self._rows:
            rows.append([blank.clone() for _ in range(left)] + row +
                        [blank.clone() for _ in range(right)])
        rows.extend([blank.clone() for _ in range(new_width)]
                    for _ in range(up))

        logger.debug("Grid grown %dx%d -> %dx%d (left=%d right=%d down=%d up=%d)",
                     self._width, self._height, new_width, len(rows),
                     left, right, down, up)

        self._rows = rows
        self._width = new_width
        self._height = len(rows)
        self._map_center_x += left
        self._map_center_y += down
        return DiscretePoint2D(cx + left, cy + down)
