"""
Laser Scan Generator

Casts the beams of an ideal (noiseless) 2D laser scanner through an
occupancy grid and reports where they hit occupied cells.

Algorithm:
1. Beam fan from -half_fov (inclusive) to +half_fov (exclusive), one beam
   per angular_step / density
2. If the robot's own cell is occupied, every beam returns range 0
3. Otherwise each beam walks the cells it crosses, boundary by boundary,
   until it enters an occupied cell, leaves the map or passes max_range.
   Unknown cells are passable.

The walk starts from GridMap.world_to_cell of the robot position and then
moves by integer cell indices only, so a crossed cell is never lost to
floating point round-off. The reported range is a point inside the hit
cell, chosen so that world_to_cell_by_vec(range) names that cell.

Usage:
    lsg = LaserScanGenerator(LaserScannerParams(150, deg_to_rad(1),
                                                deg_to_rad(180)))
    scan = lsg.generate_2D_laser_scan(grid, RobotPose(0.5, 0.5, 0))
    for point in scan:
        print(point.range, point.angle)
"""

import logging
import math
from typing import List, Optional, Tuple

from core.errors import InvalidConfigurationError
from core.math_utils import (
    DEFAULT_EPSILON, are_equal, less_or_equal
)
from core.robot_pose import RobotPose
from slam.grid_cell import UNKNOWN
from slam.grid_map import DiscretePoint2D, GridMap
from .laser_scan import LaserScan, LaserScannerParams, ScanPoint

logger = logging.getLogger(__name__)

# cos/sin round-off of axis-aligned headings (cos(pi/2) ~ 6e-17)
_AXIS_EPS = 1e-12
# Crossings closer than this (relative) go through a cell corner
_CORNER_EPS = 1e-9
# Distance of a sample past a cell face, in units of world_to_cell tolerance
_INSIDE_FACTOR = 10


class _AxisWalker:
    """Cell boundary crossings of a ray along one axis."""

    def __init__(self, origin: float, direction: float, index: int,
                 center: int, scale: float):
        """
        Args:
            origin: Ray origin on this axis (world units)
            direction: Ray direction component (0 for no motion)
            index: Map cell index holding the origin
            center: Map center on this axis (cells)
            scale: Cell size
        """
        self.index = index
        if direction == 0.0:
            self.step = 0
            self.boundary = 0
            self.t_next = math.inf
            self.t_delta = math.inf
            self.direction = 0.0
            return
        self.direction = direction
        world_index = index - center
        if direction > 0:
            self.step = 1
            self.boundary = world_index + 1
        else:
            self.step = -1
            self.boundary = world_index
        self.t_next = max(0.0, (self.boundary * scale - origin) / direction)
        self.t_delta = scale / abs(direction)

    def crosses_at(self, t: float) -> bool:
        return math.isfinite(self.t_next) and \
            are_equal(self.t_next, t, _CORNER_EPS)

    def inside_offset(self, scale: float) -> float:
        """Ray length needed to move clearly past the current boundary."""
        margin = _INSIDE_FACTOR * DEFAULT_EPSILON * max(1.0, abs(self.boundary))
        return margin * scale / abs(self.direction)

    def advance(self):
        self.index += self.step
        self.boundary += self.step
        self.t_next += self.t_delta

    def has_left(self, size: int) -> bool:
        """True once no cell ahead on this axis lies inside [0, size)."""
        if self.step > 0:
            return self.index >= size
        if self.step < 0:
            return self.index < 0
        return not 0 <= self.index < size


class LaserScanGenerator:
    """
    Synthetic laser scanner over a GridMap.

    The grid is only read, never modified.
    """

    def __init__(self, params: LaserScannerParams,
                 occupancy_threshold: float = 1.0):
        """
        Args:
            params: Scanner configuration
            occupancy_threshold: Minimal cell value that stops a beam
        """
        if not 0.0 < occupancy_threshold <= 1.0:
            raise InvalidConfigurationError(
                f"occupancy_threshold must be in (0, 1], "
                f"got {occupancy_threshold}")
        self.params = params
        self.occupancy_threshold = occupancy_threshold

    def is_occupied(self, value: float) -> bool:
        if value == UNKNOWN:
            return False
        return less_or_equal(self.occupancy_threshold, value)

    def beam_angles(self, density: float = 1) -> List[float]:
        """
        Relative beam angles, increasing.

        With half_fov = 180 deg the -180/+180 beams coincide; only -180 is
        emitted.
        """
        if not density > 0 or math.isinf(density):
            raise InvalidConfigurationError(
                f"Scan density must be positive, got {density}")
        half_fov = self.params.half_field_of_view
        step = self.params.angular_step / density

        angles = []
        angle = -half_fov
        while angle < half_fov and not are_equal(angle, half_fov):
            angles.append(angle)
            angle = -half_fov + len(angles) * step

        if not angles:
            raise InvalidConfigurationError(
                "Field of view and angular step produce no beams")
        return angles

    def generate_2D_laser_scan(self, grid: GridMap, pose: RobotPose,
                               density: float = 1) -> LaserScan:
        """
        Simulate a scan from `pose`.

        Args:
            grid: Map to scan
            pose: Robot pose in the world frame
            density: Beams per configured angular step (>0)

        Returns:
            LaserScan ordered by increasing angle; beams with no return
            within max_range are omitted
        """
        angles = self.beam_angles(density)

        robot_cell = grid.world_to_cell(pose.x, pose.y)
        if grid.has_cell(*robot_cell) and \
                self.is_occupied(grid.read(*robot_cell)):
            # The sensor is inside an obstacle
            logger.debug("Robot cell %s is occupied, %d zero-range beams",
                         tuple(robot_cell), len(angles))
            return LaserScan([ScanPoint(0.0, a, True) for a in angles])

        points = []
        for beam_angle in angles:
            rng = self.cast_beam(grid, pose.x, pose.y, pose.theta + beam_angle)
            if rng is not None:
                points.append(ScanPoint(rng, beam_angle, True))

        logger.debug("Scan from (%.3f, %.3f, %.3f): %d/%d beams returned",
                     pose.x, pose.y, pose.theta, len(points), len(angles))
        return LaserScan(points)

    # Snake-case alias
    generate_2d_laser_scan = generate_2D_laser_scan

    def cast_beam(self, grid: GridMap, x0: float, y0: float,
                  theta: float) -> Optional[float]:
        """
        Distance along absolute direction `theta` to the first occupied
        cell, or None if there is none within max_range.
        """
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        dx = 0.0 if are_equal(cos_t, 0.0, _AXIS_EPS) else cos_t
        dy = 0.0 if are_equal(sin_t, 0.0, _AXIS_EPS) else sin_t

        scale = grid.scale
        start = grid.world_to_cell(x0, y0)
        walkers = (
            _AxisWalker(x0, dx, start.x, grid.map_center_x, scale),
            _AxisWalker(y0, dy, start.y, grid.map_center_y, scale),
        )
        sizes = (grid.width, grid.height)

        while True:
            t = min(w.t_next for w in walkers)
            if not less_or_equal(t, self.params.max_range):
                return None

            offset = 0.0
            for walker in walkers:
                if walker.crosses_at(t):
                    offset = max(offset, walker.inside_offset(scale))
                    walker.advance()
            if any(w.has_left(size) for w, size in zip(walkers, sizes)):
                return None

            cell = DiscretePoint2D(walkers[0].index, walkers[1].index)
            if not grid.has_cell(*cell):
                continue
            if self.is_occupied(grid.read(*cell)):
                t_exit = min(w.t_next for w in walkers)
                return self._range_inside(grid, x0, y0, cos_t, sin_t, cell,
                                          t, t_exit, offset)

    def _range_inside(self, grid: GridMap, x0: float, y0: float,
                      cos_t: float, sin_t: float, cell: DiscretePoint2D,
                      t_enter: float, t_exit: float, offset: float) -> float:
        """Range in [t_enter, t_exit] that world_to_cell maps onto `cell`."""
        candidates = (t_enter + min(offset, (t_exit - t_enter) / 2),
                      (t_enter + t_exit) / 2)
        for rng in candidates:
            if grid.world_to_cell(x0 + rng * cos_t, y0 + rng * sin_t) == cell:
                return rng
        # Sliver thinner than the world_to_cell tolerance
        return candidates[-1]

    def scan_ranges(self, grid: GridMap, pose: RobotPose,
                    density: float = 1) -> Tuple[List[float], List[float]]:
        """Dense (ranges, angles) with max_range for beams without return."""
        scan = self.generate_2D_laser_scan(grid, pose, density)
        hits = {p.angle: p.range for p in scan}
        angles = self.beam_angles(density)
        ranges = [hits.get(a, self.params.max_range) for a in angles]
        return ranges, angles
