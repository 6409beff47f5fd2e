"""
Map Export / Import

ROS compatible views of a grid map:
- to_occupancy_grid_msg: nav_msgs/OccupancyGrid shaped dict
- pose_to_transform: geometry_msgs/TransformStamped shaped dict
- save_map / load_map: map_server files (PGM image + YAML metadata)

Image values (map_server, trinary):
- 254 = free (white)
- 205 = unknown (gray)
- 0 = occupied (black)
"""

import logging
import math
import os
from typing import Any, Dict, Optional

import numpy as np
import yaml

from core.errors import InvalidConfigurationError
from core.math_utils import is_multiple_of
from core.robot_pose import Point2D, RobotPose
from .grid_cell import AreaOccupancyObservation, GridCell, Occupancy, UNKNOWN
from .grid_map import GridMap, GridMapParams
from .plain_grid_map import PlainGridMap, UnboundedPlainGridMap

logger = logging.getLogger(__name__)

FREE_PIXEL = 254
UNKNOWN_PIXEL = 205
OCCUPIED_PIXEL = 0

FREE_THRESHOLD = 0.196
OCCUPIED_THRESHOLD = 0.65


def to_occupancy_grid_msg(grid: GridMap,
                          frame_id: str = 'odom_combined') -> Dict[str, Any]:
    """
    Convert a grid map to an OccupancyGrid message layout.

    Data is row-major starting from the cell at the map origin (lowest y),
    values in [0, 100], -1 for unknown.
    """
    values = grid.values()[::-1]
    data = np.where(values == UNKNOWN, -1, (values * 100).astype(np.int64))

    return {
        'header': {'frame_id': frame_id},
        'info': {
            'width': grid.width,
            'height': grid.height,
            'resolution': grid.scale,
            # move map to the middle
            'origin': {
                'position': {'x': -grid.scale * grid.map_center_x,
                             'y': -grid.scale * grid.map_center_y,
                             'z': 0.0},
                'orientation': {'x': 0.0, 'y': 0.0, 'z': 0.0, 'w': 1.0},
            },
        },
        'data': data.astype(np.int8).ravel().tolist(),
    }


def pose_to_transform(pose: RobotPose, parent_frame: str = 'odom_combined',
                      child_frame: str = 'robot_pose') -> Dict[str, Any]:
    """Robot pose as a transform from parent_frame (yaw-only rotation)."""
    return {
        'header': {'frame_id': parent_frame},
        'child_frame_id': child_frame,
        'transform': {
            'translation': {'x': pose.x, 'y': pose.y, 'z': 0.0},
            'rotation': {'x': 0.0, 'y': 0.0,
                         'z': math.sin(pose.theta / 2),
                         'w': math.cos(pose.theta / 2)},
        },
    }


def get_map_image(grid: GridMap) -> np.ndarray:
    """Trinary image (top row = highest y), compatible with OpenCV."""
    values = grid.values()
    image = np.full(values.shape, UNKNOWN_PIXEL, dtype=np.uint8)
    known = values != UNKNOWN
    image[known & (values <= FREE_THRESHOLD)] = FREE_PIXEL
    image[known & (values >= OCCUPIED_THRESHOLD)] = OCCUPIED_PIXEL
    return image


def save_map(grid: GridMap, image_path: str,
             yaml_path: Optional[str] = None):
    """
    Save map in ROS map_server format.

    Args:
        grid: Map to save
        image_path: Path for the PGM image
        yaml_path: Path for metadata YAML (optional)
    """
    image = get_map_image(grid)
    _save_pgm(image_path, image)

    if yaml_path:
        metadata = {
            'image': os.path.basename(image_path),
            'resolution': grid.scale,
            'origin': [-grid.scale * grid.map_center_x,
                       -grid.scale * grid.map_center_y, 0.0],
            'negate': 0,
            'occupied_thresh': OCCUPIED_THRESHOLD,
            'free_thresh': FREE_THRESHOLD,
        }
        with open(yaml_path, 'w') as f:
            yaml.safe_dump(metadata, f, default_flow_style=None)

    logger.info("Saved %dx%d map to %s", grid.width, grid.height, image_path)


def load_map(image_path: str, yaml_path: Optional[str] = None,
             prototype: Optional[GridCell] = None,
             unbounded: bool = False) -> PlainGridMap:
    """
    Load a map saved by save_map (or any trinary map_server map).

    Args:
        image_path: PGM image
        yaml_path: map_server metadata; without it the scale is 1 and the
            origin is the middle of the image
        prototype: Cell variant to populate (default: GridCell)
        unbounded: Return an UnboundedPlainGridMap

    Returns:
        Populated grid map
    """
    image = _load_pgm(image_path)
    height, width = image.shape

    scale = 1.0
    center_x, center_y = width // 2, height // 2
    if yaml_path:
        with open(yaml_path, 'r') as f:
            meta = yaml.safe_load(f) or {}
        scale = float(meta.get('resolution', scale))
        origin = meta.get('origin')
        if origin is not None:
            center_x = _origin_to_center(origin[0], scale)
            center_y = _origin_to_center(origin[1], scale)
        if meta.get('negate', 0):
            image = 255 - image

    params = GridMapParams(width, height, scale, center_x, center_y)
    map_cls = UnboundedPlainGridMap if unbounded else PlainGridMap
    grid = map_cls(prototype or GridCell(), params)

    occupied = AreaOccupancyObservation(True, Occupancy(1.0, 1.0))
    free = AreaOccupancyObservation(False, Occupancy(0.0, 1.0))
    # image row 0 is the top of the map
    for row in range(height):
        cy = height - 1 - row
        for cx in range(width):
            pixel = image[row, cx]
            if pixel == OCCUPIED_PIXEL:
                grid.fuse(cx, cy, _located(grid, cx, cy, occupied))
            elif pixel == FREE_PIXEL:
                grid.fuse(cx, cy, _located(grid, cx, cy, free))

    logger.info("Loaded %dx%d map (scale %.3f) from %s",
                width, height, scale, image_path)
    return grid


def _located(grid: GridMap, cx: int, cy: int,
             observation: AreaOccupancyObservation) -> AreaOccupancyObservation:
    x, y = grid.cell_to_world(cx, cy)
    return AreaOccupancyObservation(observation.is_occupied,
                                    observation.occupancy, Point2D(x, y),
                                    observation.beam_count)


def _origin_to_center(origin: float, scale: float) -> int:
    if not is_multiple_of(origin, scale):
        raise InvalidConfigurationError(
            f"Map origin {origin} is not aligned with resolution {scale}")
    return -int(round(origin / scale))


def _save_pgm(path: str, image: np.ndarray):
    """Save as PGM (Portable Gray Map)."""
    height, width = image.shape
    with open(path, 'wb') as f:
        f.write(f"P5\n{width} {height}\n255\n".encode())
        f.write(image.astype(np.uint8).tobytes())


def _load_pgm(path: str) -> np.ndarray:
    """Load a binary (P5) PGM file."""
    with open(path, 'rb') as f:
        magic = f.readline().decode().strip()
        if magic != 'P5':
            raise InvalidConfigurationError(f"Not a P5 PGM file: {path}")

        # Skip comments
        line = f.readline().decode()
        while line.startswith('#'):
            line = f.readline().decode()

        width, height = map(int, line.split())
        maxval = int(f.readline().decode().strip())
        if maxval > 255:
            raise InvalidConfigurationError(
                f"16-bit PGM is not supported: {path}")

        data = np.frombuffer(f.read(width * height), dtype=np.uint8)
        return data.reshape((height, width))
