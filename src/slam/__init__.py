"""
SLAM Maps Module

Occupancy grid data model used by mapping and scan simulation.

Components:
- GridCell variants: belief of one cell and its fusion rule
- GridMap: abstract grid contract (geometry + access)
- PlainGridMap / UnboundedPlainGridMap: bounded and growing grids
- map_io: OccupancyGrid message / map_server file export and import

Usage:
    from slam import UnboundedPlainGridMap, GridMapParams, GridCell

    grid = UnboundedPlainGridMap(GridCell(), GridMapParams(100, 100, 0.05))
    grid.fuse_world(1.0, 2.0, AreaOccupancyObservation(True, Occupancy(1, 1)))
"""

from .grid_cell import (
    UNKNOWN,
    Occupancy,
    AreaOccupancyObservation,
    GridCell,
    AveragingGridCell,
    BlendingGridCell,
    LogOddsGridCell
)

from .grid_map import (
    DiscretePoint2D,
    GridMapParams,
    GridMap
)

from .plain_grid_map import (
    PlainGridMap,
    UnboundedPlainGridMap
)

from .map_io import (
    to_occupancy_grid_msg,
    pose_to_transform,
    save_map,
    load_map
)

__all__ = [
    # Cells
    'UNKNOWN',
    'Occupancy',
    'AreaOccupancyObservation',
    'GridCell',
    'AveragingGridCell',
    'BlendingGridCell',
    'LogOddsGridCell',

    # Maps
    'DiscretePoint2D',
    'GridMapParams',
    'GridMap',
    'PlainGridMap',
    'UnboundedPlainGridMap',

    # I/O
    'to_occupancy_grid_msg',
    'pose_to_transform',
    'save_map',
    'load_map',
]
