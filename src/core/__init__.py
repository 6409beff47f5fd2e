"""
Core module.
- Numeric tolerance utilities
- Robot pose
- Error taxonomy

Configuration lives in core.config (imported explicitly, it depends on
the slam and simulation packages).
"""

from .errors import GridMapError, OutOfBoundsError, InvalidConfigurationError
from .math_utils import (
    DEFAULT_EPSILON,
    are_equal,
    is_multiple_of,
    less_or_equal,
    are_ordered,
    tolerant_floor,
    deg_to_rad,
    rad_to_deg
)
from .robot_pose import Point2D, RobotPose, RobotPoseDelta

__all__ = [
    # Errors
    'GridMapError',
    'OutOfBoundsError',
    'InvalidConfigurationError',

    # Tolerance
    'DEFAULT_EPSILON',
    'are_equal',
    'is_multiple_of',
    'less_or_equal',
    'are_ordered',
    'tolerant_floor',
    'deg_to_rad',
    'rad_to_deg',

    # Pose
    'Point2D',
    'RobotPose',
    'RobotPoseDelta',
]
