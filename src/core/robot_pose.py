"""
Robot Pose

World frame position and heading of the robot.

Conventions:
- X, Y in world units (same units as the grid map scale)
- theta in radians, counter-clockwise from X axis
- theta is never wrapped; callers normalize it when they need to
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Point2D:
    """Point in the world frame."""
    x: float
    y: float

    def distance_to(self, other: 'Point2D') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class RobotPoseDelta:
    """Displacement applied to a pose (component-wise)."""
    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0

    def __add__(self, other: 'RobotPoseDelta') -> 'RobotPoseDelta':
        return RobotPoseDelta(self.x + other.x, self.y + other.y,
                              self.theta + other.theta)

    def __neg__(self) -> 'RobotPoseDelta':
        return RobotPoseDelta(-self.x, -self.y, -self.theta)


@dataclass
class RobotPose:
    """2D pose (position + orientation)."""
    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0  # Heading in radians

    def __add__(self, delta: RobotPoseDelta) -> 'RobotPose':
        """Move the pose by a delta. Angles are added, not normalized."""
        if not isinstance(delta, RobotPoseDelta):
            return NotImplemented
        return RobotPose(self.x + delta.x, self.y + delta.y,
                         self.theta + delta.theta)

    def __sub__(self, other: 'RobotPose') -> RobotPoseDelta:
        """Delta that moves `other` onto this pose."""
        if not isinstance(other, RobotPose):
            return NotImplemented
        return RobotPoseDelta(self.x - other.x, self.y - other.y,
                              self.theta - other.theta)

    @property
    def point(self) -> Point2D:
        return Point2D(self.x, self.y)

    def copy(self) -> 'RobotPose':
        return RobotPose(self.x, self.y, self.theta)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.theta)
