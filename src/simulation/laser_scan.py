"""
Laser scan data types.

A LaserScan is sparse: beams without a return within max_range are
omitted rather than padded with a sentinel range.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

import numpy as np

from core.errors import InvalidConfigurationError


@dataclass(frozen=True)
class LaserScannerParams:
    """Scanner configuration."""
    max_range: float = 150.0                      # world units
    angular_step: float = math.pi / 2             # radians between beams
    half_field_of_view: float = math.pi           # radians from heading

    def __post_init__(self):
        for name in ('max_range', 'angular_step', 'half_field_of_view'):
            value = getattr(self, name)
            if not value > 0 or math.isinf(value):
                raise InvalidConfigurationError(
                    f"LaserScannerParams.{name} must be positive and finite, "
                    f"got {value}")


@dataclass
class ScanPoint:
    """One beam return."""
    range: float        # Distance from the optical center (world units)
    angle: float        # Radians, relative to the robot heading
    is_occupied: bool = True

    def to_cartesian(self) -> Tuple[float, float]:
        """Hit point in the robot frame."""
        return (self.range * math.cos(self.angle),
                self.range * math.sin(self.angle))


@dataclass
class LaserScan:
    """Ordered (by increasing angle) sequence of scan points."""
    points: List[ScanPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[ScanPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> ScanPoint:
        return self.points[index]

    @property
    def min_range(self) -> float:
        if not self.points:
            return float('inf')
        return min(p.range for p in self.points)

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """(ranges, angles) as numpy arrays."""
        ranges = np.array([p.range for p in self.points], dtype=np.float64)
        angles = np.array([p.angle for p in self.points], dtype=np.float64)
        return ranges, angles
