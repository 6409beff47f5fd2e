"""
Scan simulation configuration.

YAML layout (angles in degrees, lengths in world units):

    map:
      width: 100
      height: 100
      scale: 1.0
      unbounded: true
    scanner:
      max_range: 150
      angular_step: 90
      half_field_of_view: 180
    density: 1
    pose: [0.5, 0.5, 0]     # x, y, theta (degrees)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from core.errors import InvalidConfigurationError
from core.math_utils import deg_to_rad
from core.robot_pose import RobotPose
from simulation.laser_scan import LaserScannerParams
from slam.grid_map import GridMapParams

_SECTIONS = {'map', 'scanner', 'density', 'pose'}
_MAP_KEYS = {'width', 'height', 'scale', 'unbounded',
             'map_center_x', 'map_center_y'}
_SCANNER_KEYS = {'max_range', 'angular_step', 'half_field_of_view'}


@dataclass
class ScanSimulationConfig:
    """Everything needed to run the scan generator on a fresh map."""
    map_params: GridMapParams = field(default_factory=GridMapParams)
    unbounded: bool = True
    scanner: LaserScannerParams = field(default_factory=LaserScannerParams)
    density: float = 1.0
    pose: RobotPose = field(default_factory=RobotPose)

    def __post_init__(self):
        if not self.density > 0:
            raise InvalidConfigurationError(
                f"Scan density must be positive, got {self.density}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ScanSimulationConfig':
        data = data or {}
        _check_keys('config', data, _SECTIONS)

        map_section = dict(data.get('map') or {})
        _check_keys('map', map_section, _MAP_KEYS)
        unbounded = bool(map_section.pop('unbounded', True))

        scanner_section = data.get('scanner') or {}
        _check_keys('scanner', scanner_section, _SCANNER_KEYS)
        scanner = LaserScannerParams(**{
            key: float(value) if key == 'max_range' else deg_to_rad(float(value))
            for key, value in scanner_section.items()
        })

        pose = RobotPose()
        if data.get('pose') is not None:
            try:
                x, y, theta_deg = data['pose']
            except (TypeError, ValueError) as e:
                raise InvalidConfigurationError(
                    f"pose must be [x, y, theta_deg], got {data['pose']!r}") from e
            pose = RobotPose(float(x), float(y), deg_to_rad(float(theta_deg)))

        return cls(
            map_params=GridMapParams(**map_section),
            unbounded=unbounded,
            scanner=scanner,
            density=float(data.get('density', 1.0)),
            pose=pose,
        )


def load_config(path: str) -> ScanSimulationConfig:
    """Load a ScanSimulationConfig from a YAML file."""
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise InvalidConfigurationError(f"{path}: top level must be a mapping")
    return ScanSimulationConfig.from_dict(data)


def _check_keys(section: str, data: Dict[str, Any], allowed: set):
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"'{section}' must be a mapping")
    unknown = set(data) - allowed
    if unknown:
        raise InvalidConfigurationError(
            f"Unknown keys in '{section}': {', '.join(sorted(unknown))}")
