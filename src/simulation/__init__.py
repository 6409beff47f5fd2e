"""
Module de simulation: scans laser synthetiques sur une grille d'occupation.

Composants:
- LaserScanGenerator: lance des rayons dans une GridMap
- LaserScan / ScanPoint / LaserScannerParams: types de scan
- GridMapPatcher: construit des cartes de test a partir d'ASCII art
"""

from .laser_scan import LaserScan, LaserScannerParams, ScanPoint
from .laser_scan_generator import LaserScanGenerator
from .grid_map_patcher import GridMapPatcher

__all__ = [
    'LaserScan',
    'LaserScannerParams',
    'ScanPoint',
    'LaserScanGenerator',
    'GridMapPatcher',
]
