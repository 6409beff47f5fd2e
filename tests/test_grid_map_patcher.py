#!/usr/bin/env python3
"""
Tests for the ASCII raster map builder.
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from core.errors import InvalidConfigurationError
from simulation.grid_map_patcher import GridMapPatcher
from slam.grid_cell import UNKNOWN, GridCell, Occupancy
from slam.grid_map import GridMapParams
from slam.plain_grid_map import PlainGridMap, UnboundedPlainGridMap


class TestGridMapPatcher(unittest.TestCase):

    def setUp(self):
        self.grid = PlainGridMap(GridCell(), GridMapParams(10, 10, 1.0, 5, 5))
        self.patcher = GridMapPatcher()

    def value_at(self, x, y):
        """Belief at cell (x, y) relative to the origin cell."""
        return self.grid.read(x + 5, y + 5)

    def test_characters(self):
        patched = self.patcher.apply_text_raster(self.grid, '# ?')
        self.assertEqual(patched, 2)
        self.assertEqual(self.value_at(0, 0), 1.0)
        self.assertEqual(self.value_at(1, 0), 0.0)
        self.assertEqual(self.value_at(2, 0), UNKNOWN)

    def test_rows_go_down(self):
        self.patcher.apply_text_raster(self.grid, 'x\n \nx')
        self.assertEqual(self.value_at(0, 0), 1.0)
        self.assertEqual(self.value_at(0, -1), 0.0)
        self.assertEqual(self.value_at(0, -2), 1.0)

    def test_offset(self):
        self.patcher.apply_text_raster(self.grid, ['+'], offset=(-2, 3))
        self.assertEqual(self.value_at(-2, 3), 1.0)
        self.assertEqual(self.grid.known_cell_count(), 1)

    def test_zoom(self):
        patched = self.patcher.apply_text_raster(
            self.grid, ['#', ' '], w_zoom=2, h_zoom=3)
        self.assertEqual(patched, 12)
        for x in range(2):
            for y in range(3):
                self.assertEqual(self.value_at(x, -y), 1.0)
                self.assertEqual(self.value_at(x, -y - 3), 0.0)
        self.assertEqual(self.value_at(2, 0), UNKNOWN)

    def test_invalid_zoom(self):
        with self.assertRaises(InvalidConfigurationError):
            self.patcher.apply_text_raster(self.grid, '#', w_zoom=0)

    def test_custom_occupancy(self):
        patcher = GridMapPatcher(occupied=Occupancy(0.8), free=Occupancy(0.1))
        patcher.apply_text_raster(self.grid, '# ')
        self.assertAlmostEqual(self.value_at(0, 0), 0.8)
        self.assertAlmostEqual(self.value_at(1, 0), 0.1)

    def test_scaled_map(self):
        grid = PlainGridMap(GridCell(), GridMapParams(10, 10, 0.1, 0, 9))
        self.patcher.apply_text_raster(grid, '##', offset=(3, 0))
        self.assertEqual(grid.read(3, 9), 1.0)
        self.assertEqual(grid.read(4, 9), 1.0)
        self.assertEqual(grid.known_cell_count(), 2)

    def test_unbounded_growth_keeps_layout(self):
        grid = UnboundedPlainGridMap(GridCell(), GridMapParams(2, 2, 1.0, 0, 0),
                                     expansion_margin=1)
        self.patcher.apply_text_raster(grid, ['# #', '   ', '# #'],
                                       w_zoom=2, h_zoom=2)
        self.assertEqual(grid.read(*grid.world_to_cell(0.5, 0.5)), 1.0)
        self.assertEqual(grid.read(*grid.world_to_cell(2.5, 0.5)), 0.0)
        self.assertEqual(grid.read(*grid.world_to_cell(4.5, -4.5)), 1.0)
        self.assertEqual(grid.read(*grid.world_to_cell(1.5, -2.5)), 0.0)
        self.assertEqual(grid.known_cell_count(), 36)


if __name__ == '__main__':
    unittest.main(verbosity=2)
