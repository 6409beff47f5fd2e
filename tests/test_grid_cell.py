#!/usr/bin/env python3
"""
Tests for grid cells and their fusion rules.
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from core.errors import InvalidConfigurationError
from slam.grid_cell import (
    UNKNOWN, AreaOccupancyObservation, AveragingGridCell, BlendingGridCell,
    GridCell, LogOddsGridCell, Occupancy
)


def hit(prob=1.0, quality=1.0, beams=1):
    return AreaOccupancyObservation(True, Occupancy(prob, quality),
                                    beam_count=beams)


def miss(prob=0.0, quality=1.0, beams=1):
    return AreaOccupancyObservation(False, Occupancy(prob, quality),
                                    beam_count=beams)


class TestOccupancy(unittest.TestCase):

    def test_valid(self):
        occ = Occupancy(0.7)
        self.assertEqual(occ.estimation_quality, 1.0)

    def test_out_of_range(self):
        with self.assertRaises(InvalidConfigurationError):
            Occupancy(1.5, 1.0)
        with self.assertRaises(InvalidConfigurationError):
            Occupancy(0.5, -0.1)


class TestGridCell(unittest.TestCase):
    """Plain cell: last observation wins."""

    def test_starts_unknown(self):
        cell = GridCell()
        self.assertTrue(cell.is_unknown)
        self.assertEqual(cell.value, UNKNOWN)

    def test_initial_value(self):
        self.assertEqual(GridCell(Occupancy(0.25)).value, 0.25)

    def test_fuse_replaces(self):
        cell = GridCell()
        cell += hit()
        self.assertEqual(cell.value, 1.0)
        cell += miss()
        self.assertEqual(cell.value, 0.0)
        self.assertFalse(cell.is_unknown)

    def test_clone_is_independent(self):
        cell = GridCell(Occupancy(0.0))
        duplicate = cell.clone()
        duplicate += hit()
        self.assertEqual(cell.value, 0.0)
        self.assertEqual(duplicate.value, 1.0)

    def test_blank(self):
        cell = GridCell(Occupancy(1.0))
        blank = cell.blank()
        self.assertIsInstance(blank, GridCell)
        self.assertTrue(blank.is_unknown)
        self.assertEqual(cell.value, 1.0)


class TestAveragingGridCell(unittest.TestCase):

    def test_first_observation(self):
        cell = AveragingGridCell()
        cell += hit(0.8)
        self.assertAlmostEqual(cell.value, 0.8)

    def test_weighted_mean(self):
        cell = AveragingGridCell()
        cell += hit(1.0)
        cell += miss(0.0, beams=3)
        self.assertAlmostEqual(cell.value, 0.25)

    def test_zero_quality_ignored(self):
        cell = AveragingGridCell(Occupancy(0.5, 1.0))
        cell += hit(1.0, quality=0.0)
        self.assertAlmostEqual(cell.value, 0.5)

    def test_blank_resets_weight(self):
        cell = AveragingGridCell()
        cell += hit(1.0, beams=10)
        blank = cell.blank()
        self.assertIsInstance(blank, AveragingGridCell)
        blank += miss(0.0)
        self.assertAlmostEqual(blank.value, 0.0)


class TestBlendingGridCell(unittest.TestCase):

    def test_blend_from_prior(self):
        cell = BlendingGridCell()
        cell += hit(1.0, quality=0.5)
        self.assertAlmostEqual(cell.value, 0.75)

    def test_full_quality_replaces(self):
        cell = BlendingGridCell(Occupancy(0.2))
        cell += hit(0.9, quality=1.0)
        self.assertAlmostEqual(cell.value, 0.9)


class TestLogOddsGridCell(unittest.TestCase):

    def test_hits_increase(self):
        cell = LogOddsGridCell()
        cell += hit()
        first = cell.value
        cell += hit()
        self.assertGreater(first, 0.5)
        self.assertGreater(cell.value, first)

    def test_miss_decreases(self):
        cell = LogOddsGridCell()
        cell += miss()
        self.assertLess(cell.value, 0.5)
        self.assertAlmostEqual(cell.log_odds, LogOddsGridCell.L_FREE)

    def test_clamped(self):
        cell = LogOddsGridCell()
        cell += hit(beams=100)
        self.assertEqual(cell.log_odds, LogOddsGridCell.L_MAX)
        self.assertLess(cell.value, 1.0)

    def test_clone_and_blank(self):
        cell = LogOddsGridCell()
        cell += hit()
        duplicate = cell.clone()
        duplicate += hit()
        self.assertAlmostEqual(cell.log_odds, LogOddsGridCell.L_OCC)
        blank = cell.blank()
        self.assertTrue(blank.is_unknown)
        self.assertIsNone(blank.log_odds)


if __name__ == '__main__':
    unittest.main(verbosity=2)
