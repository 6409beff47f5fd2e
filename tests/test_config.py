#!/usr/bin/env python3
"""
Tests for the YAML scan simulation configuration.
"""

import math
import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from core.config import ScanSimulationConfig, load_config
from core.errors import InvalidConfigurationError

CONFIG_YAML = """
map:
  width: 40
  height: 20
  scale: 0.5
  unbounded: false
scanner:
  max_range: 12
  angular_step: 45
  half_field_of_view: 90
density: 2
pose: [1.5, -2.0, 90]
"""


class TestScanSimulationConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, 'sim.yaml')

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text):
        with open(self.path, 'w') as f:
            f.write(text)
        return self.path

    def test_defaults(self):
        config = ScanSimulationConfig()
        self.assertTrue(config.unbounded)
        self.assertEqual(config.density, 1.0)
        self.assertEqual(config.map_params.width, 100)
        self.assertAlmostEqual(config.scanner.angular_step, math.pi / 2)

    def test_load(self):
        config = load_config(self.write(CONFIG_YAML))
        self.assertFalse(config.unbounded)
        self.assertEqual((config.map_params.width, config.map_params.height),
                         (40, 20))
        self.assertEqual(config.map_params.scale, 0.5)
        self.assertEqual(config.scanner.max_range, 12.0)
        self.assertAlmostEqual(config.scanner.angular_step, math.pi / 4)
        self.assertAlmostEqual(config.scanner.half_field_of_view, math.pi / 2)
        self.assertEqual(config.density, 2.0)
        self.assertEqual((config.pose.x, config.pose.y), (1.5, -2.0))
        self.assertAlmostEqual(config.pose.theta, math.pi / 2)

    def test_empty_file(self):
        config = load_config(self.write(''))
        self.assertEqual(config, ScanSimulationConfig())

    def test_partial_sections(self):
        config = load_config(self.write('scanner:\n  max_range: 3\n'))
        self.assertEqual(config.scanner.max_range, 3.0)
        self.assertAlmostEqual(config.scanner.half_field_of_view, math.pi)

    def test_unknown_keys(self):
        with self.assertRaises(InvalidConfigurationError):
            load_config(self.write('lidar: {}\n'))
        with self.assertRaises(InvalidConfigurationError):
            load_config(self.write('map:\n  resolution: 0.1\n'))

    def test_invalid_values(self):
        with self.assertRaises(InvalidConfigurationError):
            load_config(self.write('density: 0\n'))
        with self.assertRaises(InvalidConfigurationError):
            load_config(self.write('map:\n  scale: -1\n'))
        with self.assertRaises(InvalidConfigurationError):
            load_config(self.write('pose: [1, 2]\n'))
        with self.assertRaises(InvalidConfigurationError):
            load_config(self.write('- 1\n- 2\n'))


if __name__ == '__main__':
    unittest.main(verbosity=2)
