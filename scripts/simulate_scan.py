#!/usr/bin/env python3
"""
Scan Simulation

Generate an ideal laser scan from a grid map and a robot pose.

Usage:
    python scripts/simulate_scan.py --raster cecum.txt --zoom 10 --pose 10.5 -28.5 0
    python scripts/simulate_scan.py --map maps/lab.pgm --map-yaml maps/lab.yaml
    python scripts/simulate_scan.py --config sim.yaml --save-map /tmp/map.pgm

The map comes from a map_server PGM/YAML pair (--map) or from an ASCII
raster (--raster) patched into a fresh map built from --config.
"""

import sys
import os
import argparse
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.config import ScanSimulationConfig, load_config
from core.errors import GridMapError
from core.math_utils import deg_to_rad, rad_to_deg
from core.robot_pose import RobotPose
from simulation import GridMapPatcher, LaserScanGenerator
from slam import GridCell, PlainGridMap, UnboundedPlainGridMap, load_map, save_map

logger = logging.getLogger('simulate_scan')


def build_map(args, config: ScanSimulationConfig):
    if args.map:
        return load_map(args.map, args.map_yaml, unbounded=config.unbounded)

    map_cls = UnboundedPlainGridMap if config.unbounded else PlainGridMap
    grid = map_cls(GridCell(), config.map_params)
    if args.raster:
        with open(args.raster, 'r') as f:
            patched = GridMapPatcher().apply_text_raster(
                grid, f.read(), (0, 0), args.zoom, args.zoom)
        logger.info("Patched %d cells from %s", patched, args.raster)
    return grid


def main():
    parser = argparse.ArgumentParser(description='Laser scan simulation')
    parser.add_argument('--config', help='YAML configuration file')
    parser.add_argument('--map', help='map_server PGM image')
    parser.add_argument('--map-yaml', help='map_server YAML metadata')
    parser.add_argument('--raster', help='ASCII raster file')
    parser.add_argument('--zoom', type=int, default=1,
                        help='Cells per raster character')
    parser.add_argument('--pose', type=float, nargs=3,
                        metavar=('X', 'Y', 'THETA_DEG'))
    parser.add_argument('--density', type=float)
    parser.add_argument('--save-map', help='Save the map as PGM (+ .yaml)')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(levelname)s] %(name)s: %(message)s')

    try:
        config = load_config(args.config) if args.config else ScanSimulationConfig()
        grid = build_map(args, config)
    except (GridMapError, OSError) as e:
        logger.error("Cannot prepare map: %s", e)
        return 1

    pose = config.pose
    if args.pose:
        pose = RobotPose(args.pose[0], args.pose[1], deg_to_rad(args.pose[2]))
    density = args.density if args.density is not None else config.density

    generator = LaserScanGenerator(config.scanner)
    try:
        scan = generator.generate_2D_laser_scan(grid, pose, density)
    except GridMapError as e:
        logger.error("Scan generation failed: %s", e)
        return 1

    print(f"Pose: x={pose.x:.3f} y={pose.y:.3f} "
          f"theta={rad_to_deg(pose.theta):.1f} deg")
    print(f"Beams: {len(generator.beam_angles(density))}, returns: {len(scan)}")
    for point in scan:
        print(f"  {rad_to_deg(point.angle):8.2f} deg  {point.range:10.4f}")

    if args.save_map:
        yaml_path = os.path.splitext(args.save_map)[0] + '.yaml'
        save_map(grid, args.save_map, yaml_path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
