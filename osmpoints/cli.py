import argparse
import logging
import sys

import numpy as np

from osmpoints.config import parse_config_file
from osmpoints.convert import convert_files
from osmpoints.encoder import read_points
from osmpoints.exceptions import OsmPointsError
from osmpoints.log import set_logging, setup_logger

logger = setup_logger('osmpoints.cli')


def parse_args(arg_list: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert OSM XML nodes into a binary point stream and a bounding box metadata file.")

    parser.add_argument('input_file', help='Path to input OSM XML file')
    parser.add_argument('points_file', help='Path to output binary file with little-endian float32 (lon, lat) pairs')
    parser.add_argument('metadata_file', help='Path to output JSON file with the bounding box')
    parser.add_argument("-c", "--config", dest="config_file", help="Path to YAML config file overriding the defaults")
    parser.add_argument("--chunk-size", dest="chunk_size", type=int, help="Input read size in bytes")
    parser.add_argument("--include-counts", dest="include_counts", action="store_true",
                        help="Add node and point counts to the metadata file")
    parser.add_argument("--progress", dest="progress", action="store_true", help="Show a progress bar")
    parser.add_argument("-v", "--verbose", dest="verbose", action="store_true",
                        help="Enable verbose output (DEBUG level logging)")

    return parser.parse_args(arg_list)


def _config_overrides(args: argparse.Namespace) -> dict:
    overrides = {}
    if args.verbose:
        overrides['log_level'] = 'DEBUG'
    if args.chunk_size is not None:
        overrides['reader'] = {'chunk_size': args.chunk_size}
    if args.include_counts:
        overrides['metadata'] = {'include_counts': True}
    if args.progress:
        overrides['progress'] = True
    return overrides


def main(arg_list: list[str] | None = None) -> int:
    args = parse_args(arg_list)

    try:
        config = parse_config_file(args.config_file, _config_overrides(args))
        set_logging(config)
        session = convert_files(args.input_file, args.points_file, args.metadata_file, config)
    except (OsmPointsError, OSError) as e:
        logger.error(e)
        return 1

    if session.bbox.is_empty:
        logger.warning("No node with valid coordinates found in %s", args.input_file)
    else:
        logger.info("Bounding box: %s", session.bbox)
    return 0


def parse_dump_args(arg_list: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the (lon, lat) records of a binary point file.")
    parser.add_argument('points_file', help='Path to binary point file')
    parser.add_argument("-n", dest="limit", type=int, default=None, help="Print only the first N points")
    return parser.parse_args(arg_list)


def dump_main(arg_list: list[str] | None = None) -> int:
    args = parse_dump_args(arg_list)

    try:
        points = read_points(args.points_file)
    except (OsmPointsError, OSError) as e:
        logger.error(e)
        return 1

    shown = points if args.limit is None else points[:args.limit]
    for lon, lat in shown:
        print(f"{np.float32(lon)!s},{np.float32(lat)!s}")
    logger.info("%d points in %s", len(points), args.points_file)
    return 0


if __name__ == '__main__':
    sys.exit(main())
