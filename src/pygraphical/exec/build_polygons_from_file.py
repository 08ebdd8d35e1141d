"""
Script that reconstructs polygons from a CSV file of segments and optionally
writes the result to SVG.
"""

import argparse
import logging
import pathlib
import sys
from typing import Optional

from pygraphical.core.common import VERTEX_EQUAL_PRECISION
from pygraphical.core.segment import Segment
from pygraphical.output.write_output import (compute_fit_scale,
                                             write_reconstruction_svg)
from pygraphical.topology.reconstruct import (AssemblyParameters,
                                              PolygonBuildResult,
                                              build_polygons)
from pygraphical.utils.segment_io import read_segments_csv

logger: logging.Logger = logging.getLogger(__name__)


def main(args: argparse.Namespace) -> int:
    """
    Runs the primary program
    """
    input_filepath = pathlib.Path(args.input)
    output_filepath: Optional[pathlib.Path] = (pathlib.Path(args.output)
                                               if args.output is not None else None)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    parameters = AssemblyParameters(tolerance=args.tolerance,
                                    open_chains_as_segments=args.segments)

    # Get input segments
    segments: list[Segment] = read_segments_csv(input_filepath)
    logger.info("Read %s segments from %s", len(segments), input_filepath)

    result: PolygonBuildResult = build_polygons(segments, parameters)
    print(f"polygons: {len(result.polygons)}")
    print(f"polylines: {len(result.polylines)}")
    print(f"isolated: {len(result.isolated)}")

    if output_filepath is not None:
        offset: float = 400
        write_reconstruction_svg(result,
                                 output_filepath,
                                 compute_fit_scale(result, offset),
                                 offset)
        logger.info("Wrote %s", output_filepath)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pygraphical-build-polygons",
        description="Reconstruct polygons, polylines and isolated segments from segments.")
    parser.add_argument("-i", "--input", type=str, help="Segment CSV filepath.", required=True)
    parser.add_argument("-o", "--output", type=str, default=None, help="Output SVG filepath")
    parser.add_argument("-t", "--tolerance", type=float, default=VERTEX_EQUAL_PRECISION,
                        help="Absolute tolerance for shared endpoints")
    parser.add_argument("--segments", action="store_true",
                        help="Return open chains as individual segments")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def run() -> None:
    args: argparse.Namespace = build_parser().parse_args()
    sys.exit(main(args))


if __name__ == '__main__':
    run()
