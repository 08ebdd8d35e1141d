"""
Reading and writing segment soups as CSV, one segment per row.
Rows are either x0,y0,z0,x1,y1,z1 or planar x0,y0,x1,y1.
"""
import csv
import logging
import pathlib

from pygraphical.core.errors import InvalidArgumentError
from pygraphical.core.segment import Segment

logger: logging.Logger = logging.getLogger(__name__)


def read_segments_csv(filepath: pathlib.Path) -> list[Segment]:
    """
    Read segments from CSV. Blank lines and lines starting with # are skipped.

    :param filepath: [in] CSV file to read
    :return: segments in file order
    :raises InvalidArgumentError: if a row has neither 4 nor 6 values
    """
    segments: list[Segment] = []

    with open(filepath, 'r', encoding='utf-8') as file:
        reader = csv.reader(file)
        for line_number, row in enumerate(reader, start=1):
            values: list[str] = [x.strip() for x in row if x.strip() != '']
            if len(values) == 0 or values[0].startswith('#'):
                continue

            try:
                coords: list[float] = [float(x) for x in values]
            except ValueError as e:
                raise InvalidArgumentError(f"{filepath}:{line_number}: {e}") from e

            if len(coords) == 6:
                segments.append(Segment.from_points(coords[0:3], coords[3:6]))
            elif len(coords) == 4:
                segments.append(Segment.from_points(coords[0:2], coords[2:4]))
            else:
                raise InvalidArgumentError(
                    f"{filepath}:{line_number}: expected 4 or 6 values, got {len(coords)}")

    logger.debug("Read %s segments from %s", len(segments), filepath)
    return segments


def write_segments_csv(filepath: pathlib.Path, segments: list[Segment]) -> None:
    """
    Write segments to CSV as x0,y0,z0,x1,y1,z1 rows.
    """
    precision: int = 17

    with open(filepath, 'w', encoding='utf-8', newline='') as file:
        writer = csv.writer(file)
        for segment in segments:
            writer.writerow([f"{x:.{precision}g}" for x in (*segment.start, *segment.end)])
