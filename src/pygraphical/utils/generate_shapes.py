"""
Segment soups of simple shapes, used by the tests and the command line.
"""
import logging
import math

import numpy as np

from pygraphical.core.common import SpatialVector1d
from pygraphical.core.segment import Segment

logger: logging.Logger = logging.getLogger(__name__)


def generate_closed_loop(points: list) -> list[Segment]:
    """
    Segments joining consecutive points, plus the closing segment from the
    last point back to the first.
    """
    num_points: int = len(points)
    return [Segment.from_points(points[i], points[(i + 1) % num_points])
            for i in range(num_points)]


def generate_open_chain(points: list) -> list[Segment]:
    return [Segment.from_points(points[i], points[i + 1]) for i in range(len(points) - 1)]


def generate_square(width: float = 1.0,
                    origin: tuple[float, float] = (0.0, 0.0)) -> list[Segment]:
    """
    Counter-clockwise axis aligned square as 4 segments.
    """
    x, y = origin
    return generate_closed_loop([(x, y),
                                 (x + width, y),
                                 (x + width, y + width),
                                 (x, y + width)])


def generate_regular_polygon(num_sides: int,
                             radius: float = 1.0,
                             angle_offset: float = 0.0) -> list[Segment]:
    """
    Regular polygon with vertices on a circle around the origin.
    """
    points: list[SpatialVector1d] = [
        np.array([radius * math.cos(angle_offset + 2 * math.pi * i / num_sides),
                  radius * math.sin(angle_offset + 2 * math.pi * i / num_sides),
                  0.0])
        for i in range(num_sides)]
    return generate_closed_loop(points)


def generate_figure_eight(width: float = 1.0) -> list[Segment]:
    """
    Two squares sharing exactly one corner at the origin.
    """
    return generate_square(width, (-width, -width)) + generate_square(width, (0.0, 0.0))


def generate_l_shape(width: float = 1.0, height: float = 1.0) -> list[Segment]:
    """
    Open chain of 2 segments through the origin.
    """
    return generate_open_chain([(width, 0.0), (0.0, 0.0), (0.0, height)])


def generate_disjoint_segments(num_segments: int,
                               length: float = 1.0,
                               spacing: float = 2.0) -> list[Segment]:
    """
    Parallel segments sharing no endpoints.
    """
    return [Segment.from_points((i * spacing, 0.0), (i * spacing, length))
            for i in range(num_segments)]


def generate_grid(num_rows: int, num_cols: int, width: float = 1.0) -> list[Segment]:
    """
    Grid lines split at every crossing. Interior crossings are branch vertices
    of degree 4.
    """
    segments: list[Segment] = []
    for i in range(num_rows + 1):
        for j in range(num_cols):
            segments.append(Segment.from_points((j * width, i * width),
                                                ((j + 1) * width, i * width)))
    for j in range(num_cols + 1):
        for i in range(num_rows):
            segments.append(Segment.from_points((j * width, i * width),
                                                (j * width, (i + 1) * width)))
    return segments
