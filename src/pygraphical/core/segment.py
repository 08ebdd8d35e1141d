"""
segment.py
Representation of a segment, which is an ordered pair of endpoints plus an
optional opaque handle to the curve it was taken from.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from pygraphical.core.common import (FLOAT_EQUAL_PRECISION,
                                     POLYGONIZE_NUM_SAMPLES,
                                     VERTEX_EQUAL_PRECISION, MatrixNx3f,
                                     SpatialVector1d, float_equal,
                                     to_spatial_vector)
from pygraphical.core.errors import InvalidArgumentError
from pygraphical.core.polygon import Polyline

logger: logging.Logger = logging.getLogger(__name__)

# Parametric curve over the unit domain [0, 1]
ParametricCurve = Callable[[float], Any]


@dataclass(eq=False)
class Segment:
    """
    Straight segment between two 3D points. The curve handle is never
    inspected; it is only handed back to the caller when grouping curves.

    Segments compare and hash by identity, so two segments with the same
    endpoints are still different segments.
    """
    start: SpatialVector1d
    end: SpatialVector1d
    curve: Any = None

    def __post_init__(self) -> None:
        try:
            self.start = to_spatial_vector(self.start)
            self.end = to_spatial_vector(self.end)
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e

    # ************
    # Constructors
    # ************
    @classmethod
    def from_points(cls, start, end, curve: Any = None) -> "Segment":
        """
        Build a segment from 2D or 3D points. Planar points are lifted to z = 0.

        :param start: [in] start point
        :param end: [in] end point
        :param curve: [in] optional handle to re-emit when grouping curves
        :return: segment with endpoints of shape (3, )
        """
        return cls(start, end, curve)

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.end - self.start))

    @property
    def mid_point(self) -> SpatialVector1d:
        return (self.start + self.end) / 2.0

    @property
    def handle(self) -> Any:
        """The curve handle if one was given, else the segment itself"""
        return self if self.curve is None else self.curve

    def reversed(self) -> "Segment":
        """
        New segment with swapped endpoints and the same curve handle.
        """
        return Segment(self.end.copy(), self.start.copy(), self.curve)

    def __repr__(self) -> str:
        return f"Segment(start={self.start.tolist()}, end={self.end.tolist()})"


# *******
# Helpers
# *******

def _orientation(a: np.ndarray, b: np.ndarray, c: np.ndarray, tol: float) -> int:
    """
    Sign of the planar turn a -> b -> c: 1 counter-clockwise, -1 clockwise, 0 collinear.
    """
    cross: float = float((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0]))
    if abs(cross) <= tol:
        return 0
    return 1 if cross > 0.0 else -1


def _within_box(a: np.ndarray, b: np.ndarray, p: np.ndarray, tol: float) -> bool:
    """
    Return true iff p lies in the bounding box of a and b
    """
    return (min(a[0], b[0]) - tol <= p[0] <= max(a[0], b[0]) + tol and
            min(a[1], b[1]) - tol <= p[1] <= max(a[1], b[1]) + tol)


def point_on_segment(point, segment: Segment, tol: float = VERTEX_EQUAL_PRECISION) -> bool:
    """
    Return true iff the point lies on the segment within tolerance.
    """
    p: SpatialVector1d = to_spatial_vector(point)
    ab: SpatialVector1d = segment.end - segment.start
    ap: SpatialVector1d = p - segment.start
    length: float = float(np.linalg.norm(ab))

    # Degenerate segment is just a point
    if length <= tol:
        return bool(np.linalg.norm(ap) <= tol)

    # Distance to the supporting line
    if float(np.linalg.norm(np.cross(ab, ap))) / length > tol:
        return False

    t: float = float(np.dot(ap, ab)) / length
    return -tol <= t <= length + tol


def _planar_segments_touch(first: Segment, second: Segment, tol: float) -> bool:
    a: np.ndarray = first.start
    b: np.ndarray = first.end
    c: np.ndarray = second.start
    d: np.ndarray = second.end
    o1: int = _orientation(a, b, c, tol)
    o2: int = _orientation(a, b, d, tol)
    o3: int = _orientation(c, d, a, tol)
    o4: int = _orientation(c, d, b, tol)

    # Proper crossing
    if o1 != o2 and o3 != o4 and 0 not in (o1, o2, o3, o4):
        return True

    # Collinear and touching cases
    if o1 == 0 and _within_box(a, b, c, tol):
        return True
    if o2 == 0 and _within_box(a, b, d, tol):
        return True
    if o3 == 0 and _within_box(c, d, a, tol):
        return True
    if o4 == 0 and _within_box(c, d, b, tol):
        return True

    return False


def segments_intersect(first: Segment,
                       second: Segment,
                       tol: float = FLOAT_EQUAL_PRECISION) -> bool:
    """
    Return true iff the planar (XY) projections of the two segments cross.
    The second segment merely touching the first with one of its endpoints is
    not an intersection.

    :param first: [in] segment to test against
    :param second: [in] segment whose endpoints may rest on the first
    :param tol: [in] tolerance for collinearity and endpoint contact
    """
    if not _planar_segments_touch(first, second, tol):
        return False

    # Touching at an endpoint of the second segment does not count
    if point_on_segment(second.start, first, tol):
        return False
    if point_on_segment(second.end, first, tol):
        return False
    return True


def polygonize(curve: ParametricCurve,
               max_length: float,
               as_polycurve: bool = False,
               num_samples: int = POLYGONIZE_NUM_SAMPLES) -> list[Segment] | Polyline:
    """
    Approximate a curve by straight segments of at most max_length, spaced at
    equal arc length. A straight curve is returned as a single segment.

    :param curve: [in] callable mapping t in [0, 1] to a 2D or 3D point
    :param max_length: [in] maximum length of each subdivision
    :param as_polycurve: [in] if true return one Polyline instead of a list of segments
    :param num_samples: [in] number of samples used to measure the curve length
    :return: segments, or a Polyline through their endpoints
    """
    if curve is None:
        raise InvalidArgumentError("No curve provided (curve is None).")
    if not (math.isfinite(max_length) and max_length > 0.0):
        raise InvalidArgumentError(f"max_length must be positive, got {max_length}")
    if num_samples < 2:
        raise InvalidArgumentError(f"num_samples must be at least 2, got {num_samples}")

    # Sample the curve and accumulate arc length
    t_samples: np.ndarray = np.linspace(0.0, 1.0, num_samples + 1)
    samples: MatrixNx3f = np.array([to_spatial_vector(curve(t)) for t in t_samples],
                                   dtype=np.float64)
    steps: np.ndarray = np.linalg.norm(np.diff(samples, axis=0), axis=1)
    arc_lengths: np.ndarray = np.concatenate(([0.0], np.cumsum(steps)))
    curve_length: float = float(arc_lengths[-1])
    chord_length: float = float(np.linalg.norm(samples[-1] - samples[0]))

    points: list[SpatialVector1d]
    if float_equal(curve_length, chord_length, VERTEX_EQUAL_PRECISION):
        points = [samples[0], samples[-1]]
    else:
        divisions: int = math.ceil(curve_length / max_length)
        if divisions > 1:
            targets: np.ndarray = np.linspace(0.0, curve_length, divisions + 1)
            points = [np.array([np.interp(s, arc_lengths, samples[:, k]) for k in range(3)])
                      for s in targets[1:-1]]
            points = [samples[0]] + points + [samples[-1]]
        else:
            points = [samples[0], samples[-1]]

    logger.debug("Polygonized curve of length %s into %s segments",
                 curve_length, len(points) - 1)

    if as_polycurve:
        return Polyline(points, list(range(len(points) - 1)))
    return [Segment(points[i], points[i + 1]) for i in range(len(points) - 1)]
