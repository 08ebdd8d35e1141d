"""
polygon.py
Output geometry for reconstructed topology and planar polygon helpers.

Polygons and polylines carry their vertices in traversal order together with
the indices of the input segments they were built from, so callers can map
the output back to their own segments.
"""

from dataclasses import dataclass, field

import numpy as np

from pygraphical.core.common import (FLOAT_EQUAL_PRECISION, MatrixNx3f,
                                     SegmentIndex, SpatialVector1d,
                                     to_spatial_vector, vector_equal)


@dataclass
class Polygon:
    """
    Closed loop of at least 3 distinct vertices. The closing edge from the last
    vertex back to the first is implicit.
    """
    vertices: list[SpatialVector1d]
    segment_indices: list[SegmentIndex] = field(default_factory=list)

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    def as_array(self) -> MatrixNx3f:
        """Vertices as an (N, 3) matrix"""
        return np.array(self.vertices, dtype=np.float64).reshape(-1, 3)


@dataclass
class Polyline:
    """
    Open chain of connected segments, vertices in traversal order.
    """
    vertices: list[SpatialVector1d]
    segment_indices: list[SegmentIndex] = field(default_factory=list)

    @property
    def num_segments(self) -> int:
        return len(self.vertices) - 1

    def as_array(self) -> MatrixNx3f:
        """Vertices as an (N, 3) matrix"""
        return np.array(self.vertices, dtype=np.float64).reshape(-1, 3)


def is_closed(vertices: list, tol: float = FLOAT_EQUAL_PRECISION) -> bool:
    """
    Predicate: does the vertex list close on itself (first == last within tol)?
    """
    if len(vertices) < 2:
        return False
    return vector_equal(to_spatial_vector(vertices[0]), to_spatial_vector(vertices[-1]), tol)


def signed_area(vertices: list) -> float:
    """
    Shoelace signed area of the planar (XY) loop through the vertices.
    Positive for counter-clockwise loops. The loop is closed implicitly; an
    explicitly repeated last vertex contributes a zero length edge.
    """
    if len(vertices) < 3:
        raise ValueError("Need at least 3 points to compute area.")
    P: MatrixNx3f = np.array([to_spatial_vector(v) for v in vertices], dtype=np.float64)
    x = P[:, 0]
    y = P[:, 1]
    # Roll by -1 to represent edges (i -> i+1), implicitly connects last->first
    area2: float = np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))
    return 0.5 * float(area2)


def _point_on_planar_edge(p: np.ndarray, a: np.ndarray, b: np.ndarray, tol: float) -> bool:
    ab: np.ndarray = b - a
    ap: np.ndarray = p - a
    cross: float = float(ab[0] * ap[1] - ab[1] * ap[0])
    length: float = float(np.hypot(ab[0], ab[1]))
    if length <= tol:
        return bool(np.hypot(ap[0], ap[1]) <= tol)
    if abs(cross) / length > tol:
        return False
    t: float = float(np.dot(ap, ab)) / (length * length)
    return -tol <= t * length <= length + tol


def polygon_contains_point(vertices: list, point, tol: float = FLOAT_EQUAL_PRECISION) -> bool:
    """
    Even-odd containment test of a point against the planar (XY) polygon
    through the vertices. Points on the boundary are contained.

    :param vertices: [in] polygon vertices, closed implicitly
    :param point: [in] 2D or 3D query point
    :param tol: [in] distance below which a point counts as on the boundary
    :return: true iff the point is inside or on the polygon
    """
    if len(vertices) < 3:
        raise ValueError("Need at least 3 vertices for a polygon.")
    P: np.ndarray = np.array([to_spatial_vector(v)[:2] for v in vertices], dtype=np.float64)
    q: np.ndarray = to_spatial_vector(point)[:2]
    num_vertices: int = P.shape[0]

    inside: bool = False
    for i in range(num_vertices):
        a: np.ndarray = P[i]
        b: np.ndarray = P[(i + 1) % num_vertices]
        if _point_on_planar_edge(q, a, b, tol):
            return True

        # Count crossings of the ray going in +x from the query point
        if (a[1] > q[1]) != (b[1] > q[1]):
            x_cross: float = a[0] + (q[1] - a[1]) * (b[0] - a[0]) / (b[1] - a[1])
            if q[0] < x_cross:
                inside = not inside

    return inside
