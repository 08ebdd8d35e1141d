"""
points.py
Point utilities: midpoints, minimum points, planar angles around a centre and
planar convex hulls.
"""

import logging
import math

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from pygraphical.core.common import (MatrixNx3f, SpatialVector1d,
                                     to_spatial_vector)
from pygraphical.core.errors import (InvalidArgumentError,
                                     InvalidGeometryError)

logger: logging.Logger = logging.getLogger(__name__)

TWO_PI: float = 2.0 * math.pi


def mid_point(point_1, point_2) -> SpatialVector1d:
    """
    Return the point halfway between two points.
    """
    return (to_spatial_vector(point_1) + to_spatial_vector(point_2)) / 2.0


def minimum_point(points: list) -> SpatialVector1d:
    """
    Return the minimum point of a list, ordered by y, then x and finally z.

    :param points: [in] non empty list of 2D or 3D points
    :return: minimum point of shape (3, )
    """
    if not points:
        raise InvalidArgumentError("Cannot take the minimum of an empty point list")
    vecs: list[SpatialVector1d] = [to_spatial_vector(p) for p in points]
    return min(vecs, key=lambda p: (p[1], p[0], p[2]))


def rad_angle(centre, point) -> float:
    """
    Planar angle in radians from centre to point, measured counter-clockwise
    from the +x axis and normalized to [0, 2pi).
    """
    c: SpatialVector1d = to_spatial_vector(centre)
    p: SpatialVector1d = to_spatial_vector(point)
    angle: float = math.atan2(p[1] - c[1], p[0] - c[0])
    if angle < 0.0:
        angle += TWO_PI
    return angle


def arc_rad_angle(centre, start, end) -> float:
    """
    Counter-clockwise planar angle swept around centre going from start to end,
    in [0, 2pi).
    """
    swept: float = rad_angle(centre, end) - rad_angle(centre, start)
    if swept < 0.0:
        swept += TWO_PI
    return swept


def order_by_radian_and_distance(points: list, centre=(0.0, 0.0, 0.0)) -> list[SpatialVector1d]:
    """
    Order points by their planar angle from a centre point. If angles are equal,
    the point closer to the centre comes first.

    :param points: [in] 2D or 3D points
    :param centre: [in] centre point, defaults to the origin
    :return: ordered points of shape (3, )
    """
    c: SpatialVector1d = to_spatial_vector(centre)
    vecs: list[SpatialVector1d] = [to_spatial_vector(p) for p in points]
    return sorted(vecs, key=lambda p: (rad_angle(c, p), float(np.linalg.norm(p - c))))


def convex_hull_2d(points: list) -> list[SpatialVector1d]:
    """
    Planar convex hull of a point set, ignoring z.

    :param points: [in] 2D or 3D points
    :return: hull vertices in counter-clockwise order, with the z of the input points
    :raises InvalidGeometryError: for fewer than 3 points or a degenerate (collinear) set
    """
    if points is None or len(points) < 3:
        raise InvalidGeometryError("Convex hull needs at least 3 points")

    P: MatrixNx3f = np.array([to_spatial_vector(p) for p in points], dtype=np.float64)
    try:
        hull: ConvexHull = ConvexHull(P[:, :2])
    except QhullError as e:
        raise InvalidGeometryError("Degenerate point set for convex hull") from e

    # NOTE: Qhull returns 2D hull vertices in counter-clockwise order
    logger.debug("Convex hull with %s of %s points", len(hull.vertices), P.shape[0])
    return [P[i] for i in hull.vertices]
