"""
Holding type aliases, "global" constants and small numeric helpers that pertain
to all of pygraphical.
"""
import csv
import logging
import math
import pathlib

import numpy as np
import numpy.testing as npt

logger: logging.Logger = logging.getLogger(__name__)


# *******
# GLOBALS
# *******

# Epsilon for default float
FLOAT_EQUAL_PRECISION: float = 1e-10
# Epsilon for vertex identity. Two coordinates are the same vertex iff every
# component differs by no more than this.
VERTEX_EQUAL_PRECISION: float = 1e-6
# Number of samples used to measure arc length when polygonizing a curve
POLYGONIZE_NUM_SAMPLES: int = 256

# *** Real number representations ***

# NOTE: Since NumPy does not have shape typing, it has been done so as below for readability reasons.
PlanarPoint1d = np.ndarray  # shape (2, )
SpatialVector1d = np.ndarray  # shape (3, )
Vector1D = np.ndarray  # shape (n, )
MatrixNx3f = np.ndarray  # np.ndarray[tuple[int, int], np.dtype[np.float64]]
Color = tuple[float, float, float, float]

# Typedefs for readability.
VertexIndex = int
SegmentIndex = int
GroupIndex = int

# Used for accessing numpy shape for clarity sake
ROWS = 0
COLS = 1
PLACEHOLDER_INDEX = -1

# ***********************
# TESTING FLAGS
CHECK_VALIDITY: bool = False

#
# ***********************


def float_equal(x: float, y: float, eps=FLOAT_EQUAL_PRECISION) -> bool:
    """
    @brief Check if two floating point values are numerically equal

    @param[in] x: first value to compare
    @param[in] y: second value to compare
    @param[in] eps: threshold for equality
    @return true iff x - y is numerically zero
    """

    # NOTE: Use absolute tolerance! Relative tolerance is not suited for our purpose.
    return math.isclose(x, y, abs_tol=eps)


def vector_equal(v: np.ndarray, w: np.ndarray, eps: float = FLOAT_EQUAL_PRECISION) -> bool:
    """
    @brief Check if two vectors of floating point values are numerically
    equal componentwise

    @param[in] v: first vector of values to compare
    @param[in] w: second vector of values to compare
    @param[in] eps: threshold for equality
    @return true iff every |v_i - w_i| <= eps
    """
    return bool(np.all(np.abs(np.asarray(v) - np.asarray(w)) <= eps))


def vector_contains_nonfinite(vec: Vector1D) -> bool:
    assert vec.ndim == 1
    return not np.isfinite(vec).all()


def to_spatial_vector(point) -> SpatialVector1d:
    """
    Convert a 2D or 3D coordinate into a float64 array of shape (3, ).
    Planar points are lifted to z = 0.

    :param point: sequence or array of 2 or 3 numbers
    :return: spatial vector of shape (3, )
    :raises ValueError: if the point does not have 2 or 3 components
    """
    vec: np.ndarray = np.asarray(point, dtype=np.float64).reshape(-1)
    if vec.shape == (2, ):
        vec = np.array([vec[0], vec[1], 0.0], dtype=np.float64)
    if vec.shape != (3, ):
        raise ValueError(f"Expected a point with 2 or 3 coordinates, got shape {vec.shape}")
    return vec


def compute_point_cloud_bounding_box(points: MatrixNx3f) -> tuple[Vector1D, Vector1D]:
    """
    Compute the bounding box for a matrix of points in R^n.
    The points are assumed to be the rows of the points matrix.

    :param points: points to compute the bounding box for.
    :type points: np.ndarray

    :return (min_point, max_point): tuple of (point with minimum coordinates for the bounding box,
    point with maximum coordinates for the bounding box).
    :rtype: tuple[Vector1d, Vector1d]
    """
    num_points: int = points.shape[ROWS]
    dimension: int = points.shape[COLS]

    if num_points == 0:
        raise ValueError("num_points cannot be 0")
    if dimension == 0:
        raise ValueError("dimension cannot be 0")

    # Get minimum and maximum coordinates for the points
    min_point: Vector1D = points.min(axis=0)
    max_point: Vector1D = points.max(axis=0)
    assert min_point.ndim == 1
    assert max_point.ndim == 1
    return min_point, max_point


# **********************
# Testing helpers
# **********************

def deserialize_list_list_varying_lengths(filepath: pathlib.Path) -> list[list[int]]:
    """
    Used when the csv list contains list with varying list lengths.
    e.g.
    [
    [1, 2, 3, 4],
    [1, 2],
    [5, 7, 8, 8, 19, 1],
    ]
    """
    rows_control: list[list[int]] = []

    with open(filepath, 'r', encoding='utf-8') as file:
        reader = csv.reader(file)
        for row in reader:
            parsed: list[int] = [int(x) for x in row if x.strip() != '']
            rows_control.append(parsed)

    return rows_control


def compare_list_list_varying_lengths(filepath: pathlib.Path, rows_test: list[list[int]]) -> None:
    """
    Used when the csv list contains list with varying list lengths.
    Used for integer datatypes.
    """
    rows_control: list[list[int]] = deserialize_list_list_varying_lengths(filepath)

    # Make sure that both are the same length
    assert len(rows_control) == len(rows_test)
    num_rows: int = len(rows_control)

    for i in range(num_rows):
        npt.assert_array_equal(np.array(rows_test[i]),
                               np.array(rows_control[i]))
