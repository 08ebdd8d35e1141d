"""
Test common methods
"""

import pathlib

import numpy as np
import numpy.testing as npt
import pytest

from pygraphical.core.common import (compare_list_list_varying_lengths,
                                     compute_point_cloud_bounding_box,
                                     deserialize_list_list_varying_lengths,
                                     float_equal, to_spatial_vector,
                                     vector_contains_nonfinite, vector_equal)

# *******************
# Test Methods
# *******************


def test_compute_point_cloud_bounding_box() -> None:
    """
    Test compute_point_cloud_bounding_box
    """
    points: np.ndarray = np.array([[0.0, 1.0, -2.0],
                                   [3.0, -1.0, 0.5],
                                   [1.0, 0.0, 4.0]])

    # Execute method
    min_point_test: np.ndarray
    max_point_test: np.ndarray
    min_point_test, max_point_test = compute_point_cloud_bounding_box(points)

    # Compare results
    npt.assert_allclose(min_point_test, [0.0, -1.0, -2.0])
    npt.assert_allclose(max_point_test, [3.0, 1.0, 4.0])


def test_compute_point_cloud_bounding_box_empty() -> None:
    with pytest.raises(ValueError):
        compute_point_cloud_bounding_box(np.zeros(shape=(0, 3)))


def test_to_spatial_vector() -> None:
    npt.assert_array_equal(to_spatial_vector((1, 2)), [1.0, 2.0, 0.0])
    npt.assert_array_equal(to_spatial_vector(np.array([[1.0, 2.0, 3.0]])), [1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        to_spatial_vector((1.0, ))


def test_float_and_vector_equal() -> None:
    assert float_equal(1.0, 1.0 + 1e-12)
    assert not float_equal(1.0, 1.0 + 1e-8)
    assert vector_equal(np.array([0.0, 0.0, 0.0]), np.array([1e-7, 0.0, -1e-7]), 1e-6)
    assert not vector_equal(np.array([0.0, 0.0, 0.0]), np.array([0.0, 2e-6, 0.0]), 1e-6)


def test_vector_contains_nonfinite() -> None:
    assert vector_contains_nonfinite(np.array([0.0, np.nan, 0.0]))
    assert not vector_contains_nonfinite(np.array([0.0, 1.0, 0.0]))


def test_list_list_varying_lengths(testing_fileinfo: tuple[pathlib.Path, pathlib.Path]) -> None:
    """
    The expected groups of every test shape deserialize and compare against themselves.
    """
    base_data_folderpath: pathlib.Path
    base_data_folderpath, _ = testing_fileinfo
    filepath: pathlib.Path = base_data_folderpath / "groups.csv"

    rows: list[list[int]] = deserialize_list_list_varying_lengths(filepath)
    assert len(rows) > 0
    compare_list_list_varying_lengths(filepath, rows)
