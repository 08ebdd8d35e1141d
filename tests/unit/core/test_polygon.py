"""
Test polygon helpers
"""

import numpy as np
import pytest

from pygraphical.core.polygon import (Polygon, Polyline, is_closed,
                                      polygon_contains_point, signed_area)

SQUARE: list[tuple[float, float]] = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


def test_signed_area_orientation() -> None:
    assert signed_area(SQUARE) == pytest.approx(1.0)
    assert signed_area(SQUARE[::-1]) == pytest.approx(-1.0)


def test_signed_area_too_few_points() -> None:
    with pytest.raises(ValueError):
        signed_area(SQUARE[:2])


def test_is_closed() -> None:
    assert is_closed(SQUARE + [SQUARE[0]])
    assert not is_closed(SQUARE)
    assert not is_closed(SQUARE[:1])


@pytest.mark.parametrize("point, expected", [((0.5, 0.5), True),
                                             ((1.5, 0.5), False),
                                             ((-0.1, 0.5), False),
                                             ((1.0, 0.5), True),
                                             ((0.0, 0.0), True)])
def test_polygon_contains_point(point: tuple[float, float], expected: bool) -> None:
    assert polygon_contains_point(SQUARE, point) == expected


def test_polygon_contains_point_concave() -> None:
    u_shape: list[tuple[float, float]] = [(0.0, 0.0), (3.0, 0.0), (3.0, 3.0), (2.0, 3.0),
                                          (2.0, 1.0), (1.0, 1.0), (1.0, 3.0), (0.0, 3.0)]
    assert polygon_contains_point(u_shape, (0.5, 2.0))
    assert not polygon_contains_point(u_shape, (1.5, 2.0))


def test_polygon_and_polyline_sizes() -> None:
    vertices: list[np.ndarray] = [np.array([x, y, 0.0]) for x, y in SQUARE]
    polygon = Polygon(vertices, [0, 1, 2, 3])
    polyline = Polyline(vertices, [0, 1, 2])

    assert polygon.num_vertices == 4
    assert polygon.as_array().shape == (4, 3)
    assert polyline.num_segments == 3
