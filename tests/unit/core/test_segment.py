"""
Test segment value type and segment queries
"""

import math

import numpy as np
import numpy.testing as npt
import pytest

from pygraphical.core.errors import InvalidArgumentError
from pygraphical.core.polygon import Polyline
from pygraphical.core.segment import (Segment, point_on_segment, polygonize,
                                      segments_intersect)


def test_from_points_planar() -> None:
    segment: Segment = Segment.from_points((0.0, 1.0), (2.0, 3.0))

    npt.assert_array_equal(segment.start, [0.0, 1.0, 0.0])
    npt.assert_array_equal(segment.end, [2.0, 3.0, 0.0])
    assert segment.length == pytest.approx(math.sqrt(8.0))
    npt.assert_allclose(segment.mid_point, [1.0, 2.0, 0.0])


def test_from_points_malformed() -> None:
    with pytest.raises(InvalidArgumentError):
        Segment.from_points((0.0, ), (1.0, 1.0))


def test_constructor_normalizes_endpoints() -> None:
    segment = Segment([0, 0], [1, 0])

    assert segment.start.shape == (3, )
    assert segment.end.dtype == np.float64
    assert segment.length == pytest.approx(1.0)
    npt.assert_array_equal(segment.reversed().start, [1.0, 0.0, 0.0])

    with pytest.raises(InvalidArgumentError):
        Segment([0], [1, 1])


def test_identity_semantics() -> None:
    """
    Two segments with equal endpoints are still distinct segments.
    """
    first: Segment = Segment.from_points((0.0, 0.0), (1.0, 0.0))
    second: Segment = Segment.from_points((0.0, 0.0), (1.0, 0.0))

    assert first != second
    assert first == first
    assert len({first, second}) == 2


def test_handle_and_reversed() -> None:
    curve = object()
    segment: Segment = Segment.from_points((0.0, 0.0), (1.0, 0.0), curve)
    flipped: Segment = segment.reversed()

    assert segment.handle is curve
    assert flipped.handle is curve
    npt.assert_array_equal(flipped.start, segment.end)
    npt.assert_array_equal(flipped.end, segment.start)

    bare: Segment = Segment.from_points((0.0, 0.0), (1.0, 0.0))
    assert bare.handle is bare


@pytest.mark.parametrize("point, expected", [((0.5, 0.0), True),
                                             ((0.0, 0.0), True),
                                             ((1.0, 0.0), True),
                                             ((1.5, 0.0), False),
                                             ((0.5, 0.1), False)])
def test_point_on_segment(point: tuple[float, float], expected: bool) -> None:
    segment: Segment = Segment.from_points((0.0, 0.0), (1.0, 0.0))
    assert point_on_segment(point, segment) == expected


def test_segments_intersect_crossing() -> None:
    first: Segment = Segment.from_points((0.0, 0.0), (1.0, 1.0))
    second: Segment = Segment.from_points((0.0, 1.0), (1.0, 0.0))
    assert segments_intersect(first, second)


def test_segments_intersect_disjoint() -> None:
    first: Segment = Segment.from_points((0.0, 0.0), (1.0, 0.0))
    second: Segment = Segment.from_points((0.0, 1.0), (1.0, 1.0))
    assert not segments_intersect(first, second)


def test_segments_intersect_touching_endpoint() -> None:
    """
    The second segment resting an endpoint on the first is not an intersection.
    """
    first: Segment = Segment.from_points((0.0, 0.0), (2.0, 0.0))
    second: Segment = Segment.from_points((1.0, 0.0), (1.0, 1.0))
    assert not segments_intersect(first, second)


def test_polygonize_straight_curve() -> None:
    segments = polygonize(lambda t: (t, 2.0 * t), max_length=0.1)

    assert len(segments) == 1
    npt.assert_allclose(segments[0].start, [0.0, 0.0, 0.0])
    npt.assert_allclose(segments[0].end, [1.0, 2.0, 0.0])


def test_polygonize_arc() -> None:
    """
    Quarter circle of length pi / 2 split into pieces no longer than 0.2.
    """
    def quarter_circle(t: float) -> np.ndarray:
        return np.array([math.cos(t * math.pi / 2), math.sin(t * math.pi / 2), 0.0])

    segments = polygonize(quarter_circle, max_length=0.2)

    assert len(segments) == math.ceil((math.pi / 2) / 0.2)
    for segment in segments:
        assert segment.length <= 0.2
    npt.assert_allclose(segments[0].start, [1.0, 0.0, 0.0], atol=1e-12)
    npt.assert_allclose(segments[-1].end, [0.0, 1.0, 0.0], atol=1e-12)
    for first, second in zip(segments[:-1], segments[1:]):
        npt.assert_allclose(first.end, second.start)


def test_polygonize_as_polycurve() -> None:
    def quarter_circle(t: float) -> np.ndarray:
        return np.array([math.cos(t * math.pi / 2), math.sin(t * math.pi / 2), 0.0])

    polyline = polygonize(quarter_circle, max_length=0.5, as_polycurve=True)

    assert isinstance(polyline, Polyline)
    assert polyline.num_segments == 4


def test_polygonize_invalid_length() -> None:
    with pytest.raises(InvalidArgumentError):
        polygonize(lambda t: (t, 0.0), max_length=0.0)
