"""
Test SVG output of reconstructions
"""

import pathlib

import numpy as np
import pytest

from pygraphical.core.segment import Segment
from pygraphical.output.write_output import (_transform_point,
                                             compute_fit_scale,
                                             write_reconstruction_svg)
from pygraphical.topology.reconstruct import PolygonBuildResult, build_polygons
from pygraphical.utils.generate_shapes import generate_square


def test_transform_point() -> None:
    p: np.ndarray = _transform_point(np.array([1.0, 2.0, 5.0]), 10.0, 100.0)
    np.testing.assert_allclose(p, [90.0, 120.0])


def test_compute_fit_scale() -> None:
    result: PolygonBuildResult = build_polygons(generate_square(2.0, (-1.0, -1.0)))
    assert compute_fit_scale(result, 400, 0.5) == pytest.approx(200.0)
    assert compute_fit_scale(PolygonBuildResult()) == 1.0


def test_write_reconstruction_svg(tmp_path: pathlib.Path) -> None:
    segments: list[Segment] = (generate_square() +
                               [Segment.from_points((3.0, 0.0), (4.0, 0.0)),
                                Segment.from_points((4.0, 0.0), (4.0, 1.0)),
                                Segment.from_points((5.0, 5.0), (6.0, 5.0))])
    result: PolygonBuildResult = build_polygons(segments)
    output_filepath: pathlib.Path = tmp_path / "output.svg"

    write_reconstruction_svg(result, output_filepath, 100, 400, show_vertices=True)

    text: str = output_filepath.read_text(encoding="utf-8")
    assert text.startswith("<svg")
    assert text.count("<polygon") == len(result.polygons)
    assert text.count("<polyline") == len(result.polylines) + len(result.isolated)
    assert "<circle" in text
