"""
Test incidence graph construction
"""

import numpy.testing as npt
import pytest

from pygraphical.core.common import PLACEHOLDER_INDEX
from pygraphical.core.segment import Segment
from pygraphical.topology.incidence_graph import IncidenceGraph
from pygraphical.utils.generate_shapes import (generate_disjoint_segments,
                                               generate_figure_eight,
                                               generate_l_shape,
                                               generate_square)


def test_every_segment_listed_at_both_endpoints(initialize_incidence_graph: IncidenceGraph
                                                ) -> None:
    """
    Every segment is incident to exactly its two endpoints.
    """
    graph: IncidenceGraph = initialize_incidence_graph

    for si in range(graph.num_segments):
        start, end = graph.endpoints(si)
        assert si in graph.incident(start)
        assert si in graph.incident(end)
    assert sum(graph.degree(v) for v in graph.vertices()) == 2 * graph.num_segments


def test_square_degrees() -> None:
    graph = IncidenceGraph(generate_square())

    assert graph.num_vertices == 4
    assert all(graph.degree(v) == 2 for v in graph.vertices())
    assert not any(graph.is_branch(v) for v in graph.vertices())
    assert graph.degenerate_segments == []


def test_figure_eight_branch_vertex() -> None:
    graph = IncidenceGraph(generate_figure_eight())

    branch_vertices: list[int] = [v for v in graph.vertices() if graph.is_branch(v)]
    assert len(branch_vertices) == 1
    assert graph.degree(branch_vertices[0]) == 4
    npt.assert_allclose(graph.position(branch_vertices[0]), [0.0, 0.0, 0.0])


def test_tolerance_merges_endpoints() -> None:
    segments: list[Segment] = [Segment.from_points((0.0, 0.0), (1.0, 0.0)),
                               Segment.from_points((1.0 + 1e-8, 0.0), (1.0, 1.0))]
    graph = IncidenceGraph(segments, 1e-6)

    assert graph.num_vertices == 3
    assert graph.end_array[0] == graph.start_array[1]


def test_terminus_and_opposite() -> None:
    graph = IncidenceGraph(generate_l_shape())

    start, end = graph.endpoints(0)
    assert graph.is_terminus(start)
    assert graph.degree(end) == 2
    assert graph.opposite(0, start) == end
    assert graph.opposite(0, end) == start
    assert graph.other_segment(end, 0) == 1
    assert graph.other_segment(start, 0) == PLACEHOLDER_INDEX

    with pytest.raises(ValueError):
        graph.opposite(1, start)


def test_duplicate_geometry_kept_apart() -> None:
    """
    Two segments with equal endpoints are separate incidences.
    """
    segments: list[Segment] = [Segment.from_points((0.0, 0.0), (1.0, 0.0)),
                               Segment.from_points((1.0, 0.0), (0.0, 0.0))]
    graph = IncidenceGraph(segments)

    assert graph.num_vertices == 2
    for v in graph.vertices():
        assert graph.incident(v) == [0, 1]


def test_degenerate_segment_flagged() -> None:
    segments: list[Segment] = [Segment.from_points((0.0, 0.0), (1.0, 0.0)),
                               Segment.from_points((2.0, 2.0), (2.0, 2.0 + 1e-9))]
    graph = IncidenceGraph(segments)

    assert graph.degenerate_segments == [1]
    start, end = graph.endpoints(1)
    assert start == end
    assert graph.incident(start) == [1]


def test_connected_components() -> None:
    segments: list[Segment] = (generate_square(1.0, (10.0, 10.0)) +
                               generate_disjoint_segments(2, spacing=5.0))
    graph = IncidenceGraph(segments)

    num_components, labels = graph.connected_components()
    assert num_components == 3
    assert len(set(labels[:4])) == 1
    assert labels[4] != labels[5]
    assert labels[4] != labels[0]
