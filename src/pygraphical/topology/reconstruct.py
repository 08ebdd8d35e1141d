"""
reconstruct.py
User facing entry points: build polygons from lines and group curves that share
endpoints into connected chains.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from pygraphical.core.common import (CHECK_VALIDITY, VERTEX_EQUAL_PRECISION,
                                     SegmentIndex)
from pygraphical.core.errors import (DegenerateSegmentError,
                                     GeometryAmbiguityError,
                                     InvalidArgumentError)
from pygraphical.core.polygon import Polygon, Polyline
from pygraphical.core.segment import Segment
from pygraphical.topology.chain_assembler import Group, _is_valid_groups, assemble
from pygraphical.topology.incidence_graph import IncidenceGraph
from pygraphical.topology.polygon_classifier import (ClassifiedGroup,
                                                     Isolated, classify_group)

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class AssemblyParameters:
    """
    Parameters for reconstructing topology from segments.
    """
    # Absolute per-axis tolerance for two endpoints to be the same vertex
    tolerance: float = VERTEX_EQUAL_PRECISION
    # If true, open chains are returned segment by segment with the isolated
    # segments instead of as polylines
    open_chains_as_segments: bool = False
    # If true, check that the groups partition the input before classifying
    check_validity: bool = CHECK_VALIDITY


@dataclass
class PolygonBuildResult:
    """
    Polygons, open polylines and isolated segments reconstructed from lines.
    """
    polygons: list[Polygon] = field(default_factory=list)
    polylines: list[Polyline] = field(default_factory=list)
    isolated: list[Isolated] = field(default_factory=list)
    # Input segments, indexed by the segment indices of the outputs
    segments: list[Segment] = field(default_factory=list)

    def ungrouped_segments(self) -> list[Segment]:
        """
        Every input segment that did not end up in a polygon, polylines first.
        Segments are the objects given to build_polygons(), in traversal order.
        """
        ungrouped: list[Segment] = []
        for polyline in self.polylines:
            ungrouped.extend(self.segments[si] for si in polyline.segment_indices)
        ungrouped.extend(isolated.segment for isolated in self.isolated)
        return ungrouped


@dataclass
class PolyCurve:
    """
    Curves joined end to end, in traversal order. reversed_flags[k] is true when
    curve k runs against the traversal direction.
    """
    curves: list[Any]
    reversed_flags: list[bool]
    segment_indices: list[SegmentIndex]
    is_closed: bool = False

    @property
    def num_curves(self) -> int:
        return len(self.curves)


@dataclass
class CurveGroupResult:
    """
    Joined groups of curves and the curves that connect to nothing.
    """
    polycurves: list[PolyCurve] = field(default_factory=list)
    ungrouped: list[Any] = field(default_factory=list)


# *******
# Helpers
# *******

def _validate_segments(segments: Optional[list[Segment]]) -> list[Segment]:
    """
    Reject missing input, batches of fewer than 2 segments and batches that
    list the same segment object more than once.
    """
    if segments is None:
        raise InvalidArgumentError("No segments provided (segments is None).")

    segment_list: list[Segment] = list(segments)
    if len(segment_list) < 2:
        raise InvalidArgumentError(f"Needs 2 or more segments, got {len(segment_list)}")

    first_index: dict[int, SegmentIndex] = {}
    for si, segment in enumerate(segment_list):
        if not isinstance(segment, Segment):
            raise InvalidArgumentError(
                f"Expected Segment at index {si}, got {type(segment).__name__}")
        if id(segment) in first_index:
            raise GeometryAmbiguityError(
                f"Segment object at index {si} repeats the one at index {first_index[id(segment)]}")
        first_index[id(segment)] = si

    return segment_list


def _assemble_groups(segments: Optional[list[Segment]],
                     parameters: AssemblyParameters) -> tuple[IncidenceGraph, list[Group]]:
    """
    Validate input, build its incidence graph and assemble the groups.
    """
    segment_list: list[Segment] = _validate_segments(segments)
    graph = IncidenceGraph(segment_list, parameters.tolerance)
    if graph.degenerate_segments:
        raise DegenerateSegmentError(graph.degenerate_segments[0], parameters.tolerance)

    groups: list[Group] = assemble(graph)
    if parameters.check_validity and not _is_valid_groups(graph, groups):
        raise ValueError("Assembled groups do not partition the input segments")

    if logger.getEffectiveLevel() <= logging.DEBUG:
        num_components: int
        num_components, _ = graph.connected_components()
        logger.debug("Assembled %s groups from %s segments, %s vertices and %s components",
                     len(groups), graph.num_segments, graph.num_vertices, num_components)

    return graph, groups


def build_polygons(lines: Optional[list[Segment]],
                   parameters: Optional[AssemblyParameters] = None) -> PolygonBuildResult:
    """
    Creates polygons from a list of lines. Lines are returned as polylines if they
    connect into an open chain, or as isolated segments if connected to nothing.

    :param lines: [in] segments; at least 2
    :param parameters: [in] assembly parameters, defaults to AssemblyParameters()
    :return: polygons, polylines and isolated segments
    :raises InvalidArgumentError: for missing input, fewer than 2 lines or degenerate lines
    :raises GeometryAmbiguityError: if the same line object is given twice
    """
    if parameters is None:
        parameters = AssemblyParameters()

    graph: IncidenceGraph
    groups: list[Group]
    graph, groups = _assemble_groups(lines, parameters)

    result = PolygonBuildResult(segments=graph.segments)
    for group in groups:
        classified: ClassifiedGroup = classify_group(group, graph)
        if isinstance(classified, Polygon):
            result.polygons.append(classified)
        elif isinstance(classified, Polyline):
            if parameters.open_chains_as_segments:
                result.isolated.extend(Isolated(si, graph.segment(si))
                                       for si in classified.segment_indices)
            else:
                result.polylines.append(classified)
        else:
            result.isolated.append(classified)

    logger.info("Built %s polygons, %s polylines and %s isolated segments",
                len(result.polygons), len(result.polylines), len(result.isolated))
    return result


def group_curves(curves: Optional[list[Segment]],
                 parameters: Optional[AssemblyParameters] = None) -> CurveGroupResult:
    """
    Groups connected curves into polycurves. Curves are returned as ungrouped if
    not connected to any other curve. Only the endpoints of each curve are
    looked at; the curve handles are handed back untouched.

    :param curves: [in] segments carrying curve handles; at least 2
    :param parameters: [in] assembly parameters, defaults to AssemblyParameters()
    :return: polycurves and ungrouped curve handles
    """
    if parameters is None:
        parameters = AssemblyParameters()

    graph: IncidenceGraph
    groups: list[Group]
    graph, groups = _assemble_groups(curves, parameters)

    result = CurveGroupResult()
    for group in groups:
        if group.num_segments == 1:
            result.ungrouped.append(graph.segment(group.segment_indices[0]).handle)
            continue

        handles: list[Any] = []
        reversed_flags: list[bool] = []
        for k, si in enumerate(group.segment_indices):
            handles.append(graph.segment(si).handle)
            reversed_flags.append(graph.start_array[si] != group.vertex_path[k])
        result.polycurves.append(PolyCurve(handles,
                                           reversed_flags,
                                           list(group.segment_indices),
                                           group.is_closed))

    logger.info("Grouped curves into %s polycurves and %s ungrouped curves",
                len(result.polycurves), len(result.ungrouped))
    return result
