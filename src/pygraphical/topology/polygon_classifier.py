"""
polygon_classifier.py
Turn finalized groups into output geometry.
"""

import logging
from dataclasses import dataclass

from pygraphical.core.common import SegmentIndex, SpatialVector1d
from pygraphical.core.polygon import Polygon, Polyline
from pygraphical.core.segment import Segment
from pygraphical.topology.chain_assembler import Group
from pygraphical.topology.incidence_graph import IncidenceGraph

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class Isolated:
    """
    Single segment not connected into any chain.
    """
    segment_index: SegmentIndex
    segment: Segment


ClassifiedGroup = Polygon | Polyline | Isolated


def classify_group(group: Group, graph: IncidenceGraph) -> ClassifiedGroup:
    """
    Classify a group as a polygon, a polyline or an isolated segment.

    A closed group needs at least 3 distinct vertices to be a polygon. A closed
    group on 2 vertices (two segments between the same pair of vertices) is a
    degenerate bigon and comes out as a polyline instead.

    Vertices follow traversal order, not input order; the segment indices of
    the output give the way back to the input segments.

    :param group: [in] finalized, non empty group
    :param graph: [in] graph the group was assembled from
    :return: Polygon, Polyline or Isolated
    """
    if group.num_segments == 0:
        raise ValueError("Cannot classify an empty group")

    if group.num_segments == 1:
        segment_index: SegmentIndex = group.segment_indices[0]
        return Isolated(segment_index, graph.segment(segment_index))

    positions: list[SpatialVector1d] = [graph.position(v).copy() for v in group.vertex_path]

    if group.is_closed:
        if group.num_distinct_vertices >= 3:
            # Closing vertex is implicit
            return Polygon(positions[:-1], list(group.segment_indices))
        logger.warning("Closed group of segments %s has only %s distinct vertices; "
                       "emitting it as a polyline", group.segment_indices,
                       group.num_distinct_vertices)

    return Polyline(positions, list(group.segment_indices))
