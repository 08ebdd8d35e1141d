"""
chain_assembler.py
Methods to partition the segments of an incidence graph into maximal chains.
"""

import logging
from dataclasses import dataclass, field

from pygraphical.core.common import (CHECK_VALIDITY, GroupIndex, SegmentIndex,
                                     VertexIndex)
from pygraphical.core.errors import DegenerateSegmentError
from pygraphical.topology.incidence_graph import IncidenceGraph

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class Group:
    """
    Chain of segments connected end to end, in traversal order.
    vertex_path has one more entry than segment_indices: segment k joins
    vertex_path[k] and vertex_path[k + 1].
    """
    segment_indices: list[SegmentIndex] = field(default_factory=list)
    vertex_path: list[VertexIndex] = field(default_factory=list)

    @property
    def num_segments(self) -> int:
        return len(self.segment_indices)

    @property
    def is_closed(self) -> bool:
        """True iff the chain ends on the vertex it starts from"""
        return self.num_segments > 0 and self.vertex_path[0] == self.vertex_path[-1]

    @property
    def num_distinct_vertices(self) -> int:
        return len(set(self.vertex_path))

    @property
    def interior_vertices(self) -> list[VertexIndex]:
        return self.vertex_path[1:-1]


@dataclass
class _AssemblyState:
    """
    Traversal state of a single assemble() call.
    """
    visited: dict[VertexIndex, GroupIndex] = field(default_factory=dict)
    consumed: set[SegmentIndex] = field(default_factory=set)


# *******
# Helpers
# *******

def _walk_chain(graph: IncidenceGraph,
                seed: VertexIndex,
                first_segment: SegmentIndex,
                group_index: GroupIndex,
                state_ref: _AssemblyState) -> tuple[list[SegmentIndex], list[VertexIndex]]:
    """
    Follow an unbranched chain away from the seed, starting along first_segment.

    The walk stops at a terminus, at a branch vertex, or on reaching a vertex
    that is already visited (which closes a loop). The segment that reached the
    stopping vertex is part of the chain unless it was already taken.

    :param graph: [in]
    :param seed: [in] vertex the chain starts from
    :param first_segment: [in] segment incident to the seed to leave along
    :param group_index: [in] group the visited vertices are assigned to
    :param state_ref: [in, out] visited vertices and consumed segments
    :return: segment indices and vertex path of the chain, starting at the seed
    """
    chain_segments: list[SegmentIndex] = []
    chain_path: list[VertexIndex] = [seed]

    current_segment: SegmentIndex = first_segment
    current_vertex: VertexIndex = seed
    next_vertex: VertexIndex = graph.opposite(current_segment, current_vertex)

    while next_vertex not in state_ref.visited:
        # Branch vertices are chain boundaries and never belong to one group
        if graph.is_branch(next_vertex):
            break

        state_ref.visited[next_vertex] = group_index
        chain_segments.append(current_segment)
        chain_path.append(next_vertex)
        state_ref.consumed.add(current_segment)

        # Dead end, not a closure
        if graph.degree(next_vertex) < 2:
            break

        # Continue along the other segment at the pass-through vertex
        next_segment: SegmentIndex = graph.other_segment(next_vertex, current_segment)
        assert next_segment not in state_ref.consumed
        current_vertex = next_vertex
        current_segment = next_segment
        next_vertex = graph.opposite(current_segment, current_vertex)

    # Boundary segment leading into a branch or closing a loop
    if current_segment not in state_ref.consumed:
        chain_segments.append(current_segment)
        chain_path.append(next_vertex)
        state_ref.consumed.add(current_segment)

    return chain_segments, chain_path


def _combine_forward_and_reverse_chain(forward: tuple[list[SegmentIndex], list[VertexIndex]],
                                       reverse: tuple[list[SegmentIndex], list[VertexIndex]]
                                       ) -> Group:
    """
    Combine two chains leaving the same seed into one group. The reverse chain
    is flipped so the group runs from the far end of the reverse chain, through
    the seed, to the far end of the forward chain.
    """
    forward_segments, forward_path = forward
    reverse_segments, reverse_path = reverse
    assert forward_path[0] == reverse_path[0]

    segment_indices: list[SegmentIndex] = reverse_segments[::-1] + forward_segments
    # Seed appears at the end of the flipped reverse path and the start of the forward path
    vertex_path: list[VertexIndex] = reverse_path[::-1] + forward_path[1:]
    assert len(vertex_path) == len(segment_indices) + 1

    return Group(segment_indices, vertex_path)


def _is_valid_groups(graph: IncidenceGraph, groups: list[Group]) -> bool:
    """
    Return true iff groups partition the segments into contiguous chains that
    never pass through a branch vertex.
    """
    seen: list[int] = [0] * graph.num_segments

    for i, group in enumerate(groups):
        if group.num_segments == 0:
            logger.error("Group %s is empty", i)
            return False
        if len(group.vertex_path) != group.num_segments + 1:
            logger.error("Group %s has inconsistent vertex path", i)
            return False

        # Check segments are contiguous
        for k, si in enumerate(group.segment_indices):
            seen[si] += 1
            if set(graph.endpoints(si)) != {group.vertex_path[k], group.vertex_path[k + 1]}:
                logger.error("Segment %s in group %s does not join path vertices %s and %s",
                             si, i, group.vertex_path[k], group.vertex_path[k + 1])
                return False

        # Branch vertices may only be group endpoints
        for vi in group.interior_vertices:
            if graph.is_branch(vi):
                logger.error("Group %s passes through branch vertex %s", i, vi)
                return False

    for si, count in enumerate(seen):
        if count != 1:
            logger.error("Segment %s appears in %s groups", si, count)
            return False

    return True


def assemble(graph: IncidenceGraph) -> list[Group]:
    """
    Partition the segments of the graph into maximal chains.

    Every non-branch vertex not yet visited seeds a new group, in the order the
    graph first saw the vertices. From the seed, the chain is walked along each
    of its (at most two) incident segments and the two walks are stitched into
    one group. Branch vertices stop every walk, so no group passes through one.
    Segments joining two branch vertices are unreachable from any seed and
    each end up in a group of their own.

    Traversal state lives only for the duration of this call.

    :param graph: [in] incidence graph without degenerate segments
    :return groups: groups in seed order, followed by branch-to-branch segments
    """
    if graph.degenerate_segments:
        raise DegenerateSegmentError(graph.degenerate_segments[0], graph.tolerance)

    groups: list[Group] = []
    state = _AssemblyState()

    for seed in graph.vertices():
        # Skip vertices already in a group and branch vertices
        if seed in state.visited or graph.is_branch(seed):
            continue

        group_index: GroupIndex = len(groups)
        state.visited[seed] = group_index

        chains: list[tuple[list[SegmentIndex], list[VertexIndex]]] = []
        for segment_index in graph.incident(seed):
            # Second direction of a loop that closed through the seed
            if segment_index in state.consumed:
                continue
            chains.append(_walk_chain(graph, seed, segment_index, group_index, state))

        if len(chains) == 0:
            logger.debug("Seed vertex %s has no free segments", seed)
            continue

        group: Group
        if len(chains) == 1:
            group = Group(chains[0][0], chains[0][1])
        else:
            group = _combine_forward_and_reverse_chain(chains[0], chains[1])

        logger.debug("%s group %s of size %s found from seed %s",
                     "Closed" if group.is_closed else "Open",
                     group_index, group.num_segments, seed)
        groups.append(group)

    # Segments joining two branch vertices
    for si in range(graph.num_segments):
        if si in state.consumed:
            continue
        start: VertexIndex
        end: VertexIndex
        start, end = graph.endpoints(si)
        logger.debug("Segment %s between branch vertices %s and %s kept on its own",
                     si, start, end)
        state.consumed.add(si)
        groups.append(Group([si], [start, end]))

    # Check validity
    if CHECK_VALIDITY:
        assert _is_valid_groups(graph, groups)
    return groups
