"""
Incidence graph of a segment soup: every vertex identity maps to the segments
touching it. Built once per input batch; read only while chains are assembled.
"""

import logging

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import connected_components

from pygraphical.core.common import (CHECK_VALIDITY, PLACEHOLDER_INDEX,
                                     VERTEX_EQUAL_PRECISION, SegmentIndex,
                                     SpatialVector1d, VertexIndex)
from pygraphical.core.segment import Segment
from pygraphical.core.vertex import VertexKey

logger: logging.Logger = logging.getLogger(__name__)


class IncidenceGraph:
    """
    An incidence graph records, for each vertex identity, the ordered list of
    segments that have that vertex as an endpoint. The degree of a vertex is the
    length of its incidence list: degree 1 is a terminus, degree 2 a pass-through
    and anything above 2 a branch.

    Segments are referred to by their index in the input sequence, which is also
    their identity: two segments with the same endpoints are never merged.
    A degenerate segment, with both endpoints on the same identity, is recorded
    once at that vertex and flagged.
    """

    def __init__(self,
                 segments: list[Segment],
                 tolerance: float = VERTEX_EQUAL_PRECISION) -> None:
        """
        Construct the graph from segments.
        :param segments:  [in] input segments, in caller order
        :param tolerance: [in] absolute tolerance for vertex identity
        """
        self.__segments: list[Segment] = list(segments)
        self.__vertex_key: VertexKey = VertexKey(tolerance)

        self.__start_array: list[VertexIndex]
        self.__end_array: list[VertexIndex]
        self.__incidence: dict[VertexIndex, list[SegmentIndex]]
        self.__degenerate_segments: list[SegmentIndex]
        (self.__start_array,
         self.__end_array,
         self.__incidence,
         self.__degenerate_segments) = self._init_incidence_graph()

        if self.__degenerate_segments:
            logger.warning("Incidence graph has %s degenerate segments: %s",
                           len(self.__degenerate_segments), self.__degenerate_segments)

        # Check validity
        if CHECK_VALIDITY or logger.getEffectiveLevel() == logging.DEBUG:
            if not self._is_valid_incidence_graph():
                raise ValueError("Inconsistent incidence graph built")

    # ***********
    # Getters
    # ***********

    @property
    def num_segments(self) -> int:
        """Number of segments in the graph"""
        return len(self.__segments)

    @property
    def num_vertices(self) -> int:
        """Number of vertex identities in the graph"""
        return len(self.__incidence)

    @property
    def segments(self) -> list[Segment]:
        """Retrieves segments"""
        return self.__segments

    @property
    def tolerance(self) -> float:
        """Retrieves vertex tolerance"""
        return self.__vertex_key.tolerance

    @property
    def vertex_key(self) -> VertexKey:
        """Retrieves the vertex key used to canonicalize endpoints"""
        return self.__vertex_key

    @property
    def start_array(self) -> list[VertexIndex]:
        """Retrieves start vertex identity of every segment"""
        return self.__start_array

    @property
    def end_array(self) -> list[VertexIndex]:
        """Retrieves end vertex identity of every segment"""
        return self.__end_array

    @property
    def degenerate_segments(self) -> list[SegmentIndex]:
        """Segments whose endpoints share a vertex identity"""
        return self.__degenerate_segments

    def vertices(self) -> list[VertexIndex]:
        """
        Vertex identities in the order they were first seen.
        """
        return list(self.__incidence.keys())

    def incident(self, vertex_index: VertexIndex) -> list[SegmentIndex]:
        """
        Segments touching a vertex, in input order.
        """
        return self.__incidence.get(vertex_index, [])

    def degree(self, vertex_index: VertexIndex) -> int:
        return len(self.incident(vertex_index))

    def is_terminus(self, vertex_index: VertexIndex) -> bool:
        return self.degree(vertex_index) == 1

    def is_branch(self, vertex_index: VertexIndex) -> bool:
        return self.degree(vertex_index) > 2

    def position(self, vertex_index: VertexIndex) -> SpatialVector1d:
        """
        Representative coordinate of a vertex identity.
        """
        return self.__vertex_key.position(vertex_index)

    def segment(self, segment_index: SegmentIndex) -> Segment:
        return self.__segments[segment_index]

    def endpoints(self, segment_index: SegmentIndex) -> tuple[VertexIndex, VertexIndex]:
        """
        Get the (start, end) vertex identities of a segment.
        """
        return self.__start_array[segment_index], self.__end_array[segment_index]

    def opposite(self, segment_index: SegmentIndex, vertex_index: VertexIndex) -> VertexIndex:
        """
        Get the endpoint of a segment that is not the given vertex.
        For a degenerate segment this is the vertex itself.
        """
        start: VertexIndex
        end: VertexIndex
        start, end = self.endpoints(segment_index)
        if start == vertex_index:
            return end
        if end == vertex_index:
            return start
        raise ValueError(f"Vertex {vertex_index} is not an endpoint of segment {segment_index}")

    def other_segment(self,
                      vertex_index: VertexIndex,
                      segment_index: SegmentIndex) -> SegmentIndex:
        """
        Get the first segment at the vertex other than the given one, compared by
        identity, or PLACEHOLDER_INDEX if there is none.
        """
        for si in self.incident(vertex_index):
            if si != segment_index:
                return si
        return PLACEHOLDER_INDEX

    def connected_components(self) -> tuple[int, list[int]]:
        """
        Label the connected components of the graph. Components share no vertex
        identity and can be assembled independently of each other.

        :return: number of components and the component label of every segment
        """
        num_vertices: int = self.__vertex_key.num_vertices
        if self.num_segments == 0:
            return 0, []

        rows: np.ndarray = np.array(self.__start_array, dtype=np.int64)
        cols: np.ndarray = np.array(self.__end_array, dtype=np.int64)
        data: np.ndarray = np.ones(len(rows), dtype=np.int8)
        adjacency = coo_matrix((data, (rows, cols)), shape=(num_vertices, num_vertices))

        num_components: int
        vertex_labels: np.ndarray
        num_components, vertex_labels = connected_components(adjacency, directed=False)

        # Vertices only exist as segment endpoints, so labels are dense
        segment_labels: list[int] = [int(vertex_labels[v]) for v in self.__start_array]
        return int(num_components), segment_labels

    # ******************
    #  Protected methods
    # ******************
    def _init_incidence_graph(self) -> tuple[list[VertexIndex],
                                             list[VertexIndex],
                                             dict[VertexIndex, list[SegmentIndex]],
                                             list[SegmentIndex]]:
        """Implementation of the main constructor"""
        start_array: list[VertexIndex] = []
        end_array: list[VertexIndex] = []
        incidence: dict[VertexIndex, list[SegmentIndex]] = {}
        degenerate_segments: list[SegmentIndex] = []

        for si, segment in enumerate(self.__segments):
            start: VertexIndex = self.__vertex_key.canonicalize(segment.start)
            end: VertexIndex = self.__vertex_key.canonicalize(segment.end)
            start_array.append(start)
            end_array.append(end)

            incidence.setdefault(start, []).append(si)
            if end == start:
                degenerate_segments.append(si)
                continue
            incidence.setdefault(end, []).append(si)

        return start_array, end_array, incidence, degenerate_segments

    def _is_valid_incidence_graph(self) -> bool:
        """
        General validity checker for the graph topology
        """
        num_segments: int = self.num_segments

        # Array size checks
        if len(self.__start_array) != num_segments:
            logger.error("Inconsistent start array")
            return False
        if len(self.__end_array) != num_segments:
            logger.error("Inconsistent end array")
            return False

        # Every segment is listed at each of its endpoints exactly once
        for si in range(num_segments):
            start: VertexIndex
            end: VertexIndex
            start, end = self.endpoints(si)
            if self.incident(start).count(si) != 1:
                logger.error("Segment %s not listed once at its start vertex %s", si, start)
                return False
            if start != end and self.incident(end).count(si) != 1:
                logger.error("Segment %s not listed once at its end vertex %s", si, end)
                return False

        # Every listed segment has the vertex as an endpoint
        for vi, incident_segments in self.__incidence.items():
            for si in incident_segments:
                if vi not in self.endpoints(si):
                    logger.error("Vertex %s lists segment %s that does not touch it", vi, si)
                    return False

        return True
