"""
shortest_path.py

Weighted graphs over segment endpoints and shortest path queries, backed by
NetworkX. Nodes are canonical coordinate tuples so that endpoints within
tolerance of each other become the same node.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import networkx as nx
import numpy as np

from pygraphical.collaborators.interfaces import VisibilityGraphBuilder
from pygraphical.core.common import (PLACEHOLDER_INDEX, VERTEX_EQUAL_PRECISION,
                                     SpatialVector1d, VertexIndex,
                                     to_spatial_vector)
from pygraphical.core.errors import InvalidArgumentError
from pygraphical.core.segment import Segment
from pygraphical.core.vertex import VertexKey

logger: logging.Logger = logging.getLogger(__name__)

Node = tuple[float, float, float]


@dataclass
class ShortestPathResult:
    """
    Segments of a shortest path, from origin to destination, and their total
    length.
    """
    segments: list[Segment] = field(default_factory=list)
    length: float = 0.0

    @property
    def num_segments(self) -> int:
        return len(self.segments)


def _to_node(position: SpatialVector1d) -> Node:
    return (float(position[0]), float(position[1]), float(position[2]))


def _find_node(graph: nx.Graph, point, tolerance: float) -> Optional[Node]:
    """
    Node of the graph within tolerance of the point, or None if there is none.
    """
    if point is None:
        raise InvalidArgumentError("No point provided (point is None).")

    vertex_key = VertexKey(tolerance)
    representatives: list[Node] = []
    for node in graph.nodes:
        # Nodes within tolerance of an earlier node keep the earlier one
        if vertex_key.canonicalize(node) == len(representatives):
            representatives.append(node)

    vertex_index: VertexIndex = vertex_key.find(point)
    if vertex_index == PLACEHOLDER_INDEX:
        return None
    return representatives[vertex_index]


def _join_point(graph_ref: nx.Graph, point, builder: VisibilityGraphBuilder) -> Node:
    """
    Add the point to the graph as a node linked to every vertex visible from it.

    :param graph_ref: [in, out] graph to add the point to
    :param point: [in] point that is not a node of the graph
    :param builder: [in] visibility implementation
    :return: node of the point
    """
    node: Node = _to_node(to_spatial_vector(point))
    visible_nodes: list[Node] = builder.vertex_visibility(graph_ref, node)
    graph_ref.add_node(node)
    for visible_node in visible_nodes:
        graph_ref.add_edge(node, visible_node,
                           weight=float(np.linalg.norm(np.subtract(node, visible_node))))
    logger.debug("Joined %s to %s visible vertices", node, len(visible_nodes))
    return node


def graph_from_segments(segments: list[Segment],
                        tolerance: float = VERTEX_EQUAL_PRECISION) -> nx.Graph:
    """
    Build an undirected graph from segments. Each endpoint becomes the node of
    its canonical representative and each segment an edge weighted by its
    Euclidean length. Degenerate segments add no edge.

    :param segments: [in] segments
    :param tolerance: [in] absolute per-axis tolerance for shared endpoints
    :return: graph with coordinate tuple nodes and a "weight" edge attribute
    """
    if segments is None:
        raise InvalidArgumentError("No segments provided (segments is None).")

    vertex_key = VertexKey(tolerance)
    graph = nx.Graph()
    for segment in segments:
        start: VertexIndex = vertex_key.canonicalize(segment.start)
        end: VertexIndex = vertex_key.canonicalize(segment.end)
        start_node: Node = _to_node(vertex_key.position(start))
        end_node: Node = _to_node(vertex_key.position(end))
        graph.add_node(start_node)
        graph.add_node(end_node)
        if start == end:
            logger.warning("Skipping degenerate segment %s", segment)
            continue
        graph.add_edge(start_node, end_node,
                       weight=float(np.linalg.norm(vertex_key.position(end) -
                                                   vertex_key.position(start))))

    logger.debug("Built graph with %s nodes and %s edges",
                 graph.number_of_nodes(), graph.number_of_edges())
    return graph


def graph_to_segments(graph: nx.Graph) -> list[Segment]:
    """
    One segment per edge of the graph, in edge iteration order.
    """
    return [Segment.from_points(u, v) for u, v in graph.edges]


def shortest_path(graph: nx.Graph,
                  origin,
                  destination,
                  tolerance: float = VERTEX_EQUAL_PRECISION,
                  builder: Optional[VisibilityGraphBuilder] = None) -> ShortestPathResult:
    """
    Shortest weighted path between two points of the plane.

    Points within tolerance of a node of the graph use that node. Other points
    are joined to the vertices the builder reports as visible from them, with
    Euclidean distance weights, on a copy of the graph.

    :param graph: [in] graph with coordinate tuple nodes and "weight" edges,
        e.g. from graph_from_segments() or a visibility graph builder
    :param origin: [in] 2D or 3D path start point
    :param destination: [in] 2D or 3D path end point
    :param tolerance: [in] absolute per-axis tolerance for snapping
    :param builder: [in] visibility implementation used to join points that
        are not nodes of the graph
    :return: path segments from origin to destination and the path length
    :raises InvalidArgumentError: if the graph is None, or a point is not a
        vertex and no builder is given
    :raises networkx.NetworkXNoPath: if the two points are not connected
    """
    if graph is None:
        raise InvalidArgumentError("No graph provided (graph is None).")

    search_graph: nx.Graph = graph
    endpoint_nodes: list[Node] = []
    for point in (origin, destination):
        node: Optional[Node] = _find_node(search_graph, point, tolerance)
        if node is None:
            if builder is None:
                raise InvalidArgumentError(f"Point {point} is not a vertex of the graph")
            if search_graph is graph:
                search_graph = graph.copy()
            node = _join_point(search_graph, point, builder)
        endpoint_nodes.append(node)
    origin_node, destination_node = endpoint_nodes

    path: list[Node] = nx.shortest_path(search_graph, origin_node, destination_node,
                                        weight="weight")
    result = ShortestPathResult()
    for u, v in zip(path[:-1], path[1:]):
        result.segments.append(Segment.from_points(u, v))
        result.length += float(search_graph.edges[u, v].get("weight", 1.0))

    logger.debug("Shortest path from %s to %s has %s segments and length %s",
                 origin_node, destination_node, result.num_segments, result.length)
    return result
