"""
interfaces.py

Structural types for the external collaborators used alongside topology
reconstruction. Implementations are consumed as pure functions and their
exceptions reach the caller unchanged.
"""

from typing import Protocol, runtime_checkable

import networkx as nx

from pygraphical.core.polygon import Polygon
from pygraphical.core.segment import Segment


@runtime_checkable
class VisibilityGraphBuilder(Protocol):
    """
    Builds the graph of mutually visible vertex pairs of a planar arrangement
    of boundary and obstacle polygons, and finds the vertices of such a graph
    that an arbitrary point can see.
    """

    def build(self,
              boundaries: list[Polygon],
              internals: list[Polygon],
              reduced: bool) -> nx.Graph:
        """
        :param boundaries: [in] polygons bounding the walkable region
        :param internals: [in] obstacle polygons inside the boundaries
        :param reduced: [in] if true, omit edges between two vertices that are
            both convex on their own polygon
        :return: graph with coordinate tuple nodes and a "weight" edge attribute
        """
        ...

    def vertex_visibility(self, graph: nx.Graph, point: tuple[float, float, float]
                          ) -> list[tuple[float, float, float]]:
        """
        :param graph: [in] visibility graph returned by build()
        :param point: [in] point that is not a node of the graph
        :return: nodes of the graph visible from the point
        """
        ...


@runtime_checkable
class PolygonBooleanOperator(Protocol):
    """
    Boolean combinators over planar polygons. Every operation returns zero or
    more polygons.
    """

    def union(self, subject: Polygon, clip: Polygon) -> list[Polygon]:
        ...

    def difference(self, subject: Polygon, clip: Polygon) -> list[Polygon]:
        ...

    def intersection(self, subject: Polygon, clip: Polygon) -> list[Polygon]:
        ...

    def multi_union(self, subjects: list[Polygon], clips: list[Polygon]) -> list[Polygon]:
        ...

    def multi_difference(self, subjects: list[Polygon], clips: list[Polygon]) -> list[Polygon]:
        ...

    def multi_intersection(self, subjects: list[Polygon], clips: list[Polygon]) -> list[Polygon]:
        ...

    def line_polygon_intersection(self, segment: Segment, polygon: Polygon) -> list[Segment]:
        ...
