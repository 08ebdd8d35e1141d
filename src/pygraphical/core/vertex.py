"""
vertex.py
Canonicalization of coordinates into vertex identities under an absolute tolerance.
"""

import logging
import math
from collections import defaultdict

import numpy as np

from pygraphical.core.common import (PLACEHOLDER_INDEX, VERTEX_EQUAL_PRECISION,
                                     SpatialVector1d, VertexIndex,
                                     to_spatial_vector, vector_contains_nonfinite,
                                     vector_equal)
from pygraphical.core.errors import (InvalidArgumentError,
                                     InvalidGeometryError)

logger: logging.Logger = logging.getLogger(__name__)

GridCell = tuple[int, int, int]


def are_same_vertex(point_1: SpatialVector1d,
                    point_2: SpatialVector1d,
                    tolerance: float = VERTEX_EQUAL_PRECISION) -> bool:
    """
    Return true iff every coordinate of the two points differs by at most tolerance.
    """
    return vector_equal(point_1, point_2, tolerance)


class VertexKey:
    """
    Maps coordinates to vertex identities. Two coordinates share an identity iff
    each component differs by no more than the tolerance from the same
    representative, which is the first coordinate seen for that identity.

    Lookups go through a hash grid with cells the size of the tolerance, so a
    matching representative can only live in the 27 cells around the query
    point. This keeps canonicalization near O(1) instead of comparing against
    every vertex seen so far.

    NOTE: tolerance equality is not transitive. A chain of points each within
    tolerance of the next may still split into several identities; the
    representative a point snaps to is the lowest indexed one in range.
    """

    def __init__(self, tolerance: float = VERTEX_EQUAL_PRECISION) -> None:
        """
        :param tolerance: [in] absolute per-axis tolerance, must be positive and finite
        """
        if not (math.isfinite(tolerance) and tolerance > 0.0):
            raise InvalidArgumentError(f"Vertex tolerance must be positive, got {tolerance}")

        self.__tolerance: float = tolerance
        self.__positions: list[SpatialVector1d] = []
        self.__grid: defaultdict[GridCell, list[VertexIndex]] = defaultdict(list)

    @property
    def tolerance(self) -> float:
        """Retrieves tolerance"""
        return self.__tolerance

    @property
    def num_vertices(self) -> int:
        """Number of distinct vertex identities created so far"""
        return len(self.__positions)

    @property
    def positions(self) -> list[SpatialVector1d]:
        """Representative coordinates indexed by vertex identity"""
        return self.__positions

    def position(self, vertex_index: VertexIndex) -> SpatialVector1d:
        """
        Get the representative coordinate of a vertex identity.
        """
        return self.__positions[vertex_index]

    def find(self, point) -> VertexIndex:
        """
        Find the identity a point maps to without creating a new one.

        :param point: [in] 2D or 3D coordinate
        :return: vertex identity, or PLACEHOLDER_INDEX if the point matches no vertex
        """
        vec: SpatialVector1d = self._checked_point(point)
        return self._find_in_neighborhood(vec, self._cell(vec))

    def canonicalize(self, point) -> VertexIndex:
        """
        Get the identity of a point, creating a new identity if no existing
        representative lies within tolerance.

        :param point: [in] 2D or 3D coordinate
        :return: vertex identity
        :raises InvalidGeometryError: if the point has NaN or infinite components
        """
        vec: SpatialVector1d = self._checked_point(point)
        cell: GridCell = self._cell(vec)
        vertex_index: VertexIndex = self._find_in_neighborhood(vec, cell)
        if vertex_index != PLACEHOLDER_INDEX:
            return vertex_index

        # New identity with this point as representative
        vertex_index = len(self.__positions)
        self.__positions.append(vec)
        self.__grid[cell].append(vertex_index)
        return vertex_index

    def _checked_point(self, point) -> SpatialVector1d:
        try:
            vec: SpatialVector1d = to_spatial_vector(point)
        except ValueError as e:
            raise InvalidArgumentError(str(e)) from e

        if vector_contains_nonfinite(vec):
            raise InvalidGeometryError(f"Non-finite coordinates in point {vec.tolist()}")
        return vec

    def _cell(self, vec: SpatialVector1d) -> GridCell:
        cell: np.ndarray = np.floor(vec / self.__tolerance).astype(np.int64)
        return (int(cell[0]), int(cell[1]), int(cell[2]))

    def _find_in_neighborhood(self, vec: SpatialVector1d, cell: GridCell) -> VertexIndex:
        best: VertexIndex = PLACEHOLDER_INDEX
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for dz in (-1, 0, 1):
                    neighbor: GridCell = (cell[0] + dx, cell[1] + dy, cell[2] + dz)
                    # .get() so that lookups do not grow the grid
                    for candidate in self.__grid.get(neighbor, ()):
                        if not are_same_vertex(self.__positions[candidate], vec, self.__tolerance):
                            continue
                        if best == PLACEHOLDER_INDEX or candidate < best:
                            best = candidate
        return best
