"""
visibility.py

Entry point for visibility graphs. Construction itself is delegated to a
caller supplied VisibilityGraphBuilder.
"""

import logging
from typing import Iterable, Optional

import networkx as nx

from pygraphical.collaborators.interfaces import VisibilityGraphBuilder
from pygraphical.core.errors import InvalidArgumentError
from pygraphical.core.polygon import Polygon

logger: logging.Logger = logging.getLogger(__name__)


def _checked_polygons(polygons: Optional[Iterable[Polygon]], name: str) -> list[Polygon]:
    if polygons is None:
        raise InvalidArgumentError(f"No {name} provided ({name} is None).")
    polygon_list: list[Polygon] = list(polygons)
    for i, polygon in enumerate(polygon_list):
        if not isinstance(polygon, Polygon):
            raise InvalidArgumentError(
                f"Expected Polygon at index {i} of {name}, got {type(polygon).__name__}")
    return polygon_list


def build_visibility_graph(builder: VisibilityGraphBuilder,
                           boundaries: Optional[Iterable[Polygon]],
                           internals: Optional[Iterable[Polygon]] = (),
                           reduced: bool = True) -> nx.Graph:
    """
    Compute the visibility graph of boundary and obstacle polygons.

    :param builder: [in] visibility graph implementation
    :param boundaries: [in] polygons bounding the walkable region
    :param internals: [in] obstacle polygons
    :param reduced: [in] omit edges between two vertices that are both convex
        on their own polygon
    :return: visibility graph as returned by the builder
    :raises InvalidArgumentError: if the builder or any polygon list is None
    """
    if builder is None:
        raise InvalidArgumentError("No visibility graph builder provided (builder is None).")

    boundary_list: list[Polygon] = _checked_polygons(boundaries, "boundaries")
    internal_list: list[Polygon] = _checked_polygons(internals, "internals")
    logger.debug("Building %s visibility graph of %s boundaries and %s internals",
                 "reduced" if reduced else "full", len(boundary_list), len(internal_list))

    # Builder failures propagate as is
    return builder.build(boundary_list, internal_list, reduced)
