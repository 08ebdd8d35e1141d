"""
polygon_booleans.py

Polygon boolean combinators and line/polygon intersection backed by Shapely.
Polygons are combined in the XY plane and results come back at z = 0.
GEOS errors are not caught.
"""

import logging

import numpy as np
from shapely.geometry import (GeometryCollection, LineString, MultiLineString,
                              MultiPolygon)
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from pygraphical.core.common import SpatialVector1d, to_spatial_vector
from pygraphical.core.errors import InvalidArgumentError
from pygraphical.core.polygon import Polygon
from pygraphical.core.segment import Segment

logger: logging.Logger = logging.getLogger(__name__)


# *******
# Helpers
# *******

def _to_shapely(polygon: Polygon) -> ShapelyPolygon:
    """
    Planar shapely polygon through the XY coordinates of the polygon vertices.
    """
    if polygon is None:
        raise InvalidArgumentError("No polygon provided (polygon is None).")
    if polygon.num_vertices < 3:
        raise InvalidArgumentError(f"Polygon needs 3 or more vertices, got {polygon.num_vertices}")
    return ShapelyPolygon([(float(v[0]), float(v[1])) for v in polygon.vertices])


def _to_shapely_union(polygons: list[Polygon]) -> BaseGeometry:
    if polygons is None:
        raise InvalidArgumentError("No polygons provided (polygons is None).")
    return unary_union([_to_shapely(polygon) for polygon in polygons])


def _exterior_to_polygon(shapely_polygon: ShapelyPolygon) -> Polygon:
    # Shapely repeats the first coordinate at the end of the ring
    coords: list[tuple[float, ...]] = list(shapely_polygon.exterior.coords)[:-1]
    if len(shapely_polygon.interiors) > 0:
        logger.warning("Dropping %s holes from boolean result", len(shapely_polygon.interiors))
    vertices: list[SpatialVector1d] = [np.array([x, y, 0.0], dtype=np.float64)
                                       for x, y, *_ in coords]
    return Polygon(vertices)


def _from_shapely(geometry: BaseGeometry) -> list[Polygon]:
    """
    Every non empty areal part of the geometry as a polygon. Points and lines
    from touching inputs are discarded.
    """
    if geometry.is_empty:
        return []
    if isinstance(geometry, ShapelyPolygon):
        return [_exterior_to_polygon(geometry)]
    if isinstance(geometry, (MultiPolygon, GeometryCollection)):
        polygons: list[Polygon] = []
        for part in geometry.geoms:
            polygons.extend(_from_shapely(part))
        return polygons
    return []


def _to_segments(geometry: BaseGeometry) -> list[Segment]:
    """
    Every linear part of the geometry as a segment from its first to its last
    coordinate. Isolated touching points are discarded.
    """
    if geometry.is_empty:
        return []
    if isinstance(geometry, LineString):
        coords: list[tuple[float, ...]] = list(geometry.coords)
        return [Segment.from_points(coords[0][:2], coords[-1][:2])]
    if isinstance(geometry, (MultiLineString, GeometryCollection)):
        segments: list[Segment] = []
        for part in geometry.geoms:
            segments.extend(_to_segments(part))
        return segments
    return []


class ShapelyPolygonBooleans:
    """
    Boolean combinators over planar polygons. Each operation returns zero or
    more polygons; holes in a result are dropped with a warning.
    """

    def union(self, subject: Polygon, clip: Polygon) -> list[Polygon]:
        return _from_shapely(_to_shapely(subject).union(_to_shapely(clip)))

    def difference(self, subject: Polygon, clip: Polygon) -> list[Polygon]:
        return _from_shapely(_to_shapely(subject).difference(_to_shapely(clip)))

    def intersection(self, subject: Polygon, clip: Polygon) -> list[Polygon]:
        return _from_shapely(_to_shapely(subject).intersection(_to_shapely(clip)))

    def multi_union(self, subjects: list[Polygon], clips: list[Polygon]) -> list[Polygon]:
        """
        Union of all subjects and all clips.
        """
        return _from_shapely(_to_shapely_union(subjects).union(_to_shapely_union(clips)))

    def multi_difference(self, subjects: list[Polygon], clips: list[Polygon]) -> list[Polygon]:
        """
        Union of the subjects minus the union of the clips.
        """
        return _from_shapely(_to_shapely_union(subjects).difference(_to_shapely_union(clips)))

    def multi_intersection(self, subjects: list[Polygon], clips: list[Polygon]) -> list[Polygon]:
        """
        Union of the subjects intersected with the union of the clips.
        """
        return _from_shapely(_to_shapely_union(subjects).intersection(_to_shapely_union(clips)))

    def line_polygon_intersection(self, segment: Segment, polygon: Polygon) -> list[Segment]:
        """
        Parts of the segment inside or on the polygon, in the XY plane.

        :param segment: [in] segment to clip
        :param polygon: [in] clipping polygon
        :return: clipped segments at z = 0
        """
        if segment is None:
            raise InvalidArgumentError("No segment provided (segment is None).")
        line = LineString([tuple(to_spatial_vector(segment.start)[:2]),
                           tuple(to_spatial_vector(segment.end)[:2])])
        return _to_segments(line.intersection(_to_shapely(polygon)))
