"""
write_output.py

Methods for writing reconstructed polygons, polylines and isolated segments
to SVG file. Geometry is projected onto the XY plane.
"""
import logging
import pathlib

import numpy as np
import svg

from pygraphical.core.common import (Color, PlanarPoint1d, SpatialVector1d,
                                     Vector1D,
                                     compute_point_cloud_bounding_box)
from pygraphical.topology.reconstruct import PolygonBuildResult

logger: logging.Logger = logging.getLogger(__name__)

POLYGON_COLOR: Color = (0, 0, 0, 1)
POLYLINE_COLOR: Color = (0, 0, 139, 1)  # Dark blue
ISOLATED_COLOR: Color = (255, 0, 0, 1)  # Red
VERTEX_COLOR: Color = (58, 107, 53, 1)  # Green


def _transform_point(p: SpatialVector1d, scale: float, offset: float) -> PlanarPoint1d:
    """
    Helper method.
    """
    assert p.shape == (3, )

    p_transform: PlanarPoint1d = np.array([
        -scale * p[0] + offset,  # Inverted to account for SVG orientation
        scale * p[1] + offset], dtype=np.float64)
    assert p_transform.shape == (2, )

    return p_transform


def _flatten_points(points: list[SpatialVector1d], scale: float, offset: float) -> list[float]:
    flat_points: list[float] = []
    for point in points:
        transformed_point: PlanarPoint1d = _transform_point(point, scale, offset)
        flat_points.append(float(transformed_point[0]))
        flat_points.append(float(transformed_point[1]))
    return flat_points


def add_polygon_to_svg(points: list[SpatialVector1d],
                       svg_elements_ref: list[svg.Element],
                       scale: float,
                       offset: float,
                       color: Color = POLYGON_COLOR) -> None:
    """
    Write closed polygon to SVG.

    :param points: [in] polygon vertices, closed implicitly
    :param svg_elements_ref: [out] list of SVG elements to save
    :param scale: [in] scale of points
    :param offset: [in] offset of points
    :param color: [in] RGBA color of SVG element
    """
    svg_elements_ref.append(svg.Polygon(points=_flatten_points(points, scale, offset),
                                        stroke=f"rgba{color}",
                                        fill="transparent",
                                        stroke_width=1.0))


def add_polyline_to_svg(points: list[SpatialVector1d],
                        svg_elements_ref: list[svg.Element],
                        scale: float,
                        offset: float,
                        color: Color = POLYLINE_COLOR) -> None:
    """
    Write open polyline to SVG.

    :param points: [in] polyline vertices in order
    :param svg_elements_ref: [out] list of SVG elements to save
    :param scale: [in] scale of points
    :param offset: [in] offset of points
    :param color: [in] RGBA color of SVG element
    """
    svg_elements_ref.append(svg.Polyline(points=_flatten_points(points, scale, offset),
                                         stroke=f"rgba{color}",
                                         fill="transparent",
                                         stroke_width=1.0))


def add_point_to_svg(point: SpatialVector1d,
                     svg_elements_ref: list[svg.Element],
                     scale: float,
                     offset: float,
                     color: Color = VERTEX_COLOR) -> None:
    """
    Write spatial vector point as SVG.
    """
    point_2d: PlanarPoint1d = _transform_point(point, scale, offset)
    svg_elements_ref.append(svg.Circle(cx=float(point_2d[0]),
                                       cy=float(point_2d[1]),
                                       r=2.0,
                                       fill=f"rgba{color}"))


def compute_fit_scale(result: PolygonBuildResult, offset: float = 400, margin: float = 0.9) -> float:
    """
    Scale that fits every point of the result inside the SVG view box of
    width 2 * offset when drawn with write_reconstruction_svg().

    :param result: [in] reconstruction to fit
    :param offset: [in] offset of points
    :param margin: [in] fraction of the half width to fill
    :return: scale, or 1 for an empty or single point result
    """
    points: list[SpatialVector1d] = []
    for polygon in result.polygons:
        points.extend(polygon.vertices)
    for polyline in result.polylines:
        points.extend(polyline.vertices)
    for isolated in result.isolated:
        points.extend([isolated.segment.start, isolated.segment.end])
    if len(points) == 0:
        return 1.0

    min_point: Vector1D
    max_point: Vector1D
    min_point, max_point = compute_point_cloud_bounding_box(np.array(points, dtype=np.float64))

    # Points are drawn around the origin, so fit the largest planar coordinate
    extent: float = float(max(np.abs(min_point[:2]).max(), np.abs(max_point[:2]).max()))
    if extent == 0.0:
        return 1.0
    return margin * offset / extent


def write_reconstruction_svg(result: PolygonBuildResult,
                             filepath: pathlib.Path,
                             scale: float = 800,
                             offset: float = 400,
                             show_vertices: bool = False) -> None:
    """
    Write polygons, polylines and isolated segments to an SVG file. Polygons
    are drawn in black, polylines in dark blue and isolated segments in red.

    :param result: [in] reconstruction to write
    :param filepath: [in] SVG file to write to
    :param scale: [in] scale of points
    :param offset: [in] offset of points
    :param show_vertices: [in] also draw every polygon and polyline vertex
    """
    svg_elements: list[svg.Element] = []

    for polygon in result.polygons:
        add_polygon_to_svg(polygon.vertices, svg_elements, scale, offset)
    for polyline in result.polylines:
        add_polyline_to_svg(polyline.vertices, svg_elements, scale, offset)
    for isolated in result.isolated:
        add_polyline_to_svg([isolated.segment.start, isolated.segment.end],
                            svg_elements, scale, offset, ISOLATED_COLOR)

    if show_vertices:
        for polygon in result.polygons:
            for point in polygon.vertices:
                add_point_to_svg(point, svg_elements, scale, offset)
        for polyline in result.polylines:
            for point in polyline.vertices:
                add_point_to_svg(point, svg_elements, scale, offset)

    logger.info("Writing %s SVG elements to %s", len(svg_elements), filepath)

    # Write SVG
    viewport = svg.ViewBoxSpec(0, 0, 2 * offset, 2 * offset)
    svg_writer = svg.SVG(viewBox=viewport, elements=svg_elements)
    with open(filepath, 'w', encoding='utf-8') as output_file:
        output_file.write(svg_writer.as_str())
