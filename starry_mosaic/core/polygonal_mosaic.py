"""Mosaic painted triangle by triangle over a Delaunay triangulation."""

import math

import numpy as np

from .coloring_method import ColoringMethod
from .mosaic import Band, Mosaic, lighten_factor
from .subdivision import Triangulation, orient2d
from .vector import Vector


class PolygonalMosaic(Mosaic):
    """
    Every triangle is lightened towards its circumcenter.

    Pixels not covered by any triangle stay black; on shared edges the
    triangle drawn last wins.
    """

    def __init__(self, triangulation: Triangulation, image_size, shape, transformation, key_points):
        super().__init__(image_size, shape, transformation, key_points)
        self._triangulation = triangulation

    @property
    def triangulation(self) -> Triangulation:
        return self._triangulation

    def render_band(self, coloring_method: ColoringMethod, band: Band) -> np.ndarray:
        top, bottom = band
        width = self._image_size[0]
        rows = np.zeros((bottom - top, width, 3), dtype=np.uint8)
        triangulation = self._triangulation

        for triangle in range(len(triangulation)):
            corners = triangulation.corners(triangle)
            left = max(int(math.floor(corners[:, 0].min())), 0)
            right = min(int(math.ceil(corners[:, 0].max())), width - 1)
            upper = max(int(math.floor(corners[:, 1].min())), top)
            lower = min(int(math.ceil(corners[:, 1].max())), bottom - 1)
            if left > right or upper > lower:
                continue

            ys, xs = np.mgrid[upper:lower + 1, left:right + 1]
            pixels = (xs.astype(np.float64), ys.astype(np.float64))
            a, b, c = corners
            inside = (
                (orient2d(a, b, pixels) <= 0.0)
                & (orient2d(b, c, pixels) <= 0.0)
                & (orient2d(c, a, pixels) <= 0.0)
            )
            if not inside.any():
                continue

            key_point = Vector.from_tuple(triangulation.circumcenters[triangle])
            radius = key_point.distance_to(Vector.from_tuple(a))
            for x, y in zip(xs[inside], ys[inside]):
                pixel = Vector(float(x), float(y))
                lighten = lighten_factor(pixel.distance_to(key_point), radius)
                color = coloring_method.interpolate(pixel, key_point).lighten(lighten)
                rows[y - top, x] = color.to_rgb8()
        return rows

    def _rebuild(self, builder):
        return builder.build_polygon()
