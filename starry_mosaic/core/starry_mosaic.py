"""Mosaic painted cell by cell over a Voronoi diagram."""

from typing import List

import numpy as np

from .coloring_method import ColoringMethod
from .mosaic import Band, Mosaic, lighten_factor
from .subdivision import VoronoiDiagram
from .vector import Vector


def calculate_maximum_cell_distances(voronoi: VoronoiDiagram) -> List[float]:
    """Distance from every site to the farthest vertex of its clipped cell."""
    distances = []
    for site, vertices in enumerate(voronoi.cell_vertices):
        if len(vertices) == 0:
            distances.append(0.0)
            continue
        site_x, site_y = voronoi.site_coordinates[site]
        distances.append(float(np.max(np.hypot(vertices[:, 0] - site_x, vertices[:, 1] - site_y))))
    return distances


class StarryMosaic(Mosaic):
    """
    Every pixel takes the color of its Voronoi cell, lightened towards the
    cell site, which gives the mosaic its star-like glow.
    """

    def __init__(self, voronoi: VoronoiDiagram, image_size, shape, transformation, key_points):
        super().__init__(image_size, shape, transformation, key_points)
        self._voronoi = voronoi
        self.maximum_cell_distances = calculate_maximum_cell_distances(voronoi)

    @property
    def voronoi(self) -> VoronoiDiagram:
        return self._voronoi

    def render_band(self, coloring_method: ColoringMethod, band: Band) -> np.ndarray:
        top, bottom = band
        width = self._image_size[0]
        rows = np.zeros((bottom - top, width, 3), dtype=np.uint8)
        voronoi = self._voronoi

        # Raster order keeps consecutive pixels in the same or adjacent cells,
        # so the walk from the previous site is short.
        current_site = None
        site_position = None
        maximum_distance = 0.0
        for y in range(top, bottom):
            for x in range(width):
                pixel = Vector(float(x), float(y))
                if current_site is None:
                    site = voronoi.find_nearest_site((pixel.x, pixel.y))
                else:
                    site = voronoi.find_closest_site(current_site, (pixel.x, pixel.y))
                if site != current_site:
                    current_site = site
                    site_position = voronoi.site_position(site)
                    maximum_distance = self.maximum_cell_distances[site]

                lighten = lighten_factor(pixel.distance_to(site_position), maximum_distance)
                color = coloring_method.interpolate(pixel, site_position).lighten(lighten)
                rows[y - top, x] = color.to_rgb8()
        return rows

    def _rebuild(self, builder):
        return builder.build_star()
