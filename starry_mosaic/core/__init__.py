"""
Core mosaic construction and rendering functionality.
"""

from .vector import Vector
from .segment import Segment
from .transform import Scale, Transformation
from .mosaic_shape import MosaicShape, RegularPolygon, PolygonalStar, Grid, TiltedGrid
from .subdivision import construct_shape, build_voronoi, build_delaunay, VoronoiDiagram, Triangulation, BoundingBox
from .coloring_method import (
    Color, Gradient, ColoringMethod, SolidColor, LinearGradient, RadialGradient, ConicGradient
)
from .mosaic import Mosaic
from .starry_mosaic import StarryMosaic
from .polygonal_mosaic import PolygonalMosaic
from .mosaic_builder import MosaicBuilder

__all__ = ['Vector', 'Segment', 'Scale', 'Transformation',
           'MosaicShape', 'RegularPolygon', 'PolygonalStar', 'Grid', 'TiltedGrid',
           'construct_shape', 'build_voronoi', 'build_delaunay', 'VoronoiDiagram', 'Triangulation', 'BoundingBox',
           'Color', 'Gradient', 'ColoringMethod', 'SolidColor', 'LinearGradient', 'RadialGradient', 'ConicGradient',
           'Mosaic', 'StarryMosaic', 'PolygonalMosaic', 'MosaicBuilder']
