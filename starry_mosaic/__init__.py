"""
Starry mosaic: geometric mosaic images built from Voronoi diagrams and
Delaunay triangulations of symmetric shapes.
"""

from .core import (
    Color,
    ConicGradient,
    Gradient,
    LinearGradient,
    MosaicBuilder,
    PolygonalMosaic,
    RadialGradient,
    SolidColor,
    StarryMosaic,
    Transformation,
    Vector,
)

__version__ = "0.1.0"

__all__ = ['Color', 'ConicGradient', 'Gradient', 'LinearGradient', 'MosaicBuilder',
           'PolygonalMosaic', 'RadialGradient', 'SolidColor', 'StarryMosaic',
           'Transformation', 'Vector']
