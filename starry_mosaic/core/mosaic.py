"""
Mosaic base class: band splitting, parallel rendering and drawing shortcuts.

An image is rendered as horizontal bands of rows. Every band is independent
of the others (renderers restart their per-band state from scratch), so the
same image comes out whether bands are rendered one after another or on a
pool of worker processes.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ProcessPoolExecutor
from itertools import repeat
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image
import structlog

from ..config import settings
from ..utils.image import buffer_to_image, new_image_buffer
from .coloring_method import (
    ColoringMethod,
    ConicGradient,
    GradientLike,
    LinearGradient,
    RadialGradient,
    as_coloring_method,
)
from .mosaic_shape import ImageSize, MosaicShape
from .transform import Transformation
from .vector import Vector

logger = structlog.get_logger()

Band = Tuple[int, int]


def split_into_bands(height: int, band_height: int) -> List[Band]:
    """Split rows [0, height) into consecutive (top, bottom) ranges."""
    band_height = max(int(band_height), 1)
    return [(top, min(top + band_height, height)) for top in range(0, height, band_height)]


def lighten_factor(distance: float, maximum_distance: float) -> float:
    """
    Quadratic falloff: 1 at the key point, 0 at maximum_distance and beyond.

    Cells without extent get no lightening at all.
    """
    if maximum_distance <= 0.0:
        return 0.0
    return max(1.0 - distance / maximum_distance, 0.0) ** 2


def _render_band(mosaic: "Mosaic", coloring_method: ColoringMethod, band: Band) -> np.ndarray:
    # Module level so that worker processes can unpickle it.
    return mosaic.render_band(coloring_method, band)


class Mosaic(ABC):
    """Subdivision of key points ready to be drawn with a coloring method."""

    def __init__(
        self,
        image_size: ImageSize,
        shape: MosaicShape,
        transformation: Transformation,
        key_points: List[Vector],
    ):
        self._image_size = (int(image_size[0]), int(image_size[1]))
        self._shape = shape
        self._transformation = transformation
        self._key_points = key_points

    @property
    def image_size(self) -> ImageSize:
        return self._image_size

    @property
    def shape(self) -> MosaicShape:
        return self._shape

    @property
    def transformation(self) -> Transformation:
        return self._transformation

    @property
    def key_points(self) -> List[Vector]:
        return list(self._key_points)

    @property
    def center(self) -> Vector:
        return self._transformation.translation

    @abstractmethod
    def render_band(self, coloring_method: ColoringMethod, band: Band) -> np.ndarray:
        """
        Render rows [top, bottom) of the image.

        Args:
            coloring_method: Coloring method, already coerced
            band: (top, bottom) row range

        Returns:
            uint8 array of shape (bottom - top, width, 3)
        """

    @abstractmethod
    def _rebuild(self, builder) -> Optional["Mosaic"]:
        """Build a mosaic of the same kind from a configured builder."""

    def draw(self, coloring_method, workers: Optional[int] = None) -> Image.Image:
        """
        Draw the mosaic into a new image.

        Args:
            coloring_method: ColoringMethod, Color or color string
            workers: Worker processes, defaults to ``settings.render_workers``

        Returns:
            RGB Pillow image of ``image_size``
        """
        coloring_method = as_coloring_method(coloring_method)
        workers = workers or settings.render_workers
        width, height = self._image_size
        bands = split_into_bands(height, settings.render_band_height)
        buffer = new_image_buffer(self._image_size)

        logger.info(
            "Drawing mosaic",
            mosaic=type(self).__name__,
            width=width,
            height=height,
            bands=len(bands),
            workers=workers,
            coloring_method=type(coloring_method).__name__,
        )

        if workers > 1 and len(bands) > 1:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                rendered = executor.map(_render_band, repeat(self), repeat(coloring_method), bands)
                for (top, bottom), rows in zip(bands, rendered):
                    buffer[top:bottom] = rows
        else:
            for top, bottom in bands:
                buffer[top:bottom] = self.render_band(coloring_method, (top, bottom))

        return buffer_to_image(buffer)

    def draw_linear_gradient(
        self, gradient: GradientLike, start_point: Vector, end_point: Vector, smoothness: float = 1.0
    ) -> Image.Image:
        return self.draw(LinearGradient(gradient, start_point, end_point, smoothness))

    def draw_radial_gradient(
        self,
        gradient: GradientLike,
        inner_center: Vector,
        inner_radius: float,
        outer_center: Vector,
        outer_radius: float,
        smoothness: float = 1.0,
    ) -> Image.Image:
        return self.draw(
            RadialGradient(gradient, inner_center, inner_radius, outer_center, outer_radius, smoothness)
        )

    def draw_simple_radial_gradient(
        self,
        gradient: GradientLike,
        center: Optional[Vector] = None,
        radius: Optional[float] = None,
        smoothness: float = 1.0,
    ) -> Image.Image:
        """
        Radial gradient filling a circle.

        Args:
            gradient: Gradient from the center (0) to the circle edge (1)
            center: Circle center, defaults to the mosaic center
            radius: Circle radius, defaults to half of the smaller image side
            smoothness: Smoothness of the gradient, clamped to [0, 1]
        """
        if center is None:
            center = self.center
        if radius is None:
            radius = min(self._image_size) * 0.5
        return self.draw(RadialGradient.simple(gradient, center, radius, smoothness))

    def draw_conic_gradient(
        self,
        gradient: GradientLike,
        center: Optional[Vector] = None,
        angle: float = 0.0,
        smoothness: float = 1.0,
    ) -> Image.Image:
        """Conic gradient around center, defaults to the mosaic center."""
        if center is None:
            center = self.center
        return self.draw(ConicGradient(gradient, center, angle, smoothness))

    def transform(self, transformation: Transformation) -> Optional["Mosaic"]:
        """
        Rebuild this mosaic with another transformation.

        Returns:
            New mosaic of the same kind, or None if the transformed key points
            are degenerate
        """
        from .mosaic_builder import MosaicBuilder

        builder = MosaicBuilder.from_mosaic(self).set_transformation(transformation)
        return self._rebuild(builder)
