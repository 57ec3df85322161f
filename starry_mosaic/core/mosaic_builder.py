"""
Fluent configuration of mosaics.

Example:
    mosaic = (
        MosaicBuilder()
        .set_image_size(1024, 1024)
        .set_polygonal_star_shape(8)
        .set_rotation_angle(math.pi / 8)
        .set_uniform_scale(0.8)
        .build_star()
    )
    if mosaic is not None:
        mosaic.draw(Color.parse("gold")).save("star.png")
"""

from typing import Callable, List, Optional, TypeVar

import structlog

from ..config import settings
from . import utility
from .mosaic import Mosaic
from .mosaic_shape import Grid, ImageSize, MosaicShape, PolygonalStar, RegularPolygon, TiltedGrid
from .polygonal_mosaic import PolygonalMosaic
from .starry_mosaic import StarryMosaic
from .subdivision import BoundingBox, build_delaunay, build_voronoi, construct_shape
from .transform import Scale, Transformation
from .vector import Vector

logger = structlog.get_logger()

MosaicT = TypeVar("MosaicT", bound=Mosaic)


class MosaicBuilder:
    """
    Collects image size, shape and transformation and builds mosaics.

    Every setter returns the builder itself. Out of range values are clamped
    instead of rejected. Until a center is set explicitly the shape stays
    centered in the image, also when the image size changes.
    """

    def __init__(self):
        self._image_size: ImageSize = (settings.default_image_width, settings.default_image_height)
        self._shape: MosaicShape = RegularPolygon(settings.default_corners_count)
        self._transformation = Transformation(translation=self._image_center())
        self._is_center_set = False

    @classmethod
    def from_mosaic(cls, mosaic) -> "MosaicBuilder":
        """Builder configured exactly like an existing mosaic."""
        builder = cls()
        builder._image_size = mosaic.image_size
        builder._shape = mosaic.shape
        builder._transformation = mosaic.transformation
        builder._is_center_set = True
        return builder

    @property
    def image_size(self) -> ImageSize:
        return self._image_size

    @property
    def shape(self) -> MosaicShape:
        return self._shape

    @property
    def transformation(self) -> Transformation:
        return self._transformation

    def _image_center(self) -> Vector:
        return Vector(self._image_size[0] / 2.0, self._image_size[1] / 2.0)

    def _clamp_scale(self, scale: Scale) -> Scale:
        return scale.clamp(settings.minimum_scale, settings.maximum_scale)

    def set_image_size(self, width: int, height: int) -> "MosaicBuilder":
        self._image_size = (max(int(width), 1), max(int(height), 1))
        if self._is_center_set:
            # Keep the explicit center inside the new image
            return self.set_center(self._transformation.translation)
        self._transformation = self._transformation.with_changes(translation=self._image_center())
        return self

    def set_shape(self, shape: MosaicShape) -> "MosaicBuilder":
        if not isinstance(shape, MosaicShape):
            raise TypeError(f"Unsupported mosaic shape: {type(shape).__name__}")
        self._shape = shape
        return self

    def set_regular_polygon_shape(self, corners_count: int) -> "MosaicBuilder":
        return self.set_shape(RegularPolygon(corners_count))

    def set_polygonal_star_shape(self, corners_count: int) -> "MosaicBuilder":
        return self.set_shape(PolygonalStar(corners_count))

    def set_grid_shape(self, rows_count: int, columns_count: int) -> "MosaicBuilder":
        return self.set_shape(Grid(rows_count, columns_count))

    def set_tilted_grid_shape(
        self,
        rows_count: int,
        columns_count: int,
        horizontal_tilt: float,
        vertical_tilt: float,
    ) -> "MosaicBuilder":
        return self.set_shape(TiltedGrid(rows_count, columns_count, horizontal_tilt, vertical_tilt))

    def set_center(self, center: Vector) -> "MosaicBuilder":
        """Set position of the shape center, clamped into the image."""
        if not isinstance(center, Vector):
            center = Vector.from_tuple(center)
        width, height = self._image_size
        center = Vector(
            utility.clamp(center.x, 0.0, float(width)),
            utility.clamp(center.y, 0.0, float(height)),
        )
        self._transformation = self._transformation.with_changes(translation=center)
        self._is_center_set = True
        return self

    def set_rotation_angle(self, rotation_angle: float) -> "MosaicBuilder":
        self._transformation = self._transformation.with_changes(rotation_angle=float(rotation_angle))
        return self

    def set_scale(self, horizontal_scale: float, vertical_scale: float) -> "MosaicBuilder":
        scale = self._clamp_scale(Scale(float(horizontal_scale), float(vertical_scale)))
        self._transformation = self._transformation.with_changes(scale=scale)
        return self

    def set_uniform_scale(self, scale: float) -> "MosaicBuilder":
        return self.set_scale(scale, scale)

    def set_shear(self, horizontal_shear: float, vertical_shear: float) -> "MosaicBuilder":
        shear = Vector(float(horizontal_shear), float(vertical_shear))
        self._transformation = self._transformation.with_changes(shear=shear)
        return self

    def set_transformation(self, transformation: Transformation) -> "MosaicBuilder":
        """Replace the whole transformation; scale and center are clamped."""
        self._transformation = transformation.with_changes(
            scale=self._clamp_scale(transformation.scale)
        )
        return self.set_center(transformation.translation)

    def construct_shape(self) -> List[Vector]:
        """Key points of the configured shape."""
        return construct_shape(self._shape, self._image_size, self._transformation)

    def build_from_voronoi(self, constructor: Callable[..., MosaicT]) -> Optional[MosaicT]:
        """
        Build a mosaic of any kind over the Voronoi diagram of key points.

        Args:
            constructor: Called as ``constructor(voronoi, image_size, shape,
                transformation, key_points)``, usually a ``Mosaic`` subclass

        Returns:
            Result of constructor, or None if the key points do not form a
            valid Voronoi diagram (e.g. they are collinear)
        """
        key_points = self.construct_shape()
        voronoi = build_voronoi(key_points, BoundingBox.for_image(self._image_size))
        if voronoi is None:
            logger.warning(
                "Mosaic not built",
                constructor=_constructor_name(constructor),
                **self._shape.describe(),
            )
            return None
        return constructor(voronoi, self._image_size, self._shape, self._transformation, key_points)

    def build_from_key_points(self, constructor: Callable[..., MosaicT]) -> MosaicT:
        """
        Build a mosaic of any kind directly from key points.

        Args:
            constructor: Called as ``constructor(key_points, image_size,
                shape, transformation)``

        Returns:
            Result of constructor
        """
        return constructor(self.construct_shape(), self._image_size, self._shape, self._transformation)

    def build_star(self) -> Optional[StarryMosaic]:
        """Build starry mosaic over the Voronoi diagram of key points."""
        return self.build_from_voronoi(StarryMosaic)

    def build_polygon(self) -> Optional[PolygonalMosaic]:
        """
        Build mosaic over the Delaunay triangulation of key points.

        Returns:
            Polygonal mosaic, or None if the key points cannot be triangulated
        """
        return self.build_from_key_points(_polygonal_mosaic)


def _constructor_name(constructor) -> str:
    return getattr(constructor, "__name__", type(constructor).__name__)


def _polygonal_mosaic(key_points, image_size, shape, transformation) -> Optional[PolygonalMosaic]:
    triangulation = build_delaunay(key_points)
    if triangulation is None:
        logger.warning("Polygonal mosaic not built", **shape.describe())
        return None
    return PolygonalMosaic(triangulation, image_size, shape, transformation, key_points)
