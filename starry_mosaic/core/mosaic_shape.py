"""
Mosaic shapes.

Every mosaic shape is defined by a set of key points, the positions at which
the mosaic creates its design; they become sites of the Voronoi diagram (or
corners of the Delaunay triangulation). The set is built in 3 steps:

1. Setting up primary key points (``set_up_points``).
2. Connecting primary key points with line segments (``connect_points``).
3. Intersecting these segments to construct the rest of key points
   (``intersect_segments``).

Shapes do not store any geometry: points and segments are calculated on
demand from image size and transformation.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Optional, Tuple

from .segment import Segment
from .transform import Transformation
from .vector import Vector

ImageSize = Tuple[int, int]


class MosaicShape(ABC):
    """Base class of mosaic shapes."""

    @abstractmethod
    def set_up_points(
        self, image_size: ImageSize, transformation: Optional[Transformation] = None
    ) -> List[Vector]:
        """
        Set up primary key points of the shape.

        Points are calculated around origin so that the untransformed shape
        fits into the image, then moved into place with transformation.

        Args:
            image_size: (width, height) of mosaic image
            transformation: Placement of the shape; identity when omitted

        Returns:
            Primary key points in image coordinates
        """

    @abstractmethod
    def connect_points(self, shape_points: List[Vector]) -> List[Segment]:
        """Connect primary key points with line segments which form the shape."""

    def intersect_segments(self, shape_segments: List[Segment]) -> List[Vector]:
        """
        Intersect segments of the shape to construct its remaining key points.

        Every unordered pair of segments is tested once.
        """
        points = []
        for first_segment, second_segment in combinations(shape_segments, 2):
            point = first_segment.intersect(second_segment)
            if point is not None:
                points.append(point)
        return points

    def describe(self) -> Dict[str, object]:
        """Shape parameters for structured logging."""
        return {"shape": type(self).__name__}


def calculate_polygon_points(
    corners_count: int,
    radius: float,
    rotation_angle: float = 0.0,
) -> List[Vector]:
    """
    Corners of a regular polygon centered on origin.

    The first corner points up; polygons with even number of corners are
    turned by half a step so that they rest on a flat side.
    """
    points = []
    for index in range(corners_count):
        angle = (
            rotation_angle
            + math.pi / corners_count * (2 * index + 1 - corners_count % 2)
            - math.pi / 2
        )
        points.append(Vector(radius * math.cos(angle), radius * math.sin(angle)))
    return points


def _polygon_radius(image_size: ImageSize) -> float:
    return min(image_size[0], image_size[1]) * 0.5


@dataclass(frozen=True)
class RegularPolygon(MosaicShape):
    """Regular polygon with all its diagonals."""

    corners_count: int = 8

    def __post_init__(self):
        object.__setattr__(self, "corners_count", max(int(self.corners_count), 3))

    def set_up_points(self, image_size, transformation=None):
        transformation = transformation or Transformation()
        points = calculate_polygon_points(self.corners_count, _polygon_radius(image_size))
        return transformation.apply_to_points(points)

    def connect_points(self, shape_points):
        segments = []
        for start_index, end_index in combinations(range(len(shape_points)), 2):
            segments.append(Segment(shape_points[start_index], shape_points[end_index]))
        return segments

    def describe(self):
        return {"shape": "regular_polygon", "corners_count": self.corners_count}


@dataclass(frozen=True)
class PolygonalStar(MosaicShape):
    """
    Regular star polygon.

    Outer corners are connected with every second corner; inner corners lie
    where these rays cross, so the inner polygon is rotated by half a step and
    its radius is reduced by ``inner_radius_factor``.
    """

    corners_count: int = 8

    def __post_init__(self):
        object.__setattr__(self, "corners_count", max(int(self.corners_count), 3))

    @property
    def inner_radius_factor(self) -> float:
        corners_count = float(self.corners_count)
        return math.sin(math.pi * (corners_count * 0.5 - 2.0) / corners_count) / math.sin(
            math.pi / 2 / corners_count * (corners_count - 2.0)
        )

    def set_up_points(self, image_size, transformation=None):
        transformation = transformation or Transformation()
        radius = _polygon_radius(image_size)
        points = calculate_polygon_points(self.corners_count, radius)
        points += calculate_polygon_points(
            self.corners_count,
            radius * self.inner_radius_factor,
            math.pi / self.corners_count,
        )
        return transformation.apply_to_points(points)

    def connect_points(self, shape_points):
        points_count = len(shape_points) // 2
        segments = []
        for start_index in range(points_count):
            end_index = (start_index + 2) % points_count
            segments.append(Segment(shape_points[start_index], shape_points[end_index]))
        for start_index in range(points_count):
            for end_index in range(start_index + 2, start_index + points_count - 2):
                inner_index = points_count + end_index % points_count
                segments.append(Segment(shape_points[start_index], shape_points[inner_index]))
        return segments

    def describe(self):
        return {"shape": "polygonal_star", "corners_count": self.corners_count}


@dataclass(frozen=True)
class Grid(MosaicShape):
    """Rectangular grid with square cells that fits into the image."""

    rows_count: int = 4
    columns_count: int = 4

    def __post_init__(self):
        object.__setattr__(self, "rows_count", max(int(self.rows_count), 1))
        object.__setattr__(self, "columns_count", max(int(self.columns_count), 1))

    def _calculate_grid_points(self, image_size: ImageSize) -> List[Vector]:
        image_width, image_height = float(image_size[0]), float(image_size[1])
        step_size = min(image_width / self.columns_count, image_height / self.rows_count)
        horizontal_half_size = step_size * self.columns_count * 0.5
        vertical_half_size = step_size * self.rows_count * 0.5
        points = [
            Vector(-horizontal_half_size, -vertical_half_size),
            Vector(-horizontal_half_size, vertical_half_size),
            Vector(horizontal_half_size, -vertical_half_size),
            Vector(horizontal_half_size, vertical_half_size),
        ]
        for index in range(1, self.rows_count):
            y = -vertical_half_size + step_size * index
            points.append(Vector(-horizontal_half_size, y))
            points.append(Vector(horizontal_half_size, y))
        for index in range(1, self.columns_count):
            x = -horizontal_half_size + step_size * index
            points.append(Vector(x, -vertical_half_size))
            points.append(Vector(x, vertical_half_size))
        return points

    def set_up_points(self, image_size, transformation=None):
        transformation = transformation or Transformation()
        return transformation.apply_to_points(self._calculate_grid_points(image_size))

    def connect_points(self, shape_points):
        # First 4 points are corners; the rest come in pairs of divider ends.
        return [
            Segment(shape_points[index], shape_points[index + 1])
            for index in range(4, len(shape_points) - 1, 2)
        ]

    def describe(self):
        return {
            "shape": "grid",
            "rows_count": self.rows_count,
            "columns_count": self.columns_count,
        }


@dataclass(frozen=True)
class TiltedGrid(Grid):
    """Grid sheared by tilt factors before being placed into the image."""

    horizontal_tilt: float = 0.0
    vertical_tilt: float = 0.0

    def tilt(self, horizontal_tilt: float, vertical_tilt: float) -> "TiltedGrid":
        return TiltedGrid(self.rows_count, self.columns_count, horizontal_tilt, vertical_tilt)

    def set_up_points(self, image_size, transformation=None):
        transformation = transformation or Transformation()
        return [
            transformation.apply(point.shear(self.horizontal_tilt, self.vertical_tilt))
            for point in self._calculate_grid_points(image_size)
        ]

    def describe(self):
        description = super().describe()
        description.update(
            shape="tilted_grid",
            horizontal_tilt=self.horizontal_tilt,
            vertical_tilt=self.vertical_tilt,
        )
        return description
