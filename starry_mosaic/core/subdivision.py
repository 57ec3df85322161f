"""
Planar subdivisions of mosaic key points.

This module is the adapter between mosaic shapes and scipy.spatial: it turns
a shape into a deduplicated set of key points and builds either a Voronoi
diagram (for starry mosaics) or a Delaunay triangulation (for polygonal
mosaics) from them. Both constructions are fallible: too few or degenerate
(e.g. collinear) key points produce None instead of a subdivision.
"""

from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Iterator, List, NamedTuple, Optional, Tuple

import numpy as np
import shapely
from scipy.spatial import Delaunay, QhullError, Voronoi
from shapely.geometry import Polygon, box
import structlog

from .mosaic_shape import ImageSize, MosaicShape
from .transform import Transformation
from .vector import Vector

logger = structlog.get_logger()

# Minimum number of key points a subdivision can be built from.
MINIMUM_SITES_COUNT = 3


class BoundingBox(NamedTuple):
    """Axis aligned rectangle given by its center and size."""

    center: Vector
    width: float
    height: float

    @classmethod
    def for_image(cls, image_size: ImageSize) -> "BoundingBox":
        width, height = float(image_size[0]), float(image_size[1])
        return cls(Vector(width / 2.0, height / 2.0), width, height)

    @property
    def left(self) -> float:
        return self.center.x - self.width / 2.0

    @property
    def right(self) -> float:
        return self.center.x + self.width / 2.0

    @property
    def top(self) -> float:
        return self.center.y - self.height / 2.0

    @property
    def bottom(self) -> float:
        return self.center.y + self.height / 2.0

    @property
    def half_diagonal(self) -> float:
        return float(np.hypot(self.width, self.height)) / 2.0

    def contains(self, point: Vector) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def to_polygon(self) -> Polygon:
        return box(self.left, self.top, self.right, self.bottom)


def construct_shape(
    shape: MosaicShape,
    image_size: ImageSize,
    transformation: Optional[Transformation] = None,
) -> List[Vector]:
    """
    Calculate the complete set of key points of a mosaic shape.

    Primary points and intersections of the shape segments are snapped to the
    epsilon grid, sorted and deduplicated, so points reached through different
    trigonometric paths collapse into a single key point.

    Args:
        shape: Mosaic shape
        image_size: (width, height) of mosaic image
        transformation: Placement of the shape

    Returns:
        Sorted list of distinct key points
    """
    transformation = transformation or Transformation()
    shape_points = shape.set_up_points(image_size, transformation)
    shape_segments = shape.connect_points(shape_points)
    key_points = shape.intersect_segments(shape_segments)
    key_points.extend(shape_points)
    key_points = [point.round_to_epsilon() for point in key_points]
    key_points.sort(key=cmp_to_key(Vector.compare))

    unique_points = []
    for point in key_points:
        if not unique_points or unique_points[-1] != point:
            unique_points.append(point)

    logger.debug(
        "Shape constructed",
        primary_points=len(shape_points),
        segments=len(shape_segments),
        key_points=len(unique_points),
        **shape.describe(),
    )
    return unique_points


class VoronoiCell:
    """View of a single cell of a Voronoi diagram."""

    __slots__ = ("diagram", "site")

    def __init__(self, diagram: "VoronoiDiagram", site: int):
        self.diagram = diagram
        self.site = site

    @property
    def site_position(self) -> Vector:
        return self.diagram.site_position(self.site)

    @property
    def neighbors(self) -> List[int]:
        return self.diagram.cell_neighbors[self.site]

    def iter_vertices(self) -> Iterator[Vector]:
        """Vertices of the cell clipped to the bounding box."""
        for vertex in self.diagram.cell_vertices[self.site]:
            yield Vector.from_tuple(vertex)

    def iter_path(self, destination) -> Iterator[int]:
        """
        Walk from this cell towards destination through adjacent cells.

        Each step moves to the neighboring site closest to destination, as
        long as it is closer than the current one. Neighbors are Delaunay
        neighbors, so the walk always ends at the site nearest to destination.

        Args:
            destination: Target point (Vector or (x, y) pair)

        Yields:
            Indices of visited sites, the last one encloses destination
        """
        positions = self.diagram.site_coordinates
        neighbors = self.diagram.cell_neighbors
        x, y = destination
        current = self.site
        current_x, current_y = positions[current]
        current_distance = (current_x - x) ** 2 + (current_y - y) ** 2
        while True:
            next_site = None
            for neighbor in neighbors[current]:
                neighbor_x, neighbor_y = positions[neighbor]
                distance = (neighbor_x - x) ** 2 + (neighbor_y - y) ** 2
                if distance < current_distance:
                    next_site = neighbor
                    current_distance = distance
            if next_site is None:
                return
            current = next_site
            yield current


@dataclass
class VoronoiDiagram:
    """Voronoi diagram of key points clipped to a bounding box."""

    sites: np.ndarray                  # sites[i] = [x, y]
    cell_neighbors: List[List[int]]    # Delaunay neighbors of every site
    cell_vertices: List[np.ndarray]    # clipped cell polygon of every site
    bounding_box: BoundingBox
    site_coordinates: List[Tuple[float, float]] = field(init=False, repr=False)

    def __post_init__(self):
        self.site_coordinates = [(float(x), float(y)) for x, y in self.sites]

    def __len__(self) -> int:
        return len(self.sites)

    def site_position(self, site: int) -> Vector:
        return Vector(*self.site_coordinates[site])

    def cell(self, site: int) -> VoronoiCell:
        return VoronoiCell(self, site)

    def cells(self) -> List[VoronoiCell]:
        return [VoronoiCell(self, site) for site in range(len(self.sites))]

    def find_closest_site(self, site: int, point) -> int:
        """Locate the cell containing point, starting the walk at site."""
        closest_site = site
        for closest_site in self.cell(site).iter_path(point):
            pass
        return closest_site

    def find_nearest_site(self, point) -> int:
        """Brute force nearest site lookup, used to start independent walks."""
        x, y = point
        squared_distances = (self.sites[:, 0] - x) ** 2 + (self.sites[:, 1] - y) ** 2
        return int(np.argmin(squared_distances))


@dataclass
class Triangulation:
    """
    Delaunay triangulation of key points.

    Corners of every triangle are ordered clockwise-consistently, i.e.
    ``orient2d(a, b, c) < 0``, and every triangle carries its circumcenter
    (the dual Voronoi vertex).
    """

    sites: np.ndarray          # sites[i] = [x, y]
    triangles: np.ndarray      # triangles[t] = [a, b, c] site indices
    circumcenters: np.ndarray  # circumcenters[t] = [x, y]

    def __len__(self) -> int:
        return len(self.triangles)

    def corners(self, triangle: int) -> np.ndarray:
        return self.sites[self.triangles[triangle]]


def orient2d(a, b, c) -> float:
    """
    Orientation of point c relative to directed line a -> b.

    Positive when a, b, c turn counterclockwise in a y-up frame, negative
    when clockwise and zero when collinear.
    """
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def _sites_to_array(sites: List[Vector]) -> np.ndarray:
    return np.array([site.as_tuple() for site in sites], dtype=np.float64).reshape(-1, 2)


def _triangulate(points: np.ndarray, purpose: str) -> Optional[Delaunay]:
    if len(points) < MINIMUM_SITES_COUNT:
        logger.warning("Too few key points for subdivision", purpose=purpose, sites=len(points))
        return None
    try:
        triangulation = Delaunay(points)
    except (QhullError, ValueError) as error:
        logger.warning(
            "Degenerate key points, subdivision failed",
            purpose=purpose,
            sites=len(points),
            error=str(error).splitlines()[0] if str(error) else type(error).__name__,
        )
        return None
    if len(triangulation.simplices) == 0:
        logger.warning("Key points produced no triangles", purpose=purpose, sites=len(points))
        return None
    return triangulation


def build_cell_neighbors(triangulation: Delaunay) -> List[List[int]]:
    """Adjacency lists of sites from a Delaunay triangulation."""
    index_pointers, indices = triangulation.vertex_neighbor_vertices
    n_points = len(triangulation.points)
    return [
        sorted(int(neighbor) for neighbor in indices[index_pointers[i]:index_pointers[i + 1]])
        for i in range(n_points)
    ]


def get_sentinel_points(points: np.ndarray, bounding_box: BoundingBox) -> np.ndarray:
    """
    Far away points that make every Voronoi cell of real sites finite.

    They are placed so far from the bounding box that every point of the box
    is closer to any real site than to any sentinel, hence clipped cells are
    not affected by them.
    """
    center = np.array(bounding_box.center.as_tuple())
    extent = float(np.max(np.hypot(points[:, 0] - center[0], points[:, 1] - center[1])))
    distance = 4.0 * (bounding_box.half_diagonal + extent) + 1.0
    offsets = np.array([[-1.0, -1.0], [-1.0, 1.0], [1.0, -1.0], [1.0, 1.0]])
    return center + offsets * distance


def build_clipped_cell_vertices(
    voronoi: Voronoi, n_sites: int, bounding_box: BoundingBox
) -> List[np.ndarray]:
    """
    Clip Voronoi regions of the first n_sites points to the bounding box.

    Args:
        voronoi: scipy Voronoi diagram (real sites first, then sentinels)
        n_sites: Number of real sites
        bounding_box: Clipping rectangle

    Returns:
        List of (k, 2) vertex arrays, empty for cells outside the box
    """
    clip_polygon = bounding_box.to_polygon()
    cell_vertices = []
    for site in range(n_sites):
        region_index = voronoi.point_region[site]
        region = voronoi.regions[region_index] if region_index >= 0 else []
        if len(region) < 3 or -1 in region:
            cell_vertices.append(np.empty((0, 2)))
            continue

        clipped = Polygon(voronoi.vertices[region]).intersection(clip_polygon)
        if clipped.is_empty:
            cell_vertices.append(np.empty((0, 2)))
            continue

        coordinates = shapely.get_coordinates(clipped)
        if len(coordinates) > 1 and np.array_equal(coordinates[0], coordinates[-1]):
            coordinates = coordinates[:-1]
        cell_vertices.append(coordinates)
    return cell_vertices


def build_voronoi(sites: List[Vector], bounding_box: BoundingBox) -> Optional[VoronoiDiagram]:
    """
    Build Voronoi diagram of key points clipped to bounding box.

    Args:
        sites: Key points (sites of the diagram)
        bounding_box: Clipping rectangle, normally the image

    Returns:
        Voronoi diagram, or None if the key points are degenerate
    """
    points = _sites_to_array(sites)
    triangulation = _triangulate(points, "voronoi")
    if triangulation is None:
        return None

    cell_neighbors = build_cell_neighbors(triangulation)
    sentinel_points = get_sentinel_points(points, bounding_box)
    try:
        voronoi = Voronoi(np.vstack([points, sentinel_points]))
    except QhullError as error:
        logger.warning("Voronoi construction failed", sites=len(points), error=str(error).splitlines()[0])
        return None
    cell_vertices = build_clipped_cell_vertices(voronoi, len(points), bounding_box)

    logger.info(
        "Voronoi diagram built",
        sites=len(points),
        vertices=len(voronoi.vertices),
        ridges=len(voronoi.ridge_points),
    )
    return VoronoiDiagram(
        sites=points,
        cell_neighbors=cell_neighbors,
        cell_vertices=cell_vertices,
        bounding_box=bounding_box,
    )


def calculate_circumcenters(corners: np.ndarray) -> np.ndarray:
    """Circumcenters of triangles given as a (n, 3, 2) array of corners."""
    ax, ay = corners[:, 0, 0], corners[:, 0, 1]
    bx, by = corners[:, 1, 0], corners[:, 1, 1]
    cx, cy = corners[:, 2, 0], corners[:, 2, 1]
    denominator = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    a_squared = ax * ax + ay * ay
    b_squared = bx * bx + by * by
    c_squared = cx * cx + cy * cy
    ux = (a_squared * (by - cy) + b_squared * (cy - ay) + c_squared * (ay - by)) / denominator
    uy = (a_squared * (cx - bx) + b_squared * (ax - cx) + c_squared * (bx - ax)) / denominator
    return np.column_stack([ux, uy])


def build_delaunay(sites: List[Vector]) -> Optional[Triangulation]:
    """
    Build Delaunay triangulation of key points.

    Args:
        sites: Key points (corners of triangles)

    Returns:
        Triangulation with clockwise-consistent triangles, or None if the key
        points are degenerate
    """
    points = _sites_to_array(sites)
    triangulation = _triangulate(points, "delaunay")
    if triangulation is None:
        return None

    triangles = triangulation.simplices.astype(np.int64)
    corners = points[triangles]
    orientations = orient2d(corners[:, 0].T, corners[:, 1].T, corners[:, 2].T)

    # Flip counterclockwise triangles and drop slivers without a circumcenter
    counterclockwise = orientations > 0.0
    triangles[counterclockwise] = triangles[counterclockwise][:, [0, 2, 1]]
    triangles = triangles[orientations != 0.0]
    if len(triangles) == 0:
        logger.warning("Key points produced only degenerate triangles", sites=len(points))
        return None

    circumcenters = calculate_circumcenters(points[triangles])

    logger.info("Delaunay triangulation built", sites=len(points), triangles=len(triangles))
    return Triangulation(sites=points, triangles=triangles, circumcenters=circumcenters)
