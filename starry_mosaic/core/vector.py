"""
2D vector type used for both points and displacements.

Comparison of vectors takes floating point error into account: coordinates
are compared with the tolerance defined in ``utility``. Because of that,
vectors are not hashable and sorting uses ``Vector.compare`` through
``functools.cmp_to_key``.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from . import utility

ScaleLike = Union[float, Tuple[float, float]]


@dataclass(frozen=True, eq=False)
class Vector:
    """Immutable 2D vector (or point)."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_tuple(cls, coordinates) -> "Vector":
        """Build vector from any (x, y) pair, e.g. tuple or numpy row."""
        x, y = coordinates
        return cls(float(x), float(y))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def squared_length(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def squared_distance_to(self, point: "Vector") -> float:
        return (self - point).squared_length()

    def distance_to(self, point: "Vector") -> float:
        return (self - point).length()

    def normalized(self) -> "Vector":
        """Vector with the same direction and length of 1."""
        return self / self.length()

    def dot(self, vector: "Vector") -> float:
        return self.x * vector.x + self.y * vector.y

    def cross(self, vector: "Vector") -> float:
        """
        Difference between products of opposite coordinates.

        Named after the 3D cross product because the algorithm is similar;
        the sign follows ``y1 * x2 - x1 * y2``.
        """
        return self.y * vector.x - self.x * vector.y

    def interpolate(self, vector: "Vector", factor: float) -> "Vector":
        """
        Linear interpolation between this and another vector.

        Args:
            vector: Target of interpolation
            factor: Interpolation factor, clamped to [0, 1]

        Returns:
            Interpolated vector
        """
        factor = utility.clamp(factor, 0.0, 1.0)
        return Vector(
            self.x + (vector.x - self.x) * factor,
            self.y + (vector.y - self.y) * factor,
        )

    def translate(self, vector: "Vector") -> "Vector":
        return self + vector

    def rotate(self, angle: float) -> "Vector":
        """Rotate around origin (0, 0) by angle in radians."""
        sine = math.sin(angle)
        cosine = math.cos(angle)
        return Vector(
            self.x * cosine - self.y * sine,
            self.x * sine + self.y * cosine,
        )

    def rotate_around_pivot(self, angle: float, pivot: "Vector") -> "Vector":
        return (self - pivot).rotate(angle) + pivot

    def scale(self, horizontal_scale: float, vertical_scale: float) -> "Vector":
        return Vector(self.x * horizontal_scale, self.y * vertical_scale)

    def shear(self, horizontal_shear: float, vertical_shear: float) -> "Vector":
        return Vector(
            self.x + horizontal_shear * self.y,
            self.y + vertical_shear * self.x,
        )

    def round_to_epsilon(self, epsilon: float = utility.EPSILON) -> "Vector":
        """Snap both coordinates to the epsilon grid (used when merging point sets)."""
        return Vector(
            utility.round_to_epsilon(self.x, epsilon),
            utility.round_to_epsilon(self.y, epsilon),
        )

    @staticmethod
    def compare(left: "Vector", right: "Vector") -> int:
        """Lexicographic (x, then y) three-way comparison under tolerance."""
        result = utility.approx_cmp(left.x, right.x)
        if result == 0:
            result = utility.approx_cmp(left.y, right.y)
        return result

    # Comparison

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return utility.approx_eq(self.x, other.x) and utility.approx_eq(self.y, other.y)

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other: "Vector") -> bool:
        return Vector.compare(self, other) < 0

    def __le__(self, other: "Vector") -> bool:
        return Vector.compare(self, other) <= 0

    def __gt__(self, other: "Vector") -> bool:
        return Vector.compare(self, other) > 0

    def __ge__(self, other: "Vector") -> bool:
        return Vector.compare(self, other) >= 0

    __hash__ = None

    # Arithmetic

    def __add__(self, vector: "Vector") -> "Vector":
        return Vector(self.x + vector.x, self.y + vector.y)

    def __sub__(self, vector: "Vector") -> "Vector":
        return Vector(self.x - vector.x, self.y - vector.y)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def __mul__(self, scale: ScaleLike) -> "Vector":
        if isinstance(scale, tuple):
            return Vector(self.x * scale[0], self.y * scale[1])
        return Vector(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale: ScaleLike) -> "Vector":
        if isinstance(scale, tuple):
            return Vector(self.x / scale[0], self.y / scale[1])
        return Vector(self.x / scale, self.y / scale)

    def __repr__(self) -> str:
        return f"Vector({self.x!r}, {self.y!r})"

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
