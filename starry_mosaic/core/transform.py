"""
Affine transformation of mosaic shapes.

A transformation is kept as separate components (translation, rotation,
scale, shear) instead of a matrix so that it can be combined and clamped
component by component, the way the mosaic builder exposes it.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Tuple, Union

from . import utility
from .vector import Vector


@dataclass(frozen=True, eq=False)
class Scale:
    """Non-uniform scale factors; defaults to identity."""

    x: float = 1.0
    y: float = 1.0

    @classmethod
    def uniform(cls, scale: float) -> "Scale":
        return cls(scale, scale)

    @classmethod
    def coerce(cls, scale: Union["Scale", float, Tuple[float, float]]) -> "Scale":
        if isinstance(scale, Scale):
            return scale
        if isinstance(scale, tuple):
            return cls(float(scale[0]), float(scale[1]))
        return cls.uniform(float(scale))

    def clamp(self, minimum_scale: float, maximum_scale: float) -> "Scale":
        """
        Clamp magnitude of both factors while preserving their signs.

        Zero becomes ``minimum_scale``, so the result is never degenerate.
        """
        if minimum_scale < 0.0:
            raise ValueError("minimum_scale should be non-negative")
        return Scale(
            math.copysign(utility.clamp(abs(self.x), minimum_scale, maximum_scale), self.x),
            math.copysign(utility.clamp(abs(self.y), minimum_scale, maximum_scale), self.y),
        )

    def reciprocal(self) -> "Scale":
        return Scale(1.0 / self.x, 1.0 / self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Scale):
            return NotImplemented
        return utility.approx_eq(self.x, other.x) and utility.approx_eq(self.y, other.y)

    __hash__ = None

    def __mul__(self, scale: "Scale") -> "Scale":
        return Scale(self.x * scale.x, self.y * scale.y)

    def __truediv__(self, scale: "Scale") -> "Scale":
        return Scale(self.x / scale.x, self.y / scale.y)

    def __neg__(self) -> "Scale":
        return Scale(-self.x, -self.y)


@dataclass(frozen=True, eq=False)
class Transformation:
    """
    Transformation applied to key points of a mosaic shape.

    Points are scaled, sheared, rotated around origin and finally translated,
    so ``translation`` is where the shape center ends up in the image.
    """

    translation: Vector = field(default_factory=Vector)
    rotation_angle: float = 0.0
    scale: Scale = field(default_factory=Scale)
    shear: Vector = field(default_factory=Vector)

    @classmethod
    def from_translation(cls, translation) -> "Transformation":
        if not isinstance(translation, Vector):
            translation = Vector.from_tuple(translation)
        return cls(translation=translation)

    @classmethod
    def from_rotation(cls, rotation_angle: float) -> "Transformation":
        return cls(rotation_angle=rotation_angle)

    @classmethod
    def from_scale(cls, scale) -> "Transformation":
        return cls(scale=Scale.coerce(scale))

    @classmethod
    def from_shear(cls, shear) -> "Transformation":
        if not isinstance(shear, Vector):
            shear = Vector.from_tuple(shear)
        return cls(shear=shear)

    def with_changes(self, **changes) -> "Transformation":
        return replace(self, **changes)

    def apply(self, point: Vector) -> Vector:
        """Transform a single point."""
        return (
            point.scale(self.scale.x, self.scale.y)
            .shear(self.shear.x, self.shear.y)
            .rotate(self.rotation_angle)
            .translate(self.translation)
        )

    def apply_to_points(self, points: Iterable[Vector]) -> List[Vector]:
        return [self.apply(point) for point in points]

    def inverse(self) -> "Transformation":
        """
        Component-wise inverse: negated translation, rotation and shear with
        reciprocal scale. Combining a transformation with its inverse gives
        the identity transformation.
        """
        return Transformation(
            translation=-self.translation,
            rotation_angle=-self.rotation_angle,
            scale=self.scale.reciprocal(),
            shear=-self.shear,
        )

    def __neg__(self) -> "Transformation":
        return self.inverse()

    def __add__(self, transformation: "Transformation") -> "Transformation":
        return Transformation(
            translation=self.translation + transformation.translation,
            rotation_angle=self.rotation_angle + transformation.rotation_angle,
            scale=self.scale * transformation.scale,
            shear=self.shear + transformation.shear,
        )

    def __sub__(self, transformation: "Transformation") -> "Transformation":
        return Transformation(
            translation=self.translation - transformation.translation,
            rotation_angle=self.rotation_angle - transformation.rotation_angle,
            scale=self.scale / transformation.scale,
            shear=self.shear - transformation.shear,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transformation):
            return NotImplemented
        return (
            self.translation == other.translation
            and utility.approx_eq(self.rotation_angle, other.rotation_angle)
            and self.scale == other.scale
            and self.shear == other.shear
        )

    __hash__ = None


def combine(first: Transformation, second: Transformation) -> Transformation:
    """Combine two transformations (same as ``first + second``)."""
    return first + second
