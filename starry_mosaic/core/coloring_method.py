"""
Coloring methods used to paint mosaics.

The simplest coloring method is a single color. Gradients (linear, radial and
conic) can either follow the shape of the mosaic, ignore it completely or
anything in between; this is controlled with ``smoothness``:

- 0.0 paints every mosaic fragment with the single color that the gradient
  has at the fragment key point;
- 1.0 paints the plain gradient, independent of the mosaic shape.
"""

import colorsys
import math
from abc import ABC, abstractmethod
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from PIL import ImageColor

from . import utility
from .vector import Vector

# Minimal gap between inner and outer circles of radial gradient, in pixels.
RADIAL_GRADIENT_MARGIN = 1.0

FULL_TURN = 2.0 * math.pi


@dataclass(frozen=True)
class Color:
    """RGB color with float channels in [0, 1]."""

    red: float
    green: float
    blue: float

    @classmethod
    def parse(cls, value: str) -> "Color":
        """Parse any color string Pillow understands ("#ff8000", "red", ...)."""
        red, green, blue = ImageColor.getrgb(value)[:3]
        return cls.from_rgb8((red, green, blue))

    @classmethod
    def from_rgb8(cls, channels: Sequence[int]) -> "Color":
        red, green, blue = channels
        return cls(red / 255.0, green / 255.0, blue / 255.0)

    @classmethod
    def coerce(cls, value) -> "Color":
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        red, green, blue = value
        return cls(float(red), float(green), float(blue))

    def mix(self, color: "Color", factor: float) -> "Color":
        """Linear mix with another color; factor 0 keeps this color."""
        return Color(
            self.red + (color.red - self.red) * factor,
            self.green + (color.green - self.green) * factor,
            self.blue + (color.blue - self.blue) * factor,
        )

    def mix_hsl(self, color: "Color", factor: float) -> "Color":
        """
        Mix with another color in HSL space.

        Hue moves along the shorter arc of the color wheel, so mixing red and
        blue passes through magenta instead of green.

        Args:
            color: Target color
            factor: Mixing factor; 0 keeps this color, 1 gives the target

        Returns:
            Mixed color
        """
        hue1, lightness1, saturation1 = colorsys.rgb_to_hls(self.red, self.green, self.blue)
        hue2, lightness2, saturation2 = colorsys.rgb_to_hls(color.red, color.green, color.blue)

        if abs(hue1 - hue2) > 0.5:
            if hue1 > hue2:
                hue2 += 1.0
            else:
                hue1 += 1.0

        hue = (hue1 + (hue2 - hue1) * factor) % 1.0
        lightness = lightness1 + (lightness2 - lightness1) * factor
        saturation = saturation1 + (saturation2 - saturation1) * factor
        return Color(*colorsys.hls_to_rgb(hue, lightness, saturation))

    def lighten(self, factor: float) -> "Color":
        """Move every channel towards white by factor (0 keeps the color, 1 is white)."""
        return Color(
            self.red + (1.0 - self.red) * factor,
            self.green + (1.0 - self.green) * factor,
            self.blue + (1.0 - self.blue) * factor,
        )

    def to_rgb8(self) -> Tuple[int, int, int]:
        """Quantize to 8-bit channels (clamped, rounded half up)."""
        return (
            int(utility.clamp(self.red, 0.0, 1.0) * 255.0 + 0.5),
            int(utility.clamp(self.green, 0.0, 1.0) * 255.0 + 0.5),
            int(utility.clamp(self.blue, 0.0, 1.0) * 255.0 + 0.5),
        )

    def interpolate(self, point: Vector, key_point: Vector) -> "Color":
        """A plain color is its own coloring method."""
        return self


ColorLike = Union[Color, str, Tuple[float, float, float]]
GradientLike = Union["Gradient", Iterable[Tuple[float, ColorLike]]]


class Gradient:
    """
    Ordered color stops with linear interpolation between them.

    Lookups outside the range of stop positions return the nearest end color.
    Colors between stops are mixed in RGB (``mode="rgb"``) or HSL
    (``mode="hsl"``) space.
    """

    MODES = ("rgb", "hsl")

    def __init__(self, stops: Iterable[Tuple[float, ColorLike]], mode: str = "rgb"):
        if mode not in self.MODES:
            raise ValueError(f"Unknown gradient mode: {mode}")
        self.mode = mode
        self.stops: List[Tuple[float, Color]] = sorted(
            ((float(position), Color.coerce(color)) for position, color in stops),
            key=lambda stop: stop[0],
        )
        if not self.stops:
            raise ValueError("Gradient requires at least one color stop")
        self._positions = [position for position, _ in self.stops]

    @classmethod
    def from_colors(cls, colors: Sequence[ColorLike], mode: str = "rgb") -> "Gradient":
        """Spread colors evenly over [0, 1]."""
        if len(colors) == 1:
            return cls([(0.0, colors[0])], mode)
        last_index = len(colors) - 1
        return cls(((index / last_index, color) for index, color in enumerate(colors)), mode)

    @classmethod
    def coerce(cls, gradient: GradientLike) -> "Gradient":
        if isinstance(gradient, Gradient):
            return gradient
        return cls(gradient)

    @property
    def domain(self) -> Tuple[float, float]:
        return self._positions[0], self._positions[-1]

    def get(self, position: float) -> Color:
        """Color of gradient at position."""
        if position <= self._positions[0]:
            return self.stops[0][1]
        if position >= self._positions[-1]:
            return self.stops[-1][1]
        index = bisect_right(self._positions, position)
        start_position, start_color = self.stops[index - 1]
        end_position, end_color = self.stops[index]
        factor = (position - start_position) / (end_position - start_position)
        if self.mode == "hsl":
            return start_color.mix_hsl(end_color, factor)
        return start_color.mix(end_color, factor)

    def __len__(self) -> int:
        return len(self.stops)

    def __repr__(self) -> str:
        return f"Gradient({self.stops!r}, mode={self.mode!r})"


class ColoringMethod(ABC):
    """Calculates color of a pixel of mosaic."""

    @abstractmethod
    def interpolate(self, point: Vector, key_point: Vector) -> Color:
        """
        Color of point belonging to the mosaic fragment built around key_point.

        Args:
            point: Pixel position
            key_point: Key point (Voronoi site or triangle circumcenter)

        Returns:
            Color of the pixel before lightening
        """


def as_coloring_method(method) -> "ColoringMethod":
    """Accept coloring methods, colors and color strings alike."""
    if isinstance(method, ColoringMethod):
        return method
    if isinstance(method, (Color, str, tuple)):
        return SolidColor(Color.coerce(method))
    raise TypeError(f"Unsupported coloring method: {type(method).__name__}")


def _clamp_smoothness(smoothness: float) -> float:
    return utility.clamp(float(smoothness), 0.0, 1.0)


class SolidColor(ColoringMethod):
    """Single color, ignores both pixel and key point."""

    def __init__(self, color: ColorLike):
        self.color = Color.coerce(color)

    def interpolate(self, point, key_point):
        return self.color

    def __repr__(self) -> str:
        return f"SolidColor({self.color!r})"


class LinearGradient(ColoringMethod):
    """Gradient along the line from start_point to end_point."""

    def __init__(
        self,
        gradient: GradientLike,
        start_point: Vector,
        end_point: Vector,
        smoothness: float = 1.0,
    ):
        self.gradient = Gradient.coerce(gradient)
        self._start_point = start_point
        self._end_point = end_point
        self.smoothness = smoothness
        self._update_direction()

    @classmethod
    def smooth(cls, gradient, start_point, end_point) -> "LinearGradient":
        return cls(gradient, start_point, end_point, 1.0)

    @classmethod
    def step(cls, gradient, start_point, end_point) -> "LinearGradient":
        return cls(gradient, start_point, end_point, 0.0)

    def _update_direction(self):
        if self._start_point != self._end_point:
            self._direction = self._end_point - self._start_point
        else:
            self._direction = Vector(1.0, 0.0)
        self._direction_squared_length = self._direction.squared_length()

    @property
    def start_point(self) -> Vector:
        return self._start_point

    @start_point.setter
    def start_point(self, start_point: Vector):
        self._start_point = start_point
        self._update_direction()

    @property
    def end_point(self) -> Vector:
        return self._end_point

    @end_point.setter
    def end_point(self, end_point: Vector):
        self._end_point = end_point
        self._update_direction()

    @property
    def direction(self) -> Vector:
        return self._direction

    @property
    def smoothness(self) -> float:
        return self._smoothness

    @smoothness.setter
    def smoothness(self, smoothness: float):
        self._smoothness = _clamp_smoothness(smoothness)

    def interpolate(self, point, key_point):
        smoothed_point = key_point.interpolate(point, self._smoothness)
        factor = (smoothed_point - self._start_point).dot(self._direction) / self._direction_squared_length
        return self.gradient.get(factor)


class RadialGradient(ColoringMethod):
    """
    Gradient between two circles.

    Position of a point in gradient is parameter ``t`` of the circle
    interpolated between inner (t = 0) and outer (t = 1) circles that passes
    through the point. The outer circle always strictly contains the inner
    one, which keeps the quadratic equation for ``t`` well-posed.
    """

    def __init__(
        self,
        gradient: GradientLike,
        inner_center: Vector,
        inner_radius: float,
        outer_center: Vector,
        outer_radius: float,
        smoothness: float = 1.0,
    ):
        self.gradient = Gradient.coerce(gradient)
        self._inner_center = inner_center
        self._inner_radius = float(inner_radius)
        self._direction = outer_center - inner_center
        self._direction_squared_length = self._direction.squared_length()
        self._radius_difference = float(outer_radius) - self._inner_radius
        self.smoothness = smoothness
        self._fit_inner_circle_into_outer()

    @classmethod
    def smooth(cls, gradient, inner_center, inner_radius, outer_center, outer_radius) -> "RadialGradient":
        return cls(gradient, inner_center, inner_radius, outer_center, outer_radius, 1.0)

    @classmethod
    def step(cls, gradient, inner_center, inner_radius, outer_center, outer_radius) -> "RadialGradient":
        return cls(gradient, inner_center, inner_radius, outer_center, outer_radius, 0.0)

    @classmethod
    def simple(cls, gradient, center: Vector, radius: float, smoothness: float = 1.0) -> "RadialGradient":
        """Filled circle gradient: inner circle shrinks to the center point."""
        return cls(gradient, center, 0.0, center, radius, smoothness)

    def _fit_inner_circle_into_outer(self):
        self._radius_difference = max(
            self._radius_difference, self._direction.length() + RADIAL_GRADIENT_MARGIN
        )

    @property
    def inner_center(self) -> Vector:
        return self._inner_center

    @inner_center.setter
    def inner_center(self, inner_center: Vector):
        outer_center = self.outer_center
        self._inner_center = inner_center
        self.outer_center = outer_center

    @property
    def inner_radius(self) -> float:
        return self._inner_radius

    @inner_radius.setter
    def inner_radius(self, inner_radius: float):
        outer_radius = self.outer_radius
        self._inner_radius = float(inner_radius)
        self.outer_radius = outer_radius

    @property
    def outer_center(self) -> Vector:
        return self._inner_center + self._direction

    @outer_center.setter
    def outer_center(self, outer_center: Vector):
        self._direction = outer_center - self._inner_center
        self._direction_squared_length = self._direction.squared_length()
        self._fit_inner_circle_into_outer()

    @property
    def outer_radius(self) -> float:
        return self._inner_radius + self._radius_difference

    @outer_radius.setter
    def outer_radius(self, outer_radius: float):
        self._radius_difference = float(outer_radius) - self._inner_radius
        self._fit_inner_circle_into_outer()

    @property
    def smoothness(self) -> float:
        return self._smoothness

    @smoothness.setter
    def smoothness(self, smoothness: float):
        self._smoothness = _clamp_smoothness(smoothness)

    def interpolate(self, point, key_point):
        smoothed_point = key_point.interpolate(point, self._smoothness)
        point_vector = smoothed_point - self._inner_center
        alpha = self._direction_squared_length - self._radius_difference ** 2
        beta = point_vector.dot(self._direction) + self._inner_radius * self._radius_difference
        gamma = point_vector.squared_length() - self._inner_radius ** 2
        discriminant = max(beta * beta - alpha * gamma, 0.0)
        factor = (beta - math.sqrt(discriminant)) / alpha
        return self.gradient.get(factor)


class ConicGradient(ColoringMethod):
    """Gradient sweeping around center, starting at angle (radians)."""

    def __init__(
        self,
        gradient: GradientLike,
        center: Vector,
        angle: float = 0.0,
        smoothness: float = 1.0,
    ):
        self.gradient = Gradient.coerce(gradient)
        self.center = center
        self.angle = angle
        self.smoothness = smoothness

    @classmethod
    def smooth(cls, gradient, center, angle) -> "ConicGradient":
        return cls(gradient, center, angle, 1.0)

    @classmethod
    def step(cls, gradient, center, angle) -> "ConicGradient":
        return cls(gradient, center, angle, 0.0)

    @property
    def angle(self) -> float:
        return self._angle

    @angle.setter
    def angle(self, angle: float):
        self._angle = float(angle) % FULL_TURN

    @property
    def smoothness(self) -> float:
        return self._smoothness

    @smoothness.setter
    def smoothness(self, smoothness: float):
        self._smoothness = _clamp_smoothness(smoothness)

    def interpolate(self, point, key_point):
        smoothed_point = key_point.interpolate(point, self._smoothness)
        point_vector = smoothed_point - self.center
        angle = (math.atan2(point_vector.y, point_vector.x) - self._angle) % FULL_TURN
        return self.gradient.get(angle / FULL_TURN)
