"""Tests for the vector kernel and tolerance helpers."""

import math
from functools import cmp_to_key

import pytest
from starry_mosaic.core import utility
from starry_mosaic.core.vector import Vector


class TestTolerance:
    """Test approximate comparison and epsilon rounding."""

    def test_approx_eq_absolute(self):
        """Test that tiny differences near zero are ignored."""
        assert utility.approx_eq(0.0, utility.EPSILON / 2)
        assert not utility.approx_eq(0.0, utility.EPSILON * 2)

    def test_approx_eq_relative(self):
        """Test that differences of a few ulps of large values are ignored."""
        value = 1.0e12
        assert utility.approx_eq(value, math.nextafter(value, math.inf))

    def test_approx_cmp(self):
        """Test three-way comparison."""
        assert utility.approx_cmp(1.0, 2.0) == -1
        assert utility.approx_cmp(2.0, 1.0) == 1
        assert utility.approx_cmp(1.0, 1.0 + 1e-12) == 0

    def test_round_to_epsilon(self):
        """Test that values close to each other snap to the same grid point."""
        assert utility.round_to_epsilon(200.0 + 1e-12) == 200.0
        assert utility.round_to_epsilon(200.0 - 1e-12) == 200.0

    @pytest.mark.parametrize("value,expected", [(-1.0, 0.0), (0.5, 0.5), (2.0, 1.0)])
    def test_clamp(self, value, expected):
        """Test clamping into range."""
        assert utility.clamp(value, 0.0, 1.0) == expected


class TestVector:
    """Test vector arithmetic and geometry."""

    def test_arithmetic(self):
        """Test basic operators."""
        first = Vector(1.0, 2.0)
        second = Vector(3.0, -1.0)

        assert first + second == Vector(4.0, 1.0)
        assert first - second == Vector(-2.0, 3.0)
        assert -first == Vector(-1.0, -2.0)
        assert first * 2.0 == Vector(2.0, 4.0)
        assert 2.0 * first == Vector(2.0, 4.0)
        assert first * (2.0, 3.0) == Vector(2.0, 6.0)
        assert first / 2.0 == Vector(0.5, 1.0)
        assert first / (0.5, 4.0) == Vector(2.0, 0.5)
        assert first.translate(second) == Vector(4.0, 1.0)

    def test_approximate_equality(self):
        """Test that equality tolerates floating point error."""
        assert Vector(0.1 + 0.2, 1.0) == Vector(0.3, 1.0)
        assert Vector(0.0, 0.0) != Vector(0.0, 0.001)
        assert Vector() != (0.0, 0.0)

    def test_not_hashable(self):
        """Test that tolerant vectors cannot be used as dictionary keys."""
        with pytest.raises(TypeError):
            hash(Vector(1.0, 1.0))

    def test_dot_and_cross(self):
        """Test dot and cross products."""
        assert Vector(1.0, 2.0).dot(Vector(3.0, 4.0)) == 11.0
        assert Vector(1.0, 0.0).cross(Vector(0.0, 1.0)) == -1.0
        assert Vector(0.0, 1.0).cross(Vector(1.0, 0.0)) == 1.0
        assert Vector(2.0, 2.0).cross(Vector(1.0, 1.0)) == 0.0

    def test_lengths(self):
        """Test length and distance helpers."""
        vector = Vector(3.0, 4.0)
        assert vector.length() == pytest.approx(5.0)
        assert vector.squared_length() == 25.0
        assert Vector().distance_to(vector) == pytest.approx(5.0)
        assert vector.normalized() == Vector(0.6, 0.8)

    def test_interpolate_clamps_factor(self):
        """Test that interpolation never leaves the segment."""
        start, end = Vector(0.0, 0.0), Vector(10.0, -10.0)
        assert start.interpolate(end, 0.25) == Vector(2.5, -2.5)
        assert start.interpolate(end, 2.0) == end
        assert start.interpolate(end, -1.0) == start

    def test_rotate(self):
        """Test rotation around origin and around a pivot."""
        assert Vector(1.0, 0.0).rotate(math.pi / 2) == Vector(0.0, 1.0)
        assert Vector(2.0, 1.0).rotate_around_pivot(math.pi, Vector(1.0, 1.0)) == Vector(0.0, 1.0)

    def test_scale_and_shear(self):
        """Test per-axis scale and shear."""
        assert Vector(1.0, 2.0).scale(3.0, -1.0) == Vector(3.0, -2.0)
        assert Vector(1.0, 2.0).shear(0.5, 0.25) == Vector(2.0, 2.25)

    def test_tuple_conversion(self):
        """Test conversion from and to tuples."""
        vector = Vector.from_tuple((1, 2))
        assert vector.as_tuple() == (1.0, 2.0)
        x, y = vector
        assert (x, y) == (1.0, 2.0)

    def test_ordering(self):
        """Test lexicographic ordering under tolerance."""
        points = [Vector(1.0, 1.0), Vector(0.0, 2.0), Vector(1.0, 0.0)]
        points.sort(key=cmp_to_key(Vector.compare))
        assert points == [Vector(0.0, 2.0), Vector(1.0, 0.0), Vector(1.0, 1.0)]
        assert Vector(1.0, 1.0) <= Vector(1.0, 1.0 + 1e-12)
        assert not Vector(1.0, 1.0) < Vector(1.0, 1.0 + 1e-12)
