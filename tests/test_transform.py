"""Tests for scale and transformation."""

import math

import pytest
from starry_mosaic.core.transform import Scale, Transformation, combine
from starry_mosaic.core.vector import Vector


class TestScale:
    """Test scale factors."""

    def test_coerce(self):
        """Test that floats and tuples become scales."""
        assert Scale.coerce(2.0) == Scale(2.0, 2.0)
        assert Scale.coerce((1.0, 3.0)) == Scale(1.0, 3.0)

    def test_clamp_preserves_sign(self):
        """Test that clamping limits magnitude only."""
        scale = Scale(0.0, -5000.0).clamp(0.001, 1000.0)
        assert scale.x == 0.001
        assert scale.y == -1000.0

    def test_clamp_rejects_negative_minimum(self):
        """Test that negative minimum is a programming error."""
        with pytest.raises(ValueError):
            Scale().clamp(-1.0, 1.0)


class TestTransformation:
    """Test transformation application and arithmetic."""

    def test_identity(self):
        """Test that default transformation keeps points."""
        assert Transformation().apply(Vector(3.0, -4.0)) == Vector(3.0, -4.0)

    def test_apply_order(self):
        """Test scale, shear, rotation and translation order."""
        transformation = Transformation(
            translation=Vector(10.0, 20.0),
            rotation_angle=math.pi / 2,
            scale=Scale(2.0, 1.0),
        )
        assert transformation.apply(Vector(1.0, 0.0)) == Vector(10.0, 22.0)

        sheared = Transformation(shear=Vector(1.0, 0.0), rotation_angle=math.pi)
        # (1, 1) -> shear (2, 1) -> rotate (-2, -1)
        assert sheared.apply(Vector(1.0, 1.0)) == Vector(-2.0, -1.0)

    def test_constructors(self):
        """Test single component constructors."""
        assert Transformation.from_translation((1, 2)).translation == Vector(1.0, 2.0)
        assert Transformation.from_rotation(0.5).rotation_angle == 0.5
        assert Transformation.from_scale(3.0).scale == Scale(3.0, 3.0)
        assert Transformation.from_shear((0.5, 0.0)).shear == Vector(0.5, 0.0)

    def test_combine(self):
        """Test that components add and scales multiply."""
        first = Transformation(Vector(1.0, 2.0), 0.5, Scale(2.0, 3.0), Vector(0.1, 0.0))
        second = Transformation(Vector(3.0, -1.0), 0.25, Scale(0.5, 2.0), Vector(0.0, 0.2))
        combined = combine(first, second)

        assert combined == first + second
        assert combined.translation == Vector(4.0, 1.0)
        assert combined.rotation_angle == pytest.approx(0.75)
        assert combined.scale == Scale(1.0, 6.0)
        assert combined.shear == Vector(0.1, 0.2)
        assert combined - second == first

    def test_inverse(self):
        """Test that combining with inverse gives identity."""
        transformation = Transformation(Vector(5.0, -3.0), 1.25, Scale(4.0, 0.5), Vector(0.3, -0.2))
        assert transformation + transformation.inverse() == Transformation()
        assert -transformation == transformation.inverse()
