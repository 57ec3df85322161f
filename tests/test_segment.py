"""Tests for segments and segment intersection."""

import pytest
from starry_mosaic.core.segment import Segment
from starry_mosaic.core.vector import Vector


class TestSegment:
    """Test segment geometry."""

    def test_length(self):
        """Test segment length."""
        segment = Segment.from_tuples((0, 0), (3, 4))
        assert segment.length() == pytest.approx(5.0)
        assert segment.squared_length() == pytest.approx(25.0)

    def test_equality_ignores_direction(self):
        """Test that reversed segment is the same segment."""
        assert Segment.from_tuples((0, 0), (1, 2)) == Segment.from_tuples((1, 2), (0, 0))
        assert Segment.from_tuples((0, 0), (1, 2)) != Segment.from_tuples((0, 0), (2, 1))


class TestIntersection:
    """Test segment intersection."""

    def test_crossing_segments(self):
        """Test intersection of crossing diagonals."""
        first = Segment.from_tuples((0, 0), (2, 2))
        second = Segment.from_tuples((0, 2), (2, 0))
        assert first.intersect(second) == Vector(1.0, 1.0)
        assert second.intersect(first) == Vector(1.0, 1.0)

    @pytest.mark.parametrize(
        "first,second",
        [
            (((0, 0), (1, 0)), ((0, 1), (1, 1))),   # parallel
            (((0, 0), (1, 0)), ((2, 0), (3, 0))),   # collinear
            (((0, 0), (1, 1)), ((1, 1), (2, 0))),   # touching at end
            (((0, 0), (1, 1)), ((0, 0), (1, -1))),  # touching at start
            (((0, 0), (1, 0)), ((2, -1), (2, 1))),  # crossing beyond the end
        ],
    )
    def test_no_intersection(self, first, second):
        """Test that only strict interior crossings are reported."""
        assert Segment.from_tuples(*first).intersect(Segment.from_tuples(*second)) is None

    def test_intersection_lies_on_segment(self):
        """Test that found point lies on both segments."""
        first = Segment.from_tuples((0, 0), (4, 1))
        second = Segment.from_tuples((1, 3), (2, -2))
        point = first.intersect(second)

        assert point is not None
        direction = first.end - first.start
        assert direction.cross(point - first.start) == pytest.approx(0.0, abs=1e-9)
        direction = second.end - second.start
        assert direction.cross(point - second.start) == pytest.approx(0.0, abs=1e-9)

    def test_only_own_parameter_is_checked(self):
        """Test that the other segment is treated as a line."""
        first = Segment.from_tuples((0, 0), (2, 0))
        second = Segment.from_tuples((1, 1), (1, 2))
        assert first.intersect(second) == Vector(1.0, 0.0)
