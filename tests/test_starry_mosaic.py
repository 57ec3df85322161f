"""Tests for starry mosaic rendering."""

import math

import numpy as np
import pytest
from starry_mosaic.config import settings
from starry_mosaic.core.coloring_method import (
    Color, ConicGradient, Gradient, LinearGradient, RadialGradient
)
from starry_mosaic.core.mosaic import lighten_factor, split_into_bands
from starry_mosaic.core.mosaic_builder import MosaicBuilder
from starry_mosaic.core.mosaic_shape import MosaicShape
from starry_mosaic.core.segment import Segment
from starry_mosaic.core.starry_mosaic import StarryMosaic
from starry_mosaic.core.transform import Scale, Transformation
from starry_mosaic.core.vector import Vector

RED = Color(1.0, 0.0, 0.0)


class CollinearShape(MosaicShape):
    """Shape whose key points lie on a single line."""

    def set_up_points(self, image_size, transformation=None):
        return [Vector(10.0, 10.0), Vector(20.0, 20.0), Vector(30.0, 30.0)]

    def connect_points(self, shape_points):
        return [Segment(shape_points[0], shape_points[-1])]


@pytest.fixture(scope="module")
def octagon_mosaic():
    """Regular octagon at 400x400, half scale."""
    mosaic = (
        MosaicBuilder()
        .set_image_size(400, 400)
        .set_regular_polygon_shape(8)
        .set_center(Vector(200.0, 200.0))
        .set_rotation_angle(0.0)
        .set_uniform_scale(0.5)
        .build_star()
    )
    assert mosaic is not None
    return mosaic


@pytest.fixture(scope="module")
def octagon_image(octagon_mosaic):
    """Octagon mosaic drawn with solid red."""
    return octagon_mosaic.draw(RED)


@pytest.fixture
def small_mosaic():
    """Small star mosaic for quick rendering."""
    return (
        MosaicBuilder()
        .set_image_size(48, 40)
        .set_polygonal_star_shape(5)
        .set_uniform_scale(0.9)
        .set_rotation_angle(0.2)
        .build_star()
    )


class TestHelpers:
    """Test band splitting and falloff."""

    def test_split_into_bands(self):
        """Test that bands cover all rows once."""
        assert split_into_bands(10, 4) == [(0, 4), (4, 8), (8, 10)]
        assert split_into_bands(3, 64) == [(0, 3)]

    @pytest.mark.parametrize(
        "distance,maximum,expected",
        [(0.0, 10.0, 1.0), (5.0, 10.0, 0.25), (10.0, 10.0, 0.0), (15.0, 10.0, 0.0), (3.0, 0.0, 0.0)],
    )
    def test_lighten_factor(self, distance, maximum, expected):
        """Test quadratic falloff."""
        assert lighten_factor(distance, maximum) == pytest.approx(expected)


class TestStarryMosaic:
    """Test starry mosaic construction and drawing."""

    def test_maximum_cell_distances(self, octagon_mosaic):
        """Test that every cell has an extent."""
        distances = octagon_mosaic.maximum_cell_distances
        assert len(distances) == len(octagon_mosaic.key_points) == 57
        assert all(distance > 0.0 for distance in distances)

    def test_image_size(self, octagon_image):
        """Test that image matches mosaic size."""
        assert octagon_image.size == (400, 400)
        assert octagon_image.mode == "RGB"

    def test_solid_red_everywhere(self, octagon_image):
        """Test that lightening never changes the saturated channel."""
        pixels = np.asarray(octagon_image)
        assert np.all(pixels[:, :, 0] == 255)
        assert np.any(pixels[:, :, 1] > 0)

    def test_center_pixel(self, octagon_image):
        """Test that the pixel on the center key point is fully lightened."""
        assert octagon_image.getpixel((200, 200)) == (255, 255, 255)

    def test_center_cell_falloff(self, octagon_mosaic, octagon_image):
        """Test exact colors around the center key point."""
        site = octagon_mosaic.voronoi.find_nearest_site((200.0, 200.0))
        center = octagon_mosaic.voronoi.site_position(site)
        assert center == Vector(200.0, 200.0)
        maximum_distance = octagon_mosaic.maximum_cell_distances[site]

        for y in range(190, 211):
            for x in range(190, 211):
                distance = Vector(float(x), float(y)).distance_to(center)
                if distance > 10.0:
                    continue
                expected = RED.lighten(lighten_factor(distance, maximum_distance)).to_rgb8()
                assert octagon_image.getpixel((x, y)) == expected

    def test_symmetry(self, octagon_image):
        """Test mirror symmetry of the octagon."""
        pixels = np.asarray(octagon_image).astype(int)
        # Compare mirrored pixels around x = 200 away from cell borders
        left = pixels[150:250, 101:200]
        right = pixels[150:250, 201:300][:, ::-1]
        assert np.mean(np.abs(left - right) <= 2) > 0.95

    def test_parallel_matches_sequential(self, small_mosaic, monkeypatch):
        """Test that band rendering on workers gives the same image."""
        monkeypatch.setattr(settings, "render_band_height", 8)
        method = LinearGradient(
            Gradient.from_colors(["navy", "gold", "crimson"]), Vector(0.0, 0.0), Vector(48.0, 40.0), 0.5
        )
        sequential = np.asarray(small_mosaic.draw(method, workers=1))
        parallel = np.asarray(small_mosaic.draw(method, workers=2))
        np.testing.assert_array_equal(sequential, parallel)

    def test_draw_shortcuts(self, small_mosaic):
        """Test gradient drawing shortcuts."""
        gradient = Gradient.from_colors(["black", "white"])
        images = [
            small_mosaic.draw_linear_gradient(gradient, Vector(0.0, 0.0), Vector(48.0, 0.0)),
            small_mosaic.draw_radial_gradient(gradient, Vector(24.0, 20.0), 0.0, Vector(24.0, 20.0), 20.0),
            small_mosaic.draw_simple_radial_gradient(gradient, smoothness=0.0),
            small_mosaic.draw_conic_gradient(gradient, angle=math.pi / 4),
        ]
        for image in images:
            assert image.size == (48, 40)
            assert np.asarray(image).any()

    def test_draw_shortcuts_off_center(self, small_mosaic):
        """Test simple radial and conic shortcuts with explicit center."""
        gradient = Gradient.from_colors(["black", "white"])
        corner = Vector(5.0, 7.0)

        radial = small_mosaic.draw_simple_radial_gradient(gradient, corner, 30.0, 0.5)
        expected_radial = small_mosaic.draw(RadialGradient.simple(gradient, corner, 30.0, 0.5))
        np.testing.assert_array_equal(np.asarray(radial), np.asarray(expected_radial))

        conic = small_mosaic.draw_conic_gradient(gradient, corner, math.pi / 3, 0.5)
        expected_conic = small_mosaic.draw(ConicGradient(gradient, corner, math.pi / 3, 0.5))
        np.testing.assert_array_equal(np.asarray(conic), np.asarray(expected_conic))

        centered = small_mosaic.draw_conic_gradient(gradient, angle=math.pi / 3, smoothness=0.5)
        assert not np.array_equal(np.asarray(conic), np.asarray(centered))

    def test_draw_accepts_color_string(self, small_mosaic):
        """Test that color strings are coloring methods too."""
        image = small_mosaic.draw("#00ff00")
        assert image.getpixel((24, 20))[1] == 255

    def test_transform(self, small_mosaic):
        """Test rebuilding with another transformation."""
        transformation = Transformation(translation=Vector(10.0, 12.0), scale=Scale(0.5, 0.5))
        transformed = small_mosaic.transform(transformation)

        assert isinstance(transformed, StarryMosaic)
        assert transformed.image_size == small_mosaic.image_size
        assert transformed.shape == small_mosaic.shape
        assert transformed.transformation == transformation
        assert transformed.center == Vector(10.0, 12.0)

    def test_degenerate_shape(self):
        """Test that collinear key points produce no mosaic."""
        assert MosaicBuilder().set_shape(CollinearShape()).build_star() is None
