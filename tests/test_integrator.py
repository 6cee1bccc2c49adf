"""Unit tests for the path tracing integrator.

Tests cover:
- Sky gradient for escaping rays
- Depth exhaustion returns black
- Absorbed outcomes end the path with their color
- Attenuation is multiplied along the path
- Per-pixel averaging of a ray batch
"""

from dataclasses import dataclass

import pytest

from pathtracer.core.integrator import make_pixel_shader, shade, sky_color
from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.scatter import Absorbed, Scattered
from pathtracer.scene.world import World

ORIGIN = Vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class FixedAbsorb:
    """Test material that always absorbs with a fixed color."""

    color: Color

    def scatter(self, ray, normal, front_face):
        return Absorbed(self.color)


@dataclass(frozen=True)
class FixedBounce:
    """Test material that always scatters in a fixed direction."""

    direction: Vec3
    attenuation: Color

    def scatter(self, ray, normal, front_face):
        return Scattered(self.direction, self.attenuation)


@dataclass(frozen=True)
class InwardBounce:
    """Test material that always scatters back into the sphere."""

    def scatter(self, ray, normal, front_face):
        return Scattered(-normal, Color(0.9, 0.9, 0.9))


def assert_color_close(got, want, tol=1e-9):
    for a, b in zip(got, want):
        assert a == pytest.approx(b, abs=tol)


class TestSkyColor:
    """Tests for the background gradient."""

    def test_straight_up_is_sky_blue(self):
        """Test a ray straight up sees the full sky blue."""
        assert_color_close(sky_color(Vec3(0.0, 1.0, 0.0)), Color(0.5, 0.7, 1.0))

    def test_straight_down_is_white(self):
        """Test a ray straight down sees white."""
        assert_color_close(sky_color(Vec3(0.0, -1.0, 0.0)), Color(1.0, 1.0, 1.0))

    def test_horizon_is_halfway(self):
        """Test the horizon is the midpoint of the gradient."""
        assert_color_close(sky_color(Vec3(3.0, 0.0, 0.0)), Color(0.75, 0.85, 1.0))


class TestShade:
    """Tests for shade()."""

    def test_zero_depth_is_black(self, small_world):
        """Test max_depth 0 yields black before any intersection."""
        ray = Ray(ORIGIN, Vec3(0.0, 1.0, 0.0))
        assert shade(ray, small_world, 0) == Color.BLACK

    def test_miss_returns_sky(self):
        """Test an empty world shows the sky."""
        ray = Ray(ORIGIN, Vec3(0.0, 1.0, 0.0))
        assert_color_close(shade(ray, World(), 5), Color(0.5, 0.7, 1.0))

    def test_absorbed_returns_its_color(self):
        """Test an Absorbed outcome ends the path with its color."""
        color = Color(0.2, 0.3, 0.4)
        world = World([Sphere(Vec3(0.0, 0.0, -2.0), 0.5, FixedAbsorb(color))])
        ray = Ray(ORIGIN, Vec3(0.0, 0.0, -1.0))
        assert shade(ray, world, 5) == color

    def test_attenuation_then_sky(self):
        """Test one bounce multiplies the sky by the attenuation."""
        material = FixedBounce(Vec3(0.0, 1.0, 0.0), Color(0.5, 0.5, 0.5))
        world = World([Sphere(Vec3(0.0, -100.0, 0.0), 100.0, material)])
        ray = Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0))
        assert_color_close(shade(ray, world, 5), Color(0.25, 0.35, 0.5))

    def test_one_bounce_with_depth_one_is_black(self):
        """Test a path that needs a second segment runs out at depth 1."""
        material = FixedBounce(Vec3(0.0, 1.0, 0.0), Color(0.5, 0.5, 0.5))
        world = World([Sphere(Vec3(0.0, -100.0, 0.0), 100.0, material)])
        ray = Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0))
        assert shade(ray, world, 1) == Color.BLACK

    def test_trapped_path_exhausts_depth(self):
        """Test a ray bouncing forever inside a sphere returns black."""
        world = World([Sphere(ORIGIN, 10.0, InwardBounce())])
        ray = Ray(ORIGIN, Vec3(0.0, 0.0, -1.0))
        assert shade(ray, world, 20) == Color.BLACK

    def test_radiance_is_bounded_by_sky(self, small_world):
        """Test real materials never add energy."""
        for _ in range(200):
            ray = Ray(ORIGIN, Vec3(0.0, -0.2, -1.0))
            color = shade(ray, small_world, 10)
            assert all(0.0 <= c <= 1.0 for c in color)


class TestPixelShader:
    """Tests for make_pixel_shader()."""

    def test_averages_batch(self):
        """Test the shader averages the radiance of every ray in the batch."""
        shade_pixel = make_pixel_shader(World(), max_depth=5)
        rays = [Ray(ORIGIN, Vec3(0.0, 1.0, 0.0)), Ray(ORIGIN, Vec3(0.0, -1.0, 0.0))]
        assert_color_close(shade_pixel(rays), Color(0.75, 0.85, 1.0))

    def test_single_ray(self):
        """Test a batch of one ray is that ray's radiance."""
        shade_pixel = make_pixel_shader(World(), max_depth=5)
        ray = Ray(ORIGIN, Vec3(1.0, 0.0, 0.0))
        assert_color_close(shade_pixel([ray]), sky_color(ray.direction))
