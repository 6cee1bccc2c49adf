"""Unit tests for scene-level intersection.

Tests cover:
- Closest hit selection regardless of sphere order
- Empty world
- t bounds passed through to the spheres
"""

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import Material
from pathtracer.scene.world import T_MIN, World


@pytest.fixture
def red():
    return Material.lambertian(Color(1.0, 0.0, 0.0))


@pytest.fixture
def blue():
    return Material.lambertian(Color(0.0, 0.0, 1.0))


class TestWorldHit:
    """Tests for World.hit()."""

    def test_empty_world_never_hits(self):
        """Test an empty world returns no hit."""
        world = World()
        assert len(world) == 0
        assert world.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))) is None

    @pytest.mark.parametrize("reverse", [False, True])
    def test_closest_hit_wins(self, red, blue, reverse):
        """Test the nearer of two spheres on the same line is reported."""
        spheres = [
            Sphere(Vec3(0.0, 0.0, -2.0), 0.5, red),
            Sphere(Vec3(0.0, 0.0, -5.0), 0.5, blue),
        ]
        if reverse:
            spheres.reverse()
        world = World(spheres)

        record = world.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)))
        assert record.t == pytest.approx(1.5)
        assert record.material is red

    def test_t_max_excludes_far_spheres(self, red):
        """Test hits beyond t_max are ignored."""
        world = World([Sphere(Vec3(0.0, 0.0, -10.0), 1.0, red)])
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        assert world.hit(ray, T_MIN, 5.0) is None
        assert world.hit(ray, T_MIN, 20.0) is not None

    def test_shadow_acne_bound(self, red):
        """Test a ray leaving a surface does not re-hit it at t near 0."""
        world = World([Sphere(Vec3(0.0, 0.0, 0.0), 1.0, red)])
        # Start exactly on the surface and head outward
        ray = Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, 1.0, 0.0))
        assert world.hit(ray) is None

    def test_spheres_are_immutable_tuple(self, red):
        """Test the world keeps its own copy of the sphere list."""
        spheres = [Sphere(Vec3(0.0, 0.0, -1.0), 0.5, red)]
        world = World(spheres)
        spheres.append(Sphere(Vec3(0.0, 0.0, -3.0), 0.5, red))
        assert len(world) == 1
        assert isinstance(world.spheres, tuple)
