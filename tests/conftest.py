"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules, including
seeding the thread-local random generator so sampling is reproducible.
"""

import pytest

from pathtracer.core.sampling import seed_rng
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import Material
from pathtracer.scene.world import World


@pytest.fixture(autouse=True)
def seeded_rng():
    """Seed the calling thread's generator before each test.

    Render workers seed their own generators, so this only affects sampling
    done directly on the test thread.
    """
    seed_rng(42)
    yield


@pytest.fixture
def gray():
    """A mid-gray diffuse material."""
    return Material.lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def small_world(gray):
    """A small sphere resting on a large ground sphere."""
    return World([
        Sphere(Vec3(0.0, 0.0, -1.0), 0.5, gray),
        Sphere(Vec3(0.0, -100.5, -1.0), 100.0, gray),
    ])
