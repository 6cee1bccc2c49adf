"""Thread-local random number generation and Monte Carlo sampling.

Every thread owns an independent numpy Generator. Render workers seed
theirs from a SeedSequence child, so a fixed seed and a fixed worker count
reproduce the same image, and no RNG state is ever shared across threads.

Example:
    >>> from pathtracer.core.sampling import random_unit_vector, seed_rng
    >>> _ = seed_rng(42)
    >>> v = random_unit_vector()
    >>> abs(v.length() - 1.0) < 1e-9
    True
"""

from __future__ import annotations

import threading

import numpy as np

from pathtracer.core.vec3 import Vec3

_local = threading.local()


def seed_rng(seed: int | np.random.SeedSequence | None = None) -> np.random.Generator:
    """Replace the calling thread's generator with a freshly seeded one.

    Args:
        seed: An int, a SeedSequence (e.g. a child spawned for a worker),
            or None for OS entropy.

    Returns:
        The new generator.
    """
    rng = np.random.default_rng(seed)
    _local.rng = rng
    return rng


def get_rng() -> np.random.Generator:
    """Get the calling thread's generator, creating an unseeded one on first use."""
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = seed_rng(None)
    return rng


def random_double() -> float:
    """Uniform float in [0, 1)."""
    return get_rng().random()


def random_in_unit_sphere() -> Vec3:
    """Generate a random point inside the unit sphere.

    Uses rejection sampling on the enclosing cube.

    Returns:
        A random point with length < 1.
    """
    rng = get_rng()
    while True:
        x, y, z = rng.uniform(-1.0, 1.0, 3).tolist()
        length_squared = x * x + y * y + z * z
        # Tiny vectors are rejected too so normalizing them stays safe
        if 1e-160 < length_squared < 1.0:
            return Vec3(x, y, z)


def random_unit_vector() -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    return random_in_unit_sphere().unit()


def random_in_unit_disk() -> tuple[float, float]:
    """Generate a random point inside the unit disk.

    Rejection sampling: draw x and y uniformly in [-1, 1) and reject the
    point if x^2 + y^2 >= 1.

    Returns:
        The (x, y) coordinates of the point.
    """
    rng = get_rng()
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2).tolist()
        if x * x + y * y < 1.0:
            return x, y


def random_jitter() -> tuple[float, float]:
    """Independent sub-pixel offsets, each uniform in [-0.5, 0.5)."""
    dx, dy = get_rng().random(2).tolist()
    return dx - 0.5, dy - 0.5
