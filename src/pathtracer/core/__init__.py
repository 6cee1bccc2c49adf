"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec3: Vec3 and Color value types
    ray: Ray data structure, reflection, refraction and Fresnel
    sampling: Thread-local random number generation and sample warping
    integrator: Radiance estimate along a single path
    renderer: Multi-threaded render loop and progress reporting
"""

from .ray import Ray, reflect, refract, schlick_fresnel
from .sampling import (
    get_rng,
    random_double,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_jitter,
    random_unit_vector,
    seed_rng,
)
from .vec3 import Color, Vec3, average, linear_to_byte

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.integrator or pathtracer.core.renderer.

__all__ = [
    "Vec3",
    "Color",
    "average",
    "linear_to_byte",
    "Ray",
    "reflect",
    "refract",
    "schlick_fresnel",
    "seed_rng",
    "get_rng",
    "random_double",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
    "random_jitter",
]
