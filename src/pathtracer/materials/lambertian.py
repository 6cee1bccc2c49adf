"""Lambertian (ideal diffuse) material implementation.

The scattered direction is the surface normal plus a random unit vector,
which distributes outgoing rays with a cosine-weighted density over the
hemisphere around the normal. Attenuation is the albedo; diffuse surfaces
never absorb at this stage.

Example:
    >>> from pathtracer.core.vec3 import Color, Vec3
    >>> from pathtracer.materials.lambertian import scatter_lambertian
    >>> result = scatter_lambertian(Color(0.5, 0.5, 0.5), Vec3(0.0, 1.0, 0.0))
    >>> result.attenuation
    Color(0.5, 0.5, 0.5)
"""

from __future__ import annotations

from pathtracer.core.sampling import random_unit_vector
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.materials.scatter import Scattered


def scatter_lambertian(albedo: Color, normal: Vec3) -> Scattered:
    """Scatter a ray off a diffuse surface.

    Args:
        albedo: The diffuse reflectance color.
        normal: The unit surface normal at the hit point.

    Returns:
        A Scattered outcome with a cosine-weighted direction and the albedo
        as attenuation.
    """
    direction = normal + random_unit_vector()

    # A random vector almost exactly opposite the normal would cancel it
    if direction.near_zero():
        direction = normal

    return Scattered(direction=direction, attenuation=albedo)
