"""Metal (specular reflective) material implementation.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal. Roughness is
not part of the reflection itself; it is applied afterwards by the shared
fuzz step in pathtracer.materials.material.
"""

from __future__ import annotations

from pathtracer.core.ray import reflect
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.materials.scatter import Scattered

# Reflected vectors shorter than this are replaced by the normal
DEGENERATE_LENGTH = 1e-8


def scatter_metal(albedo: Color, incident_direction: Vec3, normal: Vec3) -> Scattered:
    """Reflect the incident ray about the surface normal.

    Args:
        albedo: The reflective color (tints the reflected light).
        incident_direction: The incoming ray direction.
        normal: The unit surface normal.

    Returns:
        A Scattered outcome with the mirror direction and the albedo as
        attenuation. A numerically zero reflection falls back to the normal
        so the outgoing ray is never zero length.
    """
    direction = reflect(incident_direction, normal)
    if direction.length() < DEGENERATE_LENGTH:
        direction = normal

    return Scattered(direction=direction, attenuation=albedo)
