"""Ray data structure and vector utilities for CPU path tracing.

This module provides the Ray value type and the optics helpers shared by the
material models: mirror reflection, Snell refraction, and Schlick's
approximation of Fresnel reflectance.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vec3 import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vec3(0.0, 0.0, -5.0)
"""

from __future__ import annotations

import math

from pathtracer.core.vec3 import Vec3


class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to
            be unit length.
    """

    __slots__ = ("origin", "direction")

    def __init__(self, origin: Vec3, direction: Vec3) -> None:
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Vec3:
        """Compute the point origin + t * direction."""
        return self.origin + t * self.direction

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"


# =============================================================================
# Optics Helpers
# =============================================================================


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Computes d - 2(d . n)n. The normal should be unit length for correct
    results; the incident vector may have any length.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * incident.dot(normal) * normal


def refract(unit_direction: Vec3, normal: Vec3, eta: float, eta_prime: float) -> Vec3:
    """Refract a unit direction through a surface using Snell's law.

    The normal may face either side of the surface. The parallel component
    of the refracted ray is always placed on the far side of the surface
    from the incoming ray.

    Args:
        unit_direction: The incoming direction (unit length).
        normal: The surface normal (unit length).
        eta: Refractive index of the medium the ray is leaving.
        eta_prime: Refractive index of the medium the ray is entering.

    Returns:
        The refracted direction. Callers must check for total internal
        reflection first; the result is meaningless in that case.
    """
    cos_theta = min(max((-unit_direction).dot(normal), -1.0), 1.0)
    r_out_perp = (eta / eta_prime) * (unit_direction + cos_theta * normal)
    parallel_len = math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    if cos_theta > 0.0:
        r_out_parallel = -parallel_len * normal
    else:
        r_out_parallel = parallel_len * normal
    return r_out_perp + r_out_parallel


def schlick_fresnel(cosine: float, eta: float, eta_prime: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    R(theta) = r0 + (1 - r0)(1 - cos(theta))^5 with
    r0 = ((eta - eta') / (eta + eta'))^2.

    An interface between two media of equal index does not reflect at all,
    so matched indices return exactly 0.

    Args:
        cosine: Cosine of the angle between the incident direction and the
            normal. Only its magnitude is used.
        eta: Refractive index of the medium the ray is leaving.
        eta_prime: Refractive index of the medium the ray is entering.

    Returns:
        The approximate reflectance coefficient in [0, 1].
    """
    if eta == eta_prime:
        return 0.0
    r0 = ((eta - eta_prime) / (eta + eta_prime)) ** 2
    return r0 + (1.0 - r0) * (1.0 - abs(cosine)) ** 5
