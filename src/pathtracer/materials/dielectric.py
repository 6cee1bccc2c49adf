"""Dielectric (glass/water) material implementation.

This module implements the dielectric BSDF, which models transparent
materials like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when (n1 / n2) * sin(theta1) > 1

Below the critical angle the material randomly chooses between reflection
and refraction, reflecting with probability equal to the Schlick
reflectance. Dielectrics never tint light: attenuation is always white.

Example:
    >>> from pathtracer.core.vec3 import Vec3
    >>> from pathtracer.materials.dielectric import scatter_dielectric
    >>> result = scatter_dielectric(1.5, Vec3(0.0, -1.0, 0.0), Vec3(0.0, 1.0, 0.0), True)
    >>> result.attenuation  # glass is perfectly clear
    Color(1.0, 1.0, 1.0)
"""

from __future__ import annotations

import math

from pathtracer.core.ray import reflect, refract, schlick_fresnel
from pathtracer.core.sampling import random_double
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.materials.scatter import Scattered

# Common indices of refraction
AIR_IOR = 1.0
WATER_IOR = 1.33
GLASS_IOR = 1.5
DIAMOND_IOR = 2.4


def media_indices(refraction_index: float, front_face: bool) -> tuple[float, float]:
    """Indices (eta, eta') of the media the ray leaves and enters.

    Hitting the front face means entering the material from air;
    hitting the back face means leaving it.
    """
    if front_face:
        return AIR_IOR, refraction_index
    return refraction_index, AIR_IOR


def cannot_refract(
    refraction_index: float,
    incident_direction: Vec3,
    normal: Vec3,
    front_face: bool,
) -> bool:
    """Determine if total internal reflection will occur.

    Args:
        refraction_index: Index of refraction of the material.
        incident_direction: The incoming ray direction.
        normal: The unit surface normal.
        front_face: True if the ray hits the outside of the surface.

    Returns:
        True if (eta / eta') * sin(theta) > 1.
    """
    eta, eta_prime = media_indices(refraction_index, front_face)
    cos_theta = _cos_incidence(incident_direction.unit(), normal)
    sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)
    return eta / eta_prime * sin_theta > 1.0


def fresnel_reflectance(
    refraction_index: float,
    incident_direction: Vec3,
    normal: Vec3,
    front_face: bool,
) -> float:
    """Schlick reflectance for a ray striking the material."""
    eta, eta_prime = media_indices(refraction_index, front_face)
    cos_theta = _cos_incidence(incident_direction.unit(), normal)
    return schlick_fresnel(cos_theta, eta, eta_prime)


def scatter_dielectric(
    refraction_index: float,
    incident_direction: Vec3,
    normal: Vec3,
    front_face: bool,
) -> Scattered:
    """Compute the scattered ray for a dielectric surface.

    Args:
        refraction_index: Index of refraction of the material.
        incident_direction: The incoming ray direction (any length).
        normal: The unit outward surface normal.
        front_face: True if the ray hits the outside of the surface.

    Returns:
        A Scattered outcome with the reflected or refracted direction and
        white attenuation. Dielectrics never absorb here.
    """
    eta, eta_prime = media_indices(refraction_index, front_face)

    unit_direction = incident_direction.unit()
    cos_theta = _cos_incidence(unit_direction, normal)
    sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

    if eta / eta_prime * sin_theta > 1.0:
        direction = reflect(unit_direction, normal)
    elif random_double() < schlick_fresnel(cos_theta, eta, eta_prime):
        direction = reflect(unit_direction, normal)
    else:
        direction = refract(unit_direction, normal, eta, eta_prime)

    return Scattered(direction=direction, attenuation=Color.WHITE)


def _cos_incidence(unit_direction: Vec3, normal: Vec3) -> float:
    return min(max((-unit_direction).dot(normal), -1.0), 1.0)
