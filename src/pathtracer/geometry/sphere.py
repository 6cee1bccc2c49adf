"""Sphere primitive with closed-form ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(direction, oc)  (half of traditional b)
    c = dot(oc, oc) - radius^2
    oc = origin - center

A negative radius is allowed: it flips the outward normal, which turns the
sphere into a hollow shell (useful as the inner surface of a glass bubble).

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vec3 import Color, Vec3
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials.material import Material
    >>> sphere = Sphere(Vec3(0.0, 0.0, -1.0), 0.5, Material.lambertian(Color(0.5, 0.5, 0.5)))
    >>> record = sphere.hit(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), 0.001, 100.0)
    >>> record.t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.materials.material import Material


@dataclass(frozen=True)
class HitRecord:
    """Record of a ray-sphere intersection.

    Built for one intersection test and consumed straight away by shading.

    Attributes:
        point: The 3D point where the ray intersected the sphere.
        normal: The outward surface normal at the point, unit length.
            Faces against the ray exactly when front_face is True.
        t: The ray parameter of the intersection.
        front_face: True when dot(ray.direction, normal) < 0, i.e. the ray
            struck the outward-facing side.
        material: The material of the struck sphere.
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    material: Material


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point, signed radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius. Negative values flip the outward normal.
            Zero is not supported.
        material: The surface material, held by value.
    """

    center: Vec3
    radius: float
    material: Material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for ray-sphere intersection.

        The near root is tried first; if it falls outside the open interval
        (t_min, t_max) the far root is tried.

        Args:
            ray: The ray to test. Its direction need not be normalized.
            t_min: Lower bound (exclusive) for an accepted t. A small
                positive value avoids self-intersection of bounce rays.
            t_max: Upper bound (exclusive) for an accepted t.

        Returns:
            A HitRecord for the accepted root, or None on a miss.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)

        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_d) / a
        if not t_min < root < t_max:
            root = (-half_b + sqrt_d) / a
            if not t_min < root < t_max:
                return None

        point = ray.at(root)
        normal = (point - self.center) / self.radius
        return HitRecord(
            point=point,
            normal=normal,
            t=root,
            front_face=ray.direction.dot(normal) < 0.0,
            material=self.material,
        )
