"""Scene-level ray intersection over an ordered list of spheres.

The world is scanned linearly; there is no acceleration structure. Each
accepted hit lowers the upper bound for the remaining spheres, so the
record kept at the end of the scan is the closest one.

Example:
    >>> from pathtracer.core.vec3 import Color, Vec3
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials.material import Material
    >>> from pathtracer.scene.world import World
    >>> gray = Material.lambertian(Color(0.5, 0.5, 0.5))
    >>> world = World([
    ...     Sphere(Vec3(0.0, 0.0, -1.0), 0.5, gray),
    ...     Sphere(Vec3(0.0, -100.5, -1.0), 100.0, gray),
    ... ])
    >>> len(world)
    2
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from pathtracer.core.ray import Ray
from pathtracer.geometry.sphere import HitRecord, Sphere

# Minimum accepted t for intersections (avoids shadow acne on bounce rays)
T_MIN = 0.001
T_MAX = math.inf


class World:
    """An immutable, ordered collection of spheres.

    Shared read-only between render worker threads.
    """

    def __init__(self, spheres: Iterable[Sphere] = ()) -> None:
        self._spheres: tuple[Sphere, ...] = tuple(spheres)

    @property
    def spheres(self) -> tuple[Sphere, ...]:
        return self._spheres

    def __len__(self) -> int:
        return len(self._spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self._spheres)

    def __repr__(self) -> str:
        return f"World(spheres={len(self._spheres)})"

    def hit(self, ray: Ray, t_min: float = T_MIN, t_max: float = T_MAX) -> HitRecord | None:
        """Find the closest intersection of a ray with the world.

        Args:
            ray: The ray to trace.
            t_min: Lower bound (exclusive) for accepted hits.
            t_max: Initial upper bound (exclusive) for accepted hits.

        Returns:
            The HitRecord with the smallest t in (t_min, t_max), or None if
            no sphere is hit.
        """
        closest = None
        closest_so_far = t_max
        for sphere in self._spheres:
            record = sphere.hit(ray, t_min, closest_so_far)
            if record is not None:
                closest_so_far = record.t
                closest = record
        return closest
