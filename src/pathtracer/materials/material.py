"""Material variant and scattering dispatch.

A Material is plain value data: a MaterialType tag, a base color, an
optional fuzz factor, and (for dielectrics) an index of refraction. A single
scatter() call dispatches on the tag to the per-kind scattering function and
then applies the shared fuzz step.

Fuzz perturbs the scattered direction by fuzz * random_unit_vector(). When
the perturbed direction points into the surface, the ray is treated as
immediately re-entering it and the outcome becomes Absorbed with the
material's base color.

Example:
    >>> from pathtracer.core.vec3 import Color
    >>> from pathtracer.materials.material import Material
    >>> ground = Material.lambertian(Color(0.8, 0.8, 0.0))
    >>> mirror = Material.metal(Color(0.8, 0.6, 0.2), fuzz=0.3)
    >>> glass = Material.dielectric(1.5)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from pathtracer.core.ray import Ray
from pathtracer.core.sampling import random_unit_vector
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.materials.dielectric import scatter_dielectric
from pathtracer.materials.lambertian import scatter_lambertian
from pathtracer.materials.metal import scatter_metal
from pathtracer.materials.scatter import Absorbed, Scatter, Scattered


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used by Material.scatter() to select the scattering model.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


@dataclass(frozen=True)
class Material:
    """Surface scattering properties.

    Prefer the lambertian(), metal() and dielectric() constructors, which
    validate their arguments.

    Attributes:
        kind: Which scattering model to use.
        color: Base (albedo) color. Always white for dielectrics.
        fuzz: Optional perturbation strength in [0, 1]. None disables the
            fuzz step entirely.
        refraction_index: Index of refraction (dielectrics only).
    """

    kind: MaterialType
    color: Color = Color.WHITE
    fuzz: float | None = None
    refraction_index: float = 1.0

    @classmethod
    def lambertian(cls, color: Color, fuzz: float | None = None) -> Material:
        """Create a diffuse material.

        Raises:
            ValueError: If a color channel is outside [0, 1] or fuzz is
                outside [0, 1].
        """
        _validate_albedo(color)
        _validate_fuzz(fuzz)
        return cls(kind=MaterialType.LAMBERTIAN, color=color, fuzz=fuzz)

    @classmethod
    def metal(cls, color: Color, fuzz: float | None = None) -> Material:
        """Create a reflective material.

        Raises:
            ValueError: If a color channel is outside [0, 1] or fuzz is
                outside [0, 1].
        """
        _validate_albedo(color)
        _validate_fuzz(fuzz)
        return cls(kind=MaterialType.METAL, color=color, fuzz=fuzz)

    @classmethod
    def dielectric(cls, refraction_index: float, fuzz: float | None = None) -> Material:
        """Create a clear refractive material.

        Args:
            refraction_index: Index of refraction. Common values are 1.33
                (water), 1.5 (glass) and 2.4 (diamond). Values below 1.0 are
                accepted to model a bubble of air inside a denser medium.
            fuzz: Optional perturbation strength in [0, 1].

        Raises:
            ValueError: If the index is not positive or fuzz is outside [0, 1].
        """
        if not refraction_index > 0.0:
            raise ValueError(
                f"Index of refraction = {refraction_index} must be positive."
            )
        _validate_fuzz(fuzz)
        return cls(
            kind=MaterialType.DIELECTRIC,
            color=Color.WHITE,
            fuzz=fuzz,
            refraction_index=refraction_index,
        )

    def scatter(self, ray: Ray, normal: Vec3, front_face: bool) -> Scatter:
        """Decide what happens to a ray striking this material.

        Args:
            ray: The incoming ray.
            normal: The unit outward surface normal at the hit point.
            front_face: True if the ray hit the outside of the surface.

        Returns:
            Absorbed (the ray stops, returning a solid color) or Scattered
            (the ray continues with a new direction and attenuation).
        """
        if self.kind == MaterialType.LAMBERTIAN:
            result = scatter_lambertian(self.color, normal)
        elif self.kind == MaterialType.METAL:
            result = scatter_metal(self.color, ray.direction, normal)
        elif self.kind == MaterialType.DIELECTRIC:
            result = scatter_dielectric(
                self.refraction_index, ray.direction, normal, front_face
            )
        else:
            raise ValueError(f"Unknown material type: {self.kind!r}")

        if self.fuzz is None:
            return result
        return self._apply_fuzz(result, normal)

    def _apply_fuzz(self, result: Scattered, normal: Vec3) -> Scatter:
        direction = result.direction.unit() + self.fuzz * random_unit_vector()
        if direction.dot(normal) < 0.0:
            return Absorbed(color=self.color)
        return Scattered(direction=direction, attenuation=result.attenuation)


def _validate_albedo(color: Color) -> None:
    for i, component in enumerate(color):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )


def _validate_fuzz(fuzz: float | None) -> None:
    if fuzz is not None and (fuzz < 0.0 or fuzz > 1.0):
        raise ValueError(
            f"Fuzz = {fuzz} is outside [0, 1]. "
            "Fuzz must be between 0 (no perturbation) and 1 (maximum fuzz)."
        )
