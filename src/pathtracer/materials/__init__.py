"""Materials module for light scattering models.

Components:
    scatter: Absorbed / Scattered outcomes of a surface interaction
    lambertian: Ideal diffuse reflection
    metal: Mirror reflection
    dielectric: Glass-like refraction with Schlick reflectance
    material: The Material variant dispatching to the models above

Each model returns either Absorbed (the path ends with a solid color) or
Scattered (the path continues in a new direction with an attenuation).
"""

from .dielectric import (
    AIR_IOR,
    DIAMOND_IOR,
    GLASS_IOR,
    WATER_IOR,
    cannot_refract,
    fresnel_reflectance,
    media_indices,
    scatter_dielectric,
)
from .lambertian import scatter_lambertian
from .material import Material, MaterialType
from .metal import scatter_metal
from .scatter import Absorbed, Scatter, Scattered

__all__ = [
    # Outcomes
    "Absorbed",
    "Scattered",
    "Scatter",
    # Variant
    "Material",
    "MaterialType",
    # Lambertian
    "scatter_lambertian",
    # Metal
    "scatter_metal",
    # Dielectric
    "scatter_dielectric",
    "fresnel_reflectance",
    "cannot_refract",
    "media_indices",
    "AIR_IOR",
    "WATER_IOR",
    "GLASS_IOR",
    "DIAMOND_IOR",
]
