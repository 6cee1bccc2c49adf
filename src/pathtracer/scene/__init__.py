"""Scene module.

Components:
    world: Ordered collection of spheres with closest-hit search
    presets: Ready-made example scenes
"""

from .presets import PRESETS, get_preset, material_showcase, random_spheres, two_spheres
from .world import T_MAX, T_MIN, World

__all__ = [
    "World",
    "T_MIN",
    "T_MAX",
    "PRESETS",
    "get_preset",
    "two_spheres",
    "material_showcase",
    "random_spheres",
]
