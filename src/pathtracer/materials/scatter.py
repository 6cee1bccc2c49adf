"""Scatter outcomes returned by the material models.

A ray striking a surface either terminates (Absorbed) or continues in a new
direction with its carried light filtered by an attenuation color
(Scattered). Scatter is the union of the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pathtracer.core.vec3 import Color, Vec3


@dataclass(frozen=True)
class Absorbed:
    """The ray terminates and the surface returns a solid color.

    Attributes:
        color: The color returned in place of any further bounce.
    """

    color: Color


@dataclass(frozen=True)
class Scattered:
    """The ray continues from the hit point.

    Attributes:
        direction: Direction of the outgoing ray (not necessarily unit length).
        attenuation: Color the carried light is multiplied by.
    """

    direction: Vec3
    attenuation: Color


Scatter = Union[Absorbed, Scattered]
