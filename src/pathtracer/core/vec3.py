"""Vector and color value types for CPU path tracing.

This module provides the two value types every other part of the renderer
is built from:

- Vec3: an immutable 3-component float vector with the usual algebra
- Color: linear RGB radiance wrapping a Vec3, with gamma-2 byte encoding

Both types are plain Python objects so they can be shared freely between
worker threads. Radiance is accumulated unclamped in [0, inf) and only
clamped when converted to bytes for output.

Example:
    >>> from pathtracer.core.vec3 import Color, Vec3
    >>> v = Vec3(1.0, 2.0, 2.0)
    >>> v.length()
    3.0
    >>> Color(0.25, 1.0, 0.0).to_bytes()
    (127, 255, 0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import ClassVar

# Squared-length threshold below which a vector is treated as degenerate
NEAR_ZERO_EPSILON = 1e-8


class Vec3:
    """A 3D vector of floats, treated as an immutable value.

    Supports addition, subtraction, negation, multiplication by a scalar
    (either side), component-wise multiplication by another Vec3, and
    division by a scalar.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = x
        self.y = y
        self.z = z

    @classmethod
    def from_tuple(cls, values: tuple[float, float, float] | list[float]) -> Vec3:
        """Build a vector from any 3-element sequence."""
        x, y, z = values
        return cls(float(x), float(y), float(z))

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: float | Vec3) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, t: float) -> Vec3:
        return Vec3(self.x / t, self.y / t, self.z / t)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        return f"Vec3({self.x}, {self.y}, {self.z})"

    def dot(self, other: Vec3) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Compute the cross product self x other."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Compute the squared length.

        Cheaper than length() when only comparing magnitudes.
        """
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Compute the Euclidean length."""
        return math.sqrt(self.length_squared())

    def unit(self) -> Vec3:
        """Return the vector scaled to unit length.

        Raises:
            ZeroDivisionError: If the vector has zero length. Callers must
                not normalize zero vectors.
        """
        return self / self.length()

    def near_zero(self) -> bool:
        """Check whether every component is close to zero."""
        s = NEAR_ZERO_EPSILON
        return abs(self.x) < s and abs(self.y) < s and abs(self.z) < s

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class Color:
    """Linear RGB radiance.

    Channels are unbounded during accumulation. They are clamped to [0, 1]
    and gamma encoded (gamma = 2, i.e. a square root) only by to_bytes().

    Attributes:
        rgb: The underlying channel vector (x=red, y=green, z=blue).
    """

    __slots__ = ("rgb",)

    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    SKY_BLUE: ClassVar[Color]

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0) -> None:
        self.rgb = Vec3(r, g, b)

    @classmethod
    def from_vec3(cls, v: Vec3) -> Color:
        return cls(v.x, v.y, v.z)

    @property
    def r(self) -> float:
        return self.rgb.x

    @property
    def g(self) -> float:
        return self.rgb.y

    @property
    def b(self) -> float:
        return self.rgb.z

    def __add__(self, other: Color) -> Color:
        return Color.from_vec3(self.rgb + other.rgb)

    def __mul__(self, scale: float) -> Color:
        return Color.from_vec3(self.rgb * scale)

    def __rmul__(self, scale: float) -> Color:
        return Color.from_vec3(self.rgb * scale)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.rgb == other.rgb

    def __hash__(self) -> int:
        return hash(self.rgb)

    def __iter__(self) -> Iterator[float]:
        return iter(self.rgb)

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"

    def __str__(self) -> str:
        r, g, b = self.to_bytes()
        return f"{r} {g} {b}"

    def blend(self, other: Color) -> Color:
        """Multiply channel by channel.

        This is how attenuation is applied: each bounce filters the
        incoming light by the surface color.
        """
        return Color.from_vec3(self.rgb * other.rgb)

    def lerp(self, other: Color, a: float) -> Color:
        """Linearly interpolate from self (a=0) to other (a=1)."""
        return Color.from_vec3((1.0 - a) * self.rgb + a * other.rgb)

    def to_bytes(self) -> tuple[int, int, int]:
        """Encode as gamma-2 display bytes.

        Each channel is clamped to [0, 1], square-rooted, scaled by 255.999
        and truncated, giving an int in [0, 255].

        Returns:
            The (red, green, blue) byte triple.
        """
        return (
            linear_to_byte(self.rgb.x),
            linear_to_byte(self.rgb.y),
            linear_to_byte(self.rgb.z),
        )


def linear_to_byte(c: float) -> int:
    """Convert one linear channel value to a gamma-2 encoded byte."""
    if not c > 0.0:
        return 0
    if c > 1.0:
        c = 1.0
    return int(255.999 * math.sqrt(c))


def average(colors: list[Color]) -> Color:
    """Average a non-empty batch of colors."""
    r = g = b = 0.0
    for c in colors:
        r += c.rgb.x
        g += c.rgb.y
        b += c.rgb.z
    scale = 1.0 / len(colors)
    return Color(r * scale, g * scale, b * scale)


Color.BLACK = Color(0.0, 0.0, 0.0)
Color.WHITE = Color(1.0, 1.0, 1.0)
Color.SKY_BLUE = Color(0.5, 0.7, 1.0)
