"""Path tracing integrator for Monte Carlo light transport.

This module implements the radiance estimate for a single ray and the
per-pixel shading callback handed to the renderer.

A path is traced as a bounded loop rather than by recursion. The loop
carries the product of every attenuation met so far:

    1. Find the closest hit in the world.
    2. No hit: the ray escapes and picks up the sky gradient.
    3. Hit: ask the material to scatter. Absorbed ends the path with a
       solid color; Scattered multiplies the attenuation and continues.
    4. Out of bounces: the remaining energy is lost and the path is black.

Example:
    >>> from pathtracer.core.integrator import make_pixel_shader
    >>> from pathtracer.scene.presets import two_spheres
    >>> world, camera_config = two_spheres()
    >>> shade_pixel = make_pixel_shader(world, max_depth=10)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, Vec3, average
from pathtracer.materials.scatter import Absorbed
from pathtracer.scene.world import T_MAX, T_MIN, World

# Type alias for the per-pixel shading callback:
# a batch of rays through one pixel in, one averaged color out
PixelShader = Callable[[Sequence[Ray]], Color]

# =============================================================================
# Rendering Constants
# =============================================================================

# Default maximum ray bounces (path length)
MAX_DEPTH = 10


def sky_color(direction: Vec3) -> Color:
    """Background radiance for a ray that escapes the scene.

    A vertical gradient from white at the horizon (and below) to sky blue
    straight up.

    Args:
        direction: Direction of the escaping ray (any nonzero length).

    Returns:
        The sky color seen along that direction.
    """
    a = 0.5 * (direction.unit().y + 1.0)
    return Color.WHITE.lerp(Color.SKY_BLUE, a)


def shade(ray: Ray, world: World, max_depth: int) -> Color:
    """Trace a single path through the world and estimate its radiance.

    Args:
        ray: The primary ray.
        world: The scene to trace against.
        max_depth: Maximum number of bounces. 0 yields black immediately.

    Returns:
        The estimated radiance (linear RGB, unclamped) for this path.
    """
    attenuation = Color.WHITE

    for _ in range(max_depth):
        record = world.hit(ray, T_MIN, T_MAX)
        if record is None:
            return attenuation.blend(sky_color(ray.direction))

        result = record.material.scatter(ray, record.normal, record.front_face)
        if isinstance(result, Absorbed):
            return attenuation.blend(result.color)

        attenuation = attenuation.blend(result.attenuation)
        ray = Ray(record.point, result.direction)

    return Color.BLACK


def make_pixel_shader(world: World, max_depth: int = MAX_DEPTH) -> PixelShader:
    """Build the shading callback used by the renderer.

    The returned function only reads world and max_depth, so it can be
    shared between worker threads.

    Args:
        world: The scene to trace against.
        max_depth: Maximum number of bounces per path.

    Returns:
        A function mapping a non-empty batch of rays through one pixel to
        the average of their radiance estimates.
    """

    def shade_pixel(rays: Sequence[Ray]) -> Color:
        return average([shade(ray, world, max_depth) for ray in rays])

    return shade_pixel
