"""Example scenes.

This module provides factory functions for a few ready-made scenes. Each
factory returns the World together with a matching CameraConfig, so a scene
can be rendered with nothing more than:

    world, config = two_spheres()
    camera = Camera(config)

Available scenes:
- two_spheres: a diffuse ball resting on a huge ground sphere
- material_showcase: ground, a diffuse ball, a hollow glass ball and a
  brushed metal ball side by side
- random_spheres: a field of small random spheres around three large ones,
  seen through a lens with shallow depth of field

Example:
    >>> from pathtracer.scene.presets import get_preset
    >>> world, config = get_preset("showcase", image_width=200)
    >>> len(world)
    5
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from pathtracer.camera.thin_lens import CameraConfig
from pathtracer.core.vec3 import Color, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import GLASS_IOR
from pathtracer.materials.material import Material
from pathtracer.scene.world import World

Preset = Callable[..., tuple[World, CameraConfig]]

DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_IMAGE_WIDTH = 400

# Ground sphere shared by all scenes: large enough to look flat
GROUND_RADIUS = 100.0


# =============================================================================
# Scene Factories
# =============================================================================


def two_spheres(
    *,
    image_width: int = DEFAULT_IMAGE_WIDTH,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
) -> tuple[World, CameraConfig]:
    """Create the basic scene: one diffuse sphere on a diffuse ground.

    The camera sits at the origin looking down -z with a 90 degree vertical
    field of view and no defocus blur.

    Args:
        image_width: Output width in pixels.
        aspect_ratio: Output width / height.

    Returns:
        Tuple of (world, camera_config).
    """
    gray = Material.lambertian(Color(0.5, 0.5, 0.5))
    world = World([
        Sphere(Vec3(0.0, 0.0, -1.0), 0.5, gray),
        Sphere(Vec3(0.0, -100.5, -1.0), GROUND_RADIUS, gray),
    ])

    config = CameraConfig(
        aspect_ratio=aspect_ratio,
        image_width=image_width,
        vfov=90.0,
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        focus_dist=1.0,
    )
    return world, config


def material_showcase(
    *,
    image_width: int = DEFAULT_IMAGE_WIDTH,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
) -> tuple[World, CameraConfig]:
    """Create a row of three spheres, one per material kind.

    Left to right: a hollow glass sphere (an air bubble of index 1/1.5
    inside glass of index 1.5), a diffuse blue sphere and a brushed gold
    metal sphere. The camera looks down from above with a wide aperture
    focused on the middle sphere.

    Args:
        image_width: Output width in pixels.
        aspect_ratio: Output width / height.

    Returns:
        Tuple of (world, camera_config).
    """
    ground = Material.lambertian(Color(0.8, 0.8, 0.0))
    center = Material.lambertian(Color(0.1, 0.2, 0.5))
    glass = Material.dielectric(GLASS_IOR)
    bubble = Material.dielectric(1.0 / GLASS_IOR)
    gold = Material.metal(Color(0.8, 0.6, 0.2), fuzz=0.3)

    world = World([
        Sphere(Vec3(0.0, -100.5, -1.0), GROUND_RADIUS, ground),
        Sphere(Vec3(0.0, 0.0, -1.2), 0.5, center),
        Sphere(Vec3(-1.0, 0.0, -1.0), 0.5, glass),
        Sphere(Vec3(-1.0, 0.0, -1.0), 0.4, bubble),
        Sphere(Vec3(1.0, 0.0, -1.0), 0.5, gold),
    ])

    config = CameraConfig(
        aspect_ratio=aspect_ratio,
        image_width=image_width,
        vfov=20.0,
        lookfrom=(-2.0, 2.0, 1.0),
        lookat=(0.0, 0.0, -1.0),
        defocus_angle=10.0,
        focus_dist=3.4,
    )
    return world, config


def random_spheres(
    seed: int | None = None,
    *,
    image_width: int = DEFAULT_IMAGE_WIDTH,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
) -> tuple[World, CameraConfig]:
    """Create a field of small random spheres around three large ones.

    Small spheres are placed on a jittered 22 x 22 grid. Each picks a
    material at random: 80% diffuse, 15% metal and 5% glass. Spheres that
    would overlap the large metal sphere are skipped.

    Args:
        seed: Seed for the scene layout. The same seed always builds the
            same scene. None draws a fresh layout.
        image_width: Output width in pixels.
        aspect_ratio: Output width / height.

    Returns:
        Tuple of (world, camera_config).
    """
    rng = np.random.default_rng(seed)

    spheres = [
        Sphere(Vec3(0.0, -1000.0, 0.0), 1000.0, Material.lambertian(Color(0.5, 0.5, 0.5))),
    ]

    keep_clear_of = Vec3(4.0, 0.2, 0.0)
    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vec3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - keep_clear_of).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = rng.random(3) * rng.random(3)
                material = Material.lambertian(Color(*albedo.tolist()))
            elif choose_mat < 0.95:
                albedo = rng.uniform(0.5, 1.0, 3)
                material = Material.metal(Color(*albedo.tolist()), fuzz=rng.uniform(0.0, 0.5))
            else:
                material = Material.dielectric(GLASS_IOR)

            spheres.append(Sphere(center, 0.2, material))

    spheres.append(Sphere(Vec3(0.0, 1.0, 0.0), 1.0, Material.dielectric(GLASS_IOR)))
    spheres.append(Sphere(Vec3(-4.0, 1.0, 0.0), 1.0, Material.lambertian(Color(0.4, 0.2, 0.1))))
    spheres.append(Sphere(Vec3(4.0, 1.0, 0.0), 1.0, Material.metal(Color(0.7, 0.6, 0.5), fuzz=0.0)))

    config = CameraConfig(
        aspect_ratio=aspect_ratio,
        image_width=image_width,
        vfov=20.0,
        lookfrom=(13.0, 2.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return World(spheres), config


# =============================================================================
# Registry
# =============================================================================

PRESETS: dict[str, Preset] = {
    "two-spheres": two_spheres,
    "showcase": material_showcase,
    "random": random_spheres,
}


def get_preset(
    name: str,
    *,
    image_width: int = DEFAULT_IMAGE_WIDTH,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    seed: int | None = None,
) -> tuple[World, CameraConfig]:
    """Build a preset scene by name.

    Args:
        name: One of the keys of PRESETS.
        image_width: Output width in pixels.
        aspect_ratio: Output width / height.
        seed: Layout seed, used only by scenes with a random layout.

    Returns:
        Tuple of (world, camera_config).

    Raises:
        ValueError: If the name is not a known preset.
    """
    if name not in PRESETS:
        raise ValueError(
            f"Unknown scene '{name}'. Choose one of: {', '.join(PRESETS)}"
        )

    if name == "random":
        return random_spheres(seed, image_width=image_width, aspect_ratio=aspect_ratio)
    return PRESETS[name](image_width=image_width, aspect_ratio=aspect_ratio)
