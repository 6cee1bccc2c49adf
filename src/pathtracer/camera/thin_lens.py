"""Thin-lens camera model for perspective ray generation with depth of field.

The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- Jittered multi-sample anti-aliasing
- Defocus blur through a circular lens aperture (defocus_angle > 0)

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport sits on the focus plane, focus_dist in front of the eye. Pixel
(0, 0) is the upper-left corner of the image; rows grow downward.

Example:
    >>> from pathtracer.camera.thin_lens import Camera, CameraConfig
    >>> camera = Camera(CameraConfig(
    ...     aspect_ratio=16.0 / 9.0,
    ...     image_width=400,
    ...     vfov=90.0,
    ...     lookfrom=(0.0, 0.0, 0.0),
    ...     lookat=(0.0, 0.0, -1.0),
    ...     focus_dist=1.0,
    ... ))
    >>> camera.image_height
    225
    >>> ray = camera.get_ray(200, 112)  # Jittered ray near the image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.sampling import random_in_unit_disk, random_jitter
from pathtracer.core.vec3 import Vec3

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass
class CameraConfig:
    """Configuration for a thin-lens (perspective) camera.

    Attributes:
        aspect_ratio: Width divided by height of the output image.
        image_width: Image width in pixels.
        vfov: Vertical field of view in degrees.
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
            Must differ from lookfrom.
        vup: Up direction for camera orientation. Must not be parallel to
            the viewing direction.
        defocus_angle: Cone angle in degrees of rays through each pixel.
            0 gives a pinhole camera with everything in focus.
        focus_dist: Distance from lookfrom to the plane of perfect focus.
    """

    aspect_ratio: float
    image_width: int
    vfov: float
    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    defocus_angle: float = 0.0
    focus_dist: float = 10.0


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """Immutable per-render camera state derived from a CameraConfig.

    Shared read-only between render workers. All randomness comes from the
    calling thread's generator.

    Attributes:
        image_width: Image width in pixels.
        image_height: Image height in pixels.
        center: Eye position.
        pixel00: World-space center of the upper-left pixel.
        pixel_delta_u: Offset from one pixel to the next along a row.
        pixel_delta_v: Offset from one row to the next (points down).
        defocus_disk_u: Horizontal radius vector of the lens aperture.
        defocus_disk_v: Vertical radius vector of the lens aperture.
    """

    def __init__(self, config: CameraConfig) -> None:
        """Derive the viewport geometry from the configuration.

        A degenerate basis (lookfrom == lookat, or vup parallel to the view
        direction) is not rejected; it produces NaN vectors.
        """
        self.config = config
        self.image_width = config.image_width
        self.image_height = max(1, int(config.image_width / config.aspect_ratio))
        self.defocus_angle = config.defocus_angle

        theta = math.radians(config.vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h * config.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Build orthonormal basis using NumPy
        lookfrom = np.array(config.lookfrom, dtype=np.float64)
        lookat = np.array(config.lookat, dtype=np.float64)
        vup = np.array(config.vup, dtype=np.float64)

        with np.errstate(divide="ignore", invalid="ignore"):
            w = lookfrom - lookat
            w = w / np.linalg.norm(w)
            u = np.cross(vup, w)
            u = u / np.linalg.norm(u)
        v = np.cross(w, u)

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = viewport_width * u
        viewport_v = viewport_height * -v

        pixel_delta_u = viewport_u / self.image_width
        pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (
            lookfrom - config.focus_dist * w - viewport_u / 2.0 - viewport_v / 2.0
        )
        pixel00 = viewport_upper_left + 0.5 * (pixel_delta_u + pixel_delta_v)

        defocus_radius = config.focus_dist * math.tan(math.radians(config.defocus_angle / 2.0))

        self.center = Vec3.from_tuple(lookfrom.tolist())
        self.u = Vec3.from_tuple(u.tolist())
        self.v = Vec3.from_tuple(v.tolist())
        self.w = Vec3.from_tuple(w.tolist())
        self.pixel_delta_u = Vec3.from_tuple(pixel_delta_u.tolist())
        self.pixel_delta_v = Vec3.from_tuple(pixel_delta_v.tolist())
        self.pixel00 = Vec3.from_tuple(pixel00.tolist())
        self.defocus_disk_u = Vec3.from_tuple((defocus_radius * u).tolist())
        self.defocus_disk_v = Vec3.from_tuple((defocus_radius * v).tolist())

    @property
    def has_defocus(self) -> bool:
        return self.defocus_angle > 0.0

    def pixel_center(self, col: int, row: int) -> Vec3:
        """World-space center of pixel (col, row)."""
        return self.pixel00 + col * self.pixel_delta_u + row * self.pixel_delta_v

    def defocus_disk_sample(self) -> Vec3:
        """Return a uniformly random point on the lens aperture."""
        x, y = random_in_unit_disk()
        return self.center + x * self.defocus_disk_u + y * self.defocus_disk_v

    def get_ray(self, col: int, row: int) -> Ray:
        """Generate a jittered primary ray through pixel (col, row).

        The sample point is offset uniformly within the pixel footprint.
        With defocus enabled the ray starts at a random point on the lens.

        Args:
            col: Pixel column (0 = left).
            row: Pixel row (0 = top).

        Returns:
            A new Ray. Its direction is not normalized.
        """
        dx, dy = random_jitter()
        pixel_sample = (
            self.pixel00
            + (col + dx) * self.pixel_delta_u
            + (row + dy) * self.pixel_delta_v
        )

        origin = self.defocus_disk_sample() if self.has_defocus else self.center
        return Ray(origin, pixel_sample - origin)

    def get_rays(self, col: int, row: int, buffer: list[Ray]) -> list[Ray]:
        """Overwrite every slot of buffer with a fresh ray for pixel (col, row).

        Each slot gets an independent random draw, so all rays share the
        pixel's footprint but differ in jitter and lens position.

        Args:
            col: Pixel column (0 = left).
            row: Pixel row (0 = top).
            buffer: Caller-owned list, one slot per sample.

        Returns:
            The same buffer, for convenience.
        """
        for i in range(len(buffer)):
            buffer[i] = self.get_ray(col, row)
        return buffer

    def camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get the derived camera vectors for debugging.

        Returns:
            Dictionary with center, u, v, w, pixel00, pixel deltas and the
            defocus disk basis.
        """
        return {
            "center": self.center.to_tuple(),
            "u": self.u.to_tuple(),
            "v": self.v.to_tuple(),
            "w": self.w.to_tuple(),
            "pixel00": self.pixel00.to_tuple(),
            "pixel_delta_u": self.pixel_delta_u.to_tuple(),
            "pixel_delta_v": self.pixel_delta_v.to_tuple(),
            "defocus_disk_u": self.defocus_disk_u.to_tuple(),
            "defocus_disk_v": self.defocus_disk_v.to_tuple(),
        }

    def __repr__(self) -> str:
        return (
            f"Camera(width={self.image_width}, height={self.image_height}, "
            f"center={self.center!r}, defocus_angle={self.defocus_angle})"
        )
