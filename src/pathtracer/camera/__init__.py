"""Camera module for view and ray generation.

Components:
    thin_lens: Perspective camera with jittered sampling and defocus blur

Pixel coordinates:
    col in [0, image_width): left to right across the image
    row in [0, image_height): top to bottom across the image
"""

from .thin_lens import Camera, CameraConfig

__all__ = [
    "Camera",
    "CameraConfig",
]
