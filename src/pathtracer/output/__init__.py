"""Output module for writing rendered images.

Components:
    export: PPM text output, NumPy conversion and PNG export via Pillow
"""

from .export import (
    colors_to_array,
    image_to_uint8,
    output_format,
    save_image,
    save_png,
    save_ppm,
    write_ppm,
)

__all__ = [
    "write_ppm",
    "save_ppm",
    "colors_to_array",
    "image_to_uint8",
    "save_png",
    "save_image",
    "output_format",
]
