"""Image export utilities for rendered images.

This module turns the renderer's row-major list of linear colors into files.
Every format uses the same encoding per channel:

    byte = int(255.999 * sqrt(clamp(c, 0, 1)))

i.e. gamma 2 followed by truncation. NaN channels encode as 0.

Supported formats:
    - PPM (plain-text P3), written to any text stream
    - PNG (8-bit RGB via Pillow)

Example:
    >>> import io
    >>> from pathtracer.core.vec3 import Color
    >>> from pathtracer.output.export import write_ppm
    >>> stream = io.StringIO()
    >>> write_ppm([Color(1.0, 1.0, 1.0), Color(0.0, 0.0, 0.0)], 2, 1, stream)
    >>> stream.getvalue()
    'P3\\n2 1\\n255\\n255 255 255\\n0 0 0\\n'
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.core.vec3 import Color

# Supported output file suffixes
SUPPORTED_FORMATS = (".ppm", ".png")


def _check_size(colors: Sequence[Color], width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError(f"Image size {width}x{height} must be at least 1x1")
    if len(colors) != width * height:
        raise ValueError(
            f"Got {len(colors)} colors for a {width}x{height} image "
            f"(expected {width * height})"
        )


# =============================================================================
# PPM
# =============================================================================


def write_ppm(colors: Sequence[Color], width: int, height: int, stream: TextIO) -> None:
    """Write an image as plain-text PPM (P3).

    The header is "P3", then "<width> <height>", then "255". Each pixel
    follows on its own "r g b" line, top row first.

    Args:
        colors: Linear colors in row-major order.
        width: Image width in pixels.
        height: Image height in pixels.
        stream: Text stream to write to.

    Raises:
        ValueError: If len(colors) != width * height.
    """
    _check_size(colors, width, height)

    stream.write(f"P3\n{width} {height}\n255\n")
    for color in colors:
        stream.write(f"{color}\n")


def save_ppm(filepath: str | Path, colors: Sequence[Color], width: int, height: int) -> None:
    """Save an image as a plain-text PPM file.

    Args:
        filepath: Output file path (should end in .ppm).
        colors: Linear colors in row-major order.
        width: Image width in pixels.
        height: Image height in pixels.
    """
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        write_ppm(colors, width, height, f)


# =============================================================================
# NumPy / PNG
# =============================================================================


def colors_to_array(
    colors: Sequence[Color], width: int, height: int
) -> npt.NDArray[np.float32]:
    """Convert row-major colors to a linear image array.

    Returns:
        Array of shape (height, width, 3), dtype float32.
    """
    _check_size(colors, width, height)

    flat = np.array([[c.r, c.g, c.b] for c in colors], dtype=np.float32)
    return flat.reshape(height, width, 3)


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Encode a linear image array to 8-bit.

    Applies the same gamma-2 encoding as the PPM writer.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        uint8 array of the same shape.

    Raises:
        ValueError: If the array is not (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    linear = np.nan_to_num(image.astype(np.float64), nan=0.0)
    encoded = np.sqrt(np.clip(linear, 0.0, 1.0))
    return (255.999 * encoded).astype(np.uint8)


def save_png(filepath: str | Path, image: npt.NDArray[np.floating]) -> None:
    """Save a linear image array as an 8-bit RGB PNG.

    Args:
        filepath: Output file path (should end in .png).
        image: Linear image array of shape (H, W, 3).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)


def output_format(filepath: str | Path) -> str:
    """Get the image format for a path from its suffix.

    Returns:
        The lower-cased suffix, e.g. ".png".

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported image format '{suffix}'. "
            f"Choose one of: {', '.join(SUPPORTED_FORMATS)}"
        )
    return suffix


def save_image(filepath: str | Path, colors: Sequence[Color], width: int, height: int) -> None:
    """Save an image, choosing the format from the file suffix.

    Args:
        filepath: Output file path ending in .ppm or .png.
        colors: Linear colors in row-major order.
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    if output_format(filepath) == ".ppm":
        save_ppm(filepath, colors, width, height)
    else:
        save_png(filepath, colors_to_array(colors, width, height))
