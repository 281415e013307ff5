"""Pixel buffer → raster image conversion and still-image export.

Palette (RGBA, uint8):
    Black   (0, 0, 0, 255)        White   (255, 255, 255, 255)
    Red     (255, 0, 0, 255)      Green   (0, 255, 0, 255)
    Blue    (0, 0, 255, 255)      Yellow  (255, 255, 0, 255)
    Cyan    (0, 255, 255, 255)    Magenta (255, 0, 255, 255)

JPEG has no alpha channel, so ``.jpg``/``.jpeg`` outputs are written as RGB;
every other still format is written as RGBA.

Usage:
    from cfrs.export import image
    rgba = image.buffer_to_rgba(buffer)       # (H, W, 4) uint8
    image.save_image(buffer, "out/drawing.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from cfrs.canvas.buffer import PixelBuffer
from cfrs.canvas.enums import Color
from cfrs.utils import fs

logger = logging.getLogger(__name__)

PALETTE_RGBA: dict[Color, tuple[int, int, int, int]] = {
    Color.BLACK: (0, 0, 0, 255),
    Color.WHITE: (255, 255, 255, 255),
    Color.RED: (255, 0, 0, 255),
    Color.GREEN: (0, 255, 0, 255),
    Color.BLUE: (0, 0, 255, 255),
    Color.YELLOW: (255, 255, 0, 255),
    Color.CYAN: (0, 255, 255, 255),
    Color.MAGENTA: (255, 0, 255, 255),
}

# Row i holds the RGBA of the colour with ordinal i
_LUT = np.array([PALETTE_RGBA[c] for c in Color], dtype=np.uint8)

RGB_ONLY_SUFFIXES = frozenset({".jpg", ".jpeg"})


def color_to_rgb(color: Color) -> tuple[int, int, int]:
    return PALETTE_RGBA[color][:3]


def buffer_to_rgba(buffer: PixelBuffer) -> np.ndarray:
    """Map every cell through the palette.

    Returns
    -------
    np.ndarray
        ``(height, width, 4)`` uint8 array.
    """
    return _LUT[buffer.indices]


def buffer_to_rgb(buffer: PixelBuffer) -> np.ndarray:
    """Like :func:`buffer_to_rgba` with the alpha channel dropped."""
    return np.ascontiguousarray(buffer_to_rgba(buffer)[..., :3])


def save_image(buffer: PixelBuffer, path: str | Path) -> Path:
    """Write *buffer* as a still image; format follows the file extension.

    Raises
    ------
    RuntimeError
        If Pillow cannot encode the format or the write fails.
    """
    path = Path(path)
    if path.suffix.lower() in RGB_ONLY_SUFFIXES:
        pixels = buffer_to_rgb(buffer)
    else:
        pixels = buffer_to_rgba(buffer)

    fs.atomic_save_image(pixels, path)
    logger.info("Saved %dx%d image to %s", buffer.width, buffer.height, path)
    return path
