"""
Export module.

Palette mapping, still-image writing, and animation frame sampling.
"""

from cfrs.export.animation import FrameSampler, save_gif_animation
from cfrs.export.image import (
    PALETTE_RGBA,
    buffer_to_rgb,
    buffer_to_rgba,
    save_image,
)

__all__ = [
    "FrameSampler",
    "PALETTE_RGBA",
    "buffer_to_rgb",
    "buffer_to_rgba",
    "save_gif_animation",
    "save_image",
]
