"""
Canvas module.

Pixel buffer, colour/direction vocabularies, and the painter that mutates
the buffer.  No knowledge of the command language lives here.
"""

from cfrs.canvas.buffer import PixelBuffer
from cfrs.canvas.enums import (
    Color,
    Direction,
    InvalidColorName,
    InvalidDirectionName,
)
from cfrs.canvas.painter import Painter

__all__ = [
    "Color",
    "Direction",
    "InvalidColorName",
    "InvalidDirectionName",
    "Painter",
    "PixelBuffer",
]
