"""The painter: a single cursor with position, heading and colour.

All transitions are total.  ``move_forward_and_draw`` wraps toroidally on
each axis independently, so a painter that starts inside its buffer can
never leave it and no bounds check is needed on the draw path.
"""

from __future__ import annotations

from dataclasses import dataclass

from cfrs.canvas.buffer import PixelBuffer
from cfrs.canvas.enums import Color, Direction


def _wrap_step(coord: int, delta: int, size: int) -> int:
    """Advance *coord* by *delta* (-1, 0 or 1) on a ring of *size* cells."""
    if delta < 0 and coord == 0:
        return size - 1
    if delta > 0 and coord == size - 1:
        return 0
    return coord + delta


@dataclass
class Painter:
    """Mutable drawing cursor.

    Parameters
    ----------
    x, y : int
        Position in buffer pixels (top-left origin, +Y down).
    direction : Direction
        Current heading, default ``Direction.UP``.
    color : Color
        Current ink, default ``Color.WHITE``.
    """

    x: int = 0
    y: int = 0
    direction: Direction = Direction.UP
    color: Color = Color.WHITE

    @classmethod
    def centered_on(cls, buffer: PixelBuffer) -> Painter:
        """Painter at ``((width-1)//2, (height-1)//2)`` with default state."""
        return cls(x=(buffer.width - 1) // 2, y=(buffer.height - 1) // 2)

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def change_color(self) -> None:
        """Advance the colour one step along the fixed colour cycle."""
        self.color = self.color.succ()

    def rotate(self) -> None:
        """Turn 45° clockwise."""
        self.direction = self.direction.succ()

    def move_forward_and_draw(self, buffer: PixelBuffer) -> None:
        """Step one cell along the heading (wrapping), then paint it."""
        dx, dy = self.direction.delta
        self.x = _wrap_step(self.x, dx, buffer.width)
        self.y = _wrap_step(self.y, dy, buffer.height)
        buffer.set(self.x, self.y, self.color)
