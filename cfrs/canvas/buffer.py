"""Fixed-size pixel grid of painter colours.

Cells are stored as a ``(height, width)`` ``uint8`` numpy array of colour
ordinals (see :attr:`Color.ordinal`) so exporters can map the whole grid
through a palette in one indexing operation.  The public API speaks
:class:`Color` only.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from cfrs.canvas.enums import Color


class PixelBuffer:
    """Row-major ``width × height`` grid of colours.

    Parameters
    ----------
    width, height : int
        Grid dimensions in pixels; both must be positive.
    fill : Color
        Initial colour of every cell, default black.

    Notes
    -----
    The grid is never resized.  ``len(buffer) == width * height`` always.
    """

    def __init__(self, width: int, height: int, fill: Color = Color.BLACK) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._cells = np.full((self.height, self.width), fill.ordinal, dtype=np.uint8)

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"

    def __len__(self) -> int:
        return self._cells.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside buffer {self.width}x{self.height}"
            )

    def get(self, x: int, y: int) -> Color:
        """Colour at ``(x, y)``; raises IndexError when out of bounds."""
        self._check_bounds(x, y)
        return Color.from_ordinal(int(self._cells[y, x]))

    def set(self, x: int, y: int, color: Color) -> None:
        """Paint ``(x, y)``; raises IndexError when out of bounds."""
        self._check_bounds(x, y)
        self._cells[y, x] = color.ordinal

    def fill(self, color: Color) -> None:
        """Set every cell to *color*."""
        self._cells.fill(color.ordinal)

    def cells(self) -> Iterator[Color]:
        """Iterate all cells row-major (index ``y * width + x``)."""
        for ordinal in self._cells.ravel():
            yield Color.from_ordinal(int(ordinal))

    @property
    def indices(self) -> np.ndarray:
        """Read-only ``(height, width)`` view of the colour ordinals."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def copy(self) -> PixelBuffer:
        """Independent snapshot of the canvas."""
        clone = PixelBuffer.__new__(PixelBuffer)
        clone.width = self.width
        clone.height = self.height
        clone._cells = self._cells.copy()
        return clone

    def tobytes(self) -> bytes:
        """Row-major ordinal bytes, one per cell."""
        return self._cells.tobytes()
