"""Test painter state transitions and toroidal wrap.

Tests for cfrs.canvas.painter:
    - change_color / rotate follow their cycles and touch nothing else
    - Movement in all 8 directions
    - Wrap on every edge, diagonals wrap both axes independently
    - Draw writes the current colour at the new position only

Run:
    pytest tests/test_painter.py -v
"""

import pytest

from cfrs.canvas.buffer import PixelBuffer
from cfrs.canvas.enums import Color, Direction
from cfrs.canvas.painter import Painter


@pytest.fixture()
def buffer() -> PixelBuffer:
    """5 wide, 4 high so the axes cannot be confused."""
    return PixelBuffer(5, 4)


# ============================================================================
# DEFAULTS & CENTERING
# ============================================================================

def test_defaults():
    p = Painter()
    assert p.direction is Direction.UP
    assert p.color is Color.WHITE


@pytest.mark.parametrize("width,height,expected", [
    (4, 4, (1, 1)),
    (5, 5, (2, 2)),
    (256, 256, (127, 127)),
    (5, 4, (2, 1)),
    (1, 1, (0, 0)),
])
def test_centered_on(width, height, expected):
    p = Painter.centered_on(PixelBuffer(width, height))
    assert p.position == expected


# ============================================================================
# COLOR / ROTATION
# ============================================================================

def test_change_color_cycle():
    p = Painter(x=2, y=1)
    order = []
    for _ in range(8):
        p.change_color()
        order.append(p.color)
    assert order == [
        Color.BLACK, Color.BLUE, Color.GREEN, Color.CYAN,
        Color.RED, Color.MAGENTA, Color.YELLOW, Color.WHITE,
    ]
    assert p.position == (2, 1)
    assert p.direction is Direction.UP


def test_rotate_cycle():
    p = Painter(x=2, y=1)
    order = []
    for _ in range(8):
        p.rotate()
        order.append(p.direction)
    assert order == [
        Direction.UP_RIGHT, Direction.RIGHT, Direction.DOWN_RIGHT, Direction.DOWN,
        Direction.DOWN_LEFT, Direction.LEFT, Direction.UP_LEFT, Direction.UP,
    ]
    assert p.position == (2, 1)
    assert p.color is Color.WHITE


# ============================================================================
# MOVEMENT
# ============================================================================

@pytest.mark.parametrize("direction,expected", [
    (Direction.UP, (2, 0)),
    (Direction.UP_RIGHT, (3, 0)),
    (Direction.RIGHT, (3, 1)),
    (Direction.DOWN_RIGHT, (3, 2)),
    (Direction.DOWN, (2, 2)),
    (Direction.DOWN_LEFT, (1, 2)),
    (Direction.LEFT, (1, 1)),
    (Direction.UP_LEFT, (1, 0)),
])
def test_move_interior(buffer, direction, expected):
    p = Painter(x=2, y=1, direction=direction)
    p.move_forward_and_draw(buffer)
    assert p.position == expected
    assert buffer.get(*expected) is Color.WHITE


def test_draw_touches_only_new_cell(buffer):
    p = Painter(x=2, y=1, color=Color.RED)
    p.move_forward_and_draw(buffer)
    painted = [c for c in buffer.cells() if c is not Color.BLACK]
    assert painted == [Color.RED]
    assert buffer.get(2, 1) is Color.BLACK


@pytest.mark.parametrize("start,direction,expected", [
    ((0, 2), Direction.LEFT, (4, 2)),
    ((4, 2), Direction.RIGHT, (0, 2)),
    ((3, 0), Direction.UP, (3, 3)),
    ((3, 3), Direction.DOWN, (3, 0)),
    ((0, 0), Direction.UP_LEFT, (4, 3)),
    ((4, 3), Direction.DOWN_RIGHT, (0, 0)),
    ((4, 0), Direction.UP_RIGHT, (0, 3)),
    ((0, 3), Direction.DOWN_LEFT, (4, 0)),
    # Only one axis on the edge
    ((0, 2), Direction.UP_LEFT, (4, 1)),
    ((2, 0), Direction.UP_LEFT, (1, 3)),
])
def test_wrap_around(buffer, start, direction, expected):
    p = Painter(x=start[0], y=start[1], direction=direction, color=Color.GREEN)
    p.move_forward_and_draw(buffer)
    assert p.position == expected
    assert buffer.get(*expected) is Color.GREEN


def test_full_lap_returns_to_start(buffer):
    p = Painter(x=1, y=1, direction=Direction.RIGHT)
    for _ in range(buffer.width):
        p.move_forward_and_draw(buffer)
    assert p.position == (1, 1)
    # Every cell of row 1 is painted
    assert all(buffer.get(x, 1) is Color.WHITE for x in range(buffer.width))


def test_single_pixel_buffer_stays_put():
    buf = PixelBuffer(1, 1)
    p = Painter.centered_on(buf)
    for direction in Direction:
        p.direction = direction
        p.move_forward_and_draw(buf)
        assert p.position == (0, 0)
    assert buf.get(0, 0) is Color.WHITE
