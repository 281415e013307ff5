"""CFRS: a tiny bracket-looped drawing language for pixel grids.

A command string steers a single painter across a fixed-size canvas:

    C  cycle the painter colour
    F  step forward (wrapping at the edges) and paint the new cell
    R  rotate 45 degrees clockwise
    S  pause; the animation exporter may sample a frame here
    [] loop; the enclosed body runs exactly twice

Architecture layers (strict one-way dependency):
    render.py → {interpreter, export}/ → canvas/ → utils/

Key invariants:
    - Buffer size is fixed at creation (width × height, row-major)
    - Painter position always lies inside the buffer (toroidal wrap)
    - The command string is never mutated; loop state lives in the executor
"""

from cfrs.canvas import Color, Direction, Painter, PixelBuffer
from cfrs.interpreter import (
    CommandExecutor,
    EndOfCommands,
    ErrorKind,
    ExecutionError,
    StepResult,
    UnmatchedCloseBracket,
)

__version__ = "0.3.0"

__all__ = [
    "Color",
    "CommandExecutor",
    "Direction",
    "EndOfCommands",
    "ErrorKind",
    "ExecutionError",
    "Painter",
    "PixelBuffer",
    "StepResult",
    "UnmatchedCloseBracket",
]
