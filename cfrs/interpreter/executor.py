"""Command executor -- the CFRS interpreter core.

Walks a command string one character per :meth:`CommandExecutor.step`,
dispatching to the painter and buffer:

    C   change colour          F   move forward and draw
    R   rotate 45°             S   pause (reported to the caller)
    [   open loop              ]   close loop
    *   anything else is a no-op

Loop semantics
--------------
Every ``[...]`` body runs exactly **twice**.  Reaching a ``]`` whose fired
flag is clear pops the matching start from the stack, sets the flag and
jumps back.  Reaching it again with the flag set clears the flag and falls
through.  Clearing the flag re-arms the bracket, so an enclosing loop's
second pass repeats the inner body twice more.  Flags are kept in
``fired`` (keyed by bracket position); the command string itself is never
modified.

Usage::

    buffer = PixelBuffer(256, 256)
    executor = CommandExecutor("[[[CFRS]]]", buffer)
    while not executor.done:
        pause, buf = executor.step()
        ...
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from cfrs.canvas.buffer import PixelBuffer
from cfrs.canvas.painter import Painter
from cfrs.interpreter.errors import EndOfCommands, UnmatchedCloseBracket

logger = logging.getLogger(__name__)


class StepResult(NamedTuple):
    """Outcome of one successful step."""

    pause: bool
    buffer: PixelBuffer


class CommandExecutor:
    """Single-painter interpreter over one buffer.

    Parameters
    ----------
    commands : str
        Program text.
    buffer : PixelBuffer
        Canvas to draw on; owned by this executor for the run.

    Attributes
    ----------
    painter : Painter
        Starts at the buffer centre ``((w-1)//2, (h-1)//2)``, heading up,
        painting white.
    index : int
        Cursor into ``commands``.
    block_starts : list[int]
        Stack of loop-body start indices, one per open ``[``.
    fired : set[int]
        Positions of ``]`` brackets that have jumped back once and will
        fall through next time.
    """

    def __init__(self, commands: str, buffer: PixelBuffer) -> None:
        self.commands = commands
        self.buffer = buffer
        self.painter = Painter.centered_on(buffer)

        self.index = 0
        self.block_starts: list[int] = []
        self.fired: set[int] = set()

    def __repr__(self) -> str:
        return (
            f"CommandExecutor(index={self.index}/{len(self.commands)}, "
            f"depth={len(self.block_starts)}, painter={self.painter})"
        )

    @property
    def done(self) -> bool:
        """True once the cursor has run off the end of the program."""
        return self.index >= len(self.commands)

    def position(self) -> tuple[int, int]:
        """Current painter ``(x, y)``."""
        return self.painter.position

    def step(self) -> StepResult:
        """Execute exactly one transition.

        Returns
        -------
        StepResult
            ``pause`` is True for ``S``; ``buffer`` is the live canvas.

        Raises
        ------
        EndOfCommands
            The cursor is at or past the end of the program.
        UnmatchedCloseBracket
            A ``]`` was reached with an empty loop stack.
        """
        if self.done:
            raise EndOfCommands("End of commands", self.index)

        pause = False
        c = self.commands[self.index]

        if c == 'C':
            self.painter.change_color()
        elif c == 'F':
            self.painter.move_forward_and_draw(self.buffer)
        elif c == 'R':
            self.painter.rotate()
        elif c == 'S':
            pause = True
        elif c == '[':
            self.block_starts.append(self.index + 1)
        elif c == ']':
            if self.index in self.fired:
                # Second pass over this bracket: re-arm and fall through
                self.fired.discard(self.index)
            elif self.block_starts:
                start = self.block_starts.pop()
                self.fired.add(self.index)
                logger.debug("Loop at %d jumps back to %d", self.index, start)
                self.index = start
                return StepResult(pause, self.buffer)
            else:
                raise UnmatchedCloseBracket(
                    f"Unmatched ] at index {self.index}", self.index
                )

        self.index += 1
        return StepResult(pause, self.buffer)

    def run(self) -> int:
        """Step until the end of the program.

        Returns
        -------
        int
            Number of transitions executed.

        Raises
        ------
        UnmatchedCloseBracket
            Propagated from :meth:`step`; the buffer keeps whatever was
            drawn before the failing bracket.
        """
        logger.info(
            "Running %d commands on %dx%d buffer",
            len(self.commands), self.buffer.width, self.buffer.height,
        )
        steps = 0
        while True:
            try:
                self.step()
            except EndOfCommands:
                break
            steps += 1

        logger.info("Executed %d steps, painter at %s", steps, self.position())
        return steps
