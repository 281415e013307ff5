"""Execution error taxonomy.

``ErrorKind`` is the closed set of ways a step can stop.  Callers branch on
the exception class (or ``exc.kind``), never on message text.
"""

from __future__ import annotations

from enum import Enum, auto


class ErrorKind(Enum):
    """Why ``CommandExecutor.step()`` did not perform a transition."""

    END_OF_COMMANDS = auto()
    UNMATCHED_CLOSE_BRACKET = auto()


class ExecutionError(Exception):
    """Base class for executor stop conditions.

    Attributes
    ----------
    kind : ErrorKind
        Machine-readable reason.
    index : int
        Cursor position when the condition was detected.
    """

    kind: ErrorKind

    def __init__(self, message: str, index: int) -> None:
        super().__init__(message)
        self.index = index


class EndOfCommands(ExecutionError):
    """Cursor reached the end of the program (normal termination)."""

    kind = ErrorKind.END_OF_COMMANDS


class UnmatchedCloseBracket(ExecutionError):
    """A ``]`` was reached with no open ``[`` to return to."""

    kind = ErrorKind.UNMATCHED_CLOSE_BRACKET
