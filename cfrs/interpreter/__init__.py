"""
Interpreter module.

Command executor and its error taxonomy.
"""

from cfrs.interpreter.errors import (
    EndOfCommands,
    ErrorKind,
    ExecutionError,
    UnmatchedCloseBracket,
)
from cfrs.interpreter.executor import CommandExecutor, StepResult

__all__ = [
    "CommandExecutor",
    "EndOfCommands",
    "ErrorKind",
    "ExecutionError",
    "StepResult",
    "UnmatchedCloseBracket",
]
