"""Colour and direction vocabularies of the painter.

Both are closed enumerations whose **declaration order is the cycle order**
used by the ``C`` and ``R`` commands.  Names parse case-insensitively and
render as their capitalised form (``str(Color.CYAN) == "Cyan"``).  A name
outside the vocabulary is an error; there is no fallback value.
"""

from __future__ import annotations

from enum import Enum


class InvalidColorName(ValueError):
    """Raised when a string does not name one of the eight colours."""

    pass


class InvalidDirectionName(ValueError):
    """Raised when a string does not name one of the eight directions."""

    pass


class _Cyclic(Enum):
    """Enum whose members form a closed successor cycle."""

    @property
    def ordinal(self) -> int:
        """Zero-based position in declaration (= cycle) order."""
        return _ORDINALS[type(self)][self]

    def succ(self):
        """Next member in the cycle; the last member wraps to the first."""
        members = _MEMBERS[type(self)]
        return members[(self.ordinal + 1) % len(members)]

    @classmethod
    def from_ordinal(cls, ordinal: int):
        return _MEMBERS[cls][ordinal]

    def __str__(self) -> str:
        return self.value


class Color(_Cyclic):
    """The eight painter colours, in ``C`` cycle order."""

    WHITE = "White"
    BLACK = "Black"
    BLUE = "Blue"
    GREEN = "Green"
    CYAN = "Cyan"
    RED = "Red"
    MAGENTA = "Magenta"
    YELLOW = "Yellow"

    @classmethod
    def parse(cls, name: str) -> Color:
        """Parse a colour name, ignoring case.

        Raises
        ------
        InvalidColorName
            If *name* is not one of the eight colours.
        """
        try:
            return _BY_NAME[cls][str(name).strip().lower()]
        except KeyError:
            raise InvalidColorName(f"Invalid color: {name}") from None


class Direction(_Cyclic):
    """The eight compass headings, in ``R`` cycle order (45° clockwise)."""

    UP = "Up"
    UP_RIGHT = "UpRight"
    RIGHT = "Right"
    DOWN_RIGHT = "DownRight"
    DOWN = "Down"
    DOWN_LEFT = "DownLeft"
    LEFT = "Left"
    UP_LEFT = "UpLeft"

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Parse a direction name, ignoring case.

        Raises
        ------
        InvalidDirectionName
            If *name* is not one of the eight directions.
        """
        try:
            return _BY_NAME[cls][str(name).strip().lower()]
        except KeyError:
            raise InvalidDirectionName(f"Invalid direction: {name}") from None

    @property
    def delta(self) -> tuple[int, int]:
        """Unit displacement ``(dx, dy)``; y grows downward."""
        return _DELTAS[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.UP_RIGHT: (1, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN_RIGHT: (1, 1),
    Direction.DOWN: (0, 1),
    Direction.DOWN_LEFT: (-1, 1),
    Direction.LEFT: (-1, 0),
    Direction.UP_LEFT: (-1, -1),
}

_MEMBERS = {cls: tuple(cls) for cls in (Color, Direction)}
_ORDINALS = {cls: {m: i for i, m in enumerate(cls)} for cls in (Color, Direction)}
_BY_NAME = {cls: {m.value.lower(): m for m in cls} for cls in (Color, Direction)}
