"""Grid coordinates and movement directions."""

from __future__ import annotations

import enum
from typing import NamedTuple


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, matching terminal row order.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        """Return the direction that would cause a 180° reversal."""
        return _OPPOSITES[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Point(NamedTuple):
    """A single board cell."""

    x: int
    y: int

    def moved(self, direction: Direction) -> Point:
        """Return the neighbouring cell in *direction* (may be off-board)."""
        dx, dy = direction.value
        return Point(self.x + dx, self.y + dy)
