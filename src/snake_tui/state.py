"""Authoritative single-snake game model and its tick transition."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from snake_tui.food import FoodSpawner
from snake_tui.grid import CellType, Grid
from snake_tui.snake import Direction, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """Read-only snapshot of a game handed to the renderer."""

    width: int
    height: int
    snake: tuple[Point, ...]
    food: Point | None
    score: int
    terminated: bool
    won: bool = False
    paused: bool = False


class GameState:
    """Snake body, direction, food, board size, score and terminal flag.

    ``snake[0]`` is the head and ``snake[-1]`` the tail. A :class:`Grid`
    mirrors the body and the food cell for O(1) collision checks; every
    mutation of :attr:`snake` or :attr:`food` keeps both in step.

    The state is *active* until a losing move sets :attr:`terminated`.
    It only becomes active again through :meth:`restart`, which builds a
    fresh state of the same board size.
    """

    def __init__(
        self,
        width: int,
        height: int,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = Grid(width, height)
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)

        start = Point(width // 2, height // 2)
        self.snake: deque[Point] = deque([start])
        self.grid.set(start, CellType.SNAKE)
        self.dir = Direction.RIGHT

        self.score = 0
        self.tick = 0
        self.terminated = False
        self.won = False

        self.food: Point | None = Point(width // 3, height // 3)
        if not self.food_spawner.place(self.food):
            # Tiny boards put the fixed food cell under the head.
            self._respawn_food()

    @property
    def head(self) -> Point:
        """Return the head coordinate."""
        return self.snake[0]

    def change_direction(self, direction: Direction) -> None:
        """Request a new heading, applied on the next :meth:`step`.

        A single-segment snake may turn anywhere; a longer one ignores a
        request for the exact opposite of its current heading.
        """
        if len(self.snake) == 1 or direction != self.dir.opposite:
            self.dir = direction

    def step(self) -> None:
        """Advance the game by one tick. No-op once terminated."""
        if self.terminated:
            return

        self.tick += 1
        new_head = self.head.moved(self.dir)

        # Both checks run before the body is touched so a losing move
        # never leaves the head on an illegal cell.
        if not self.grid.in_bounds(new_head):
            self._terminate("hit the wall")
            return
        if self.grid.get(new_head) == CellType.SNAKE:
            self._terminate("ran into itself")
            return

        self.snake.appendleft(new_head)
        self.grid.set(new_head, CellType.SNAKE)
        if new_head == self.food:
            self.score += 1
            self._respawn_food()
        else:
            tail = self.snake.pop()
            self.grid.set(tail, CellType.EMPTY)

    def resize(self, width: int, height: int) -> bool:
        """Adopt new board dimensions.

        Positions are never clipped or relocated: if any segment or the
        food falls outside the new bounds the game is terminated instead.
        Returns whether everything still fits.
        """
        if width < 1 or height < 1:
            raise ValueError("Board dimensions must be at least 1×1.")

        cells: Iterable[Point] = self.snake
        if self.food is not None:
            cells = [*self.snake, self.food]
        fits = all(p.x < width and p.y < height for p in cells)

        logger.info(
            "Board resized from %dx%d to %dx%d.",
            self.width, self.height, width, height,
        )
        self.width = width
        self.height = height
        if fits:
            self.grid = Grid(width, height)
            self.food_spawner.grid = self.grid
            self.sync_grid()
        elif not self.terminated:
            self._terminate("no longer fits the resized board")
        return fits

    def restart(self) -> GameState:
        """Return a fresh game on the current board size."""
        if not self.terminated:
            raise RuntimeError("Only a terminated game can be restarted.")
        return GameState(self.width, self.height, rng=self.rng)

    def sync_grid(self) -> None:
        """Rebuild the occupancy grid from :attr:`snake` and :attr:`food`."""
        self.grid.clear()
        for seg in self.snake:
            self.grid.set(seg, CellType.SNAKE)
        if self.food is not None:
            self.grid.set(self.food, CellType.FOOD)

    def snapshot(self, paused: bool = False) -> Frame:
        """Return an immutable view of the current state."""
        return Frame(
            width=self.width,
            height=self.height,
            snake=tuple(self.snake),
            food=self.food,
            score=self.score,
            terminated=self.terminated,
            won=self.won,
            paused=paused,
        )

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "terminated": self.terminated,
            "won": self.won,
            "width": self.width,
            "height": self.height,
            "direction": self.dir.name,
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food) if self.food is not None else None,
        }

    def _respawn_food(self) -> None:
        self.food = self.food_spawner.spawn()
        if self.food is None:
            self.won = True
            self._terminate("filled the board")

    def _terminate(self, reason: str) -> None:
        """Mark the game as over."""
        self.terminated = True
        logger.info(
            "Game over at tick %d with score %d: snake %s.",
            self.tick, self.score, reason,
        )
