"""Food placement logic."""

from __future__ import annotations

import logging

import numpy as np

from snake_tui.grid import CellType, Grid
from snake_tui.snake import Point

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places the single food item on a free grid cell.

    Picks uniformly among the currently empty cells with a NumPy RNG, so a
    placement never needs to be re-rolled and a seeded generator gives
    reproducible sessions.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self) -> Point | None:
        """Mark a random empty cell as food and return it.

        Returns ``None`` when the board has no empty cell left.
        """
        empty = self.grid.empty_cells()
        if not empty:
            logger.warning("No empty cells available for food placement.")
            return None

        pos = empty[int(self.rng.integers(len(empty)))]
        self.grid.set(pos, CellType.FOOD)
        return pos

    def place(self, pos: Point) -> bool:
        """Put food at a fixed cell. Returns False if the cell is taken."""
        if self.grid.get(pos) != CellType.EMPTY:
            return False
        self.grid.set(pos, CellType.FOOD)
        return True
