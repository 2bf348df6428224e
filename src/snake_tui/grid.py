"""Occupancy grid backing collision and food-placement checks."""

from __future__ import annotations

import enum

import numpy as np

from snake_tui.snake import Point


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed board occupancy.

    The grid mirrors the snake body and the food cell so membership tests
    are O(1) instead of a scan over the body. Points are ``(x, y)`` while
    the array is indexed ``[y, x]`` (row-major, like the terminal).
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be at least 1×1.")
        self.width = width
        self.height = height
        self.cells = np.zeros((height, width), dtype=np.int8)

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, point: Point) -> bool:
        """Check whether a point lies within the grid."""
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def get(self, point: Point) -> CellType:
        """Return the cell type at *point*."""
        return CellType(self.cells[point.y, point.x])

    def set(self, point: Point, cell_type: CellType) -> None:
        """Set the cell type at *point*."""
        self.cells[point.y, point.x] = cell_type

    def empty_cells(self) -> list[Point]:
        """Return all empty cells in row-major order."""
        rows, cols = np.where(self.cells == CellType.EMPTY)
        return [
            Point(x, y)
            for y, x in zip(rows.tolist(), cols.tolist(), strict=True)
        ]
