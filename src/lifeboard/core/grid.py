"""Board state for Conway's Game of Life.

A Grid is a rectangular boolean matrix backed by a numpy array of shape
(height, width). Cell coordinates are (x, y) with x the column and y the
row. Grids are treated as values: the engine never mutates one in place.
"""

import numpy as np
from collections.abc import Sequence
from typing import List, Optional, Set, Tuple
import logging

logger = logging.getLogger(__name__)


class Grid:
    """2D boolean grid representing a Game of Life board.

    Attributes:
        width: Number of columns
        height: Number of rows
        state: 2D numpy boolean array indexed [row, column] (True=alive)
    """

    def __init__(self, width: int, height: int, initial_state: Optional[np.ndarray] = None):
        """Initialize grid with given dimensions.

        Zero-sized grids are allowed here; whether a board is acceptable
        is decided by BoardValidator, not by construction.

        Args:
            width: Grid width (columns)
            height: Grid height (rows)
            initial_state: Optional initial grid state array of shape (height, width)

        Raises:
            ValueError: If dimensions are negative or initial_state doesn't match
        """
        if width < 0 or height < 0:
            raise ValueError("Grid dimensions cannot be negative")

        self.width = width
        self.height = height

        if initial_state is not None:
            if initial_state.shape != (height, width):
                raise ValueError(f"Initial state shape {initial_state.shape} doesn't match grid size {(height, width)}")
            if initial_state.dtype != bool:
                raise ValueError("Initial state must be boolean array")
            self.state = initial_state.copy()
        else:
            self.state = np.zeros((height, width), dtype=bool)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[bool]]) -> 'Grid':
        """Create grid from a list of rows of booleans.

        Args:
            rows: rows[r][c] is the cell at row r, column c

        Returns:
            Grid: New grid with height len(rows) and width len(rows[0])

        Raises:
            ValueError: If rows are ragged or contain non-boolean values
        """
        if isinstance(rows, np.ndarray):
            rows = rows.tolist()
        if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
            raise ValueError("Board must be a list of rows")

        for y, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
                raise ValueError(f"Row {y} is not a list of cells")

        height = len(rows)
        width = len(rows[0]) if height else 0

        state = np.zeros((height, width), dtype=bool)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
            for x, cell in enumerate(row):
                if not isinstance(cell, (bool, np.bool_)):
                    raise ValueError(f"Cell ({x}, {y}) is not a boolean: {cell!r}")
                state[y, x] = cell

        return cls(width, height, state)

    def to_rows(self) -> List[List[bool]]:
        """Export grid as a list of rows of Python booleans."""
        return self.state.tolist()

    def copy(self) -> 'Grid':
        """Create a deep copy of the grid."""
        return Grid(self.width, self.height, self.state)

    def get(self, x: int, y: int) -> bool:
        """Get cell state at coordinates.

        Args:
            x: X coordinate (column)
            y: Y coordinate (row)

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")
        return bool(self.state[y, x])

    def set(self, x: int, y: int, alive: bool) -> None:
        """Set cell state at coordinates.

        Only used while building a board; engine output is never modified.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")
        self.state[y, x] = alive

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def count_alive(self) -> int:
        """Count total number of alive cells (the population)."""
        return int(np.count_nonzero(self.state))

    def is_empty(self) -> bool:
        """Check if all cells are dead."""
        return not np.any(self.state)

    def live_cells(self) -> Set[Tuple[int, int]]:
        """Coordinates (x, y) of every live cell."""
        rows, cols = np.nonzero(self.state)
        return {(int(x), int(y)) for y, x in zip(rows, cols)}

    def __getitem__(self, key: Tuple[int, int]) -> bool:
        """Access cell state using grid[x, y] syntax."""
        x, y = key
        return self.get(x, y)

    def __setitem__(self, key: Tuple[int, int], value: bool) -> None:
        """Set cell state using grid[x, y] = value syntax."""
        x, y = key
        self.set(x, y, value)

    def __eq__(self, other: object) -> bool:
        """Check equality with another grid."""
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width == other.width and
                self.height == other.height and
                np.array_equal(self.state, other.state))

    def __str__(self) -> str:
        """String representation showing live cells as # and dead as '.'."""
        return '\n'.join(
            ''.join('#' if alive else '.' for alive in row)
            for row in self.state
        )

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, alive={self.count_alive()})"
