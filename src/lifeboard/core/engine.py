"""Conway's Game of Life rules engine.

Computes successor generations of a bounded board. Cells outside the board
are treated as dead (no wraparound). All operations are pure: every
transition returns a new Grid and leaves its input untouched.
"""

from dataclasses import dataclass
from typing import Optional, Set, Tuple
import logging

from .errors import MaxAttemptsExceededError
from .grid import Grid
from .rules import next_cell_state

logger = logging.getLogger(__name__)

# Moore neighborhood offsets (dx, dy), center excluded
NEIGHBOR_OFFSETS = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if not (dx == 0 and dy == 0)
)


@dataclass(frozen=True)
class StableResult:
    """Outcome of a successful run to stability."""
    grid: Grid
    attempts: int  # 1-based index of the step that produced the still life


class LifeEngine:
    """Conway's Game of Life rules engine.

    Implements the classic cellular automaton rules:
    - Live cell survives with 2-3 neighbors
    - Dead cell becomes alive with exactly 3 neighbors
    - All other cells die/become dead
    """

    def count_neighbors(self, grid: Grid, x: int, y: int) -> int:
        """Count living neighbors of a cell using Moore neighborhood.

        Args:
            grid: The grid containing the cell
            x: X coordinate of cell (column)
            y: Y coordinate of cell (row)

        Returns:
            Number of living neighbors (0-8)
        """
        state = grid.state
        count = 0

        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy

            # Cells outside grid are considered dead
            if 0 <= nx < grid.width and 0 <= ny < grid.height and state[ny, nx]:
                count += 1

        return count

    def update_cell(self, grid: Grid, x: int, y: int) -> bool:
        """Apply Conway's rules to determine next state of a cell.

        Returns:
            Next state of the cell (True=alive, False=dead)
        """
        return next_cell_state(bool(grid.state[y, x]), self.count_neighbors(grid, x, y))

    def active_cells(self, grid: Grid) -> Set[Tuple[int, int]]:
        """Cells that may change state in the next generation.

        A cell can only change if it is alive or touches a live cell, so the
        active set is every live cell plus its in-bounds Moore neighbors.

        Returns:
            Set of (x, y) coordinates
        """
        active = set()

        for x, y in grid.live_cells():
            active.add((x, y))
            for dx, dy in NEIGHBOR_OFFSETS:
                nx, ny = x + dx, y + dy
                if 0 <= nx < grid.width and 0 <= ny < grid.height:
                    active.add((nx, ny))

        return active

    def step(self, grid: Grid) -> Grid:
        """Compute the next generation, re-evaluating only active cells.

        Args:
            grid: Current (validated) grid

        Returns:
            New grid with the next generation; same dimensions as the input
        """
        active = self.active_cells(grid)
        new_grid = grid.copy()

        for x, y in active:
            new_grid.state[y, x] = self.update_cell(grid, x, y)

        logger.debug(f"Stepped {grid.width}x{grid.height} grid, evaluated {len(active)} active cells")
        return new_grid

    def step_exhaustive(self, grid: Grid) -> Grid:
        """Compute the next generation by evaluating every cell.

        Reference transition; step() must always agree with it.
        """
        new_grid = Grid(grid.width, grid.height)

        for y in range(grid.height):
            for x in range(grid.width):
                new_grid.state[y, x] = self.update_cell(grid, x, y)

        return new_grid

    def advance(self, grid: Grid, generations: int) -> Grid:
        """Apply step() exactly `generations` times.

        There is no early exit on stability; advance(grid, 0) returns a copy.

        Raises:
            ValueError: If generations is negative
        """
        if generations < 0:
            raise ValueError(f"generations must be non-negative, got {generations}")

        current = grid.copy()
        for _ in range(generations):
            current = self.step(current)

        logger.debug(f"Advanced grid by {generations} generations")
        return current

    def is_stable(self, current: Grid, following: Grid) -> bool:
        """True if two consecutive generations are identical cell for cell."""
        return current == following

    def advance_until_stable(self, grid: Grid, max_attempts: int,
                             board_id: Optional[str] = None) -> StableResult:
        """Step until a generation equals its successor.

        Oscillators of period > 1 are never reported stable. With
        max_attempts == 0 no step is performed and the search fails.

        Args:
            grid: Starting grid
            max_attempts: Maximum number of steps to try
            board_id: Identifier carried into the error for context only

        Returns:
            StableResult with the still life and the 1-based attempt that found it

        Raises:
            ValueError: If max_attempts is negative
            MaxAttemptsExceededError: If no still life is found within max_attempts
        """
        if max_attempts < 0:
            raise ValueError(f"max_attempts must be non-negative, got {max_attempts}")

        current = grid
        for attempt in range(1, max_attempts + 1):
            following = self.step(current)
            if self.is_stable(current, following):
                logger.debug(f"Stable state reached after {attempt} attempts")
                return StableResult(grid=following, attempts=attempt)
            current = following

        logger.debug(f"No stable state within {max_attempts} attempts")
        raise MaxAttemptsExceededError(board_id, max_attempts)


# Singleton instance for convenience
default_engine = LifeEngine()


def step(grid: Grid) -> Grid:
    """Next generation of `grid` using the default engine."""
    return default_engine.step(grid)


def advance(grid: Grid, generations: int) -> Grid:
    """State of `grid` after `generations` steps using the default engine."""
    return default_engine.advance(grid, generations)


def advance_until_stable(grid: Grid, max_attempts: int,
                         board_id: Optional[str] = None) -> StableResult:
    """Run `grid` to a still life using the default engine."""
    return default_engine.advance_until_stable(grid, max_attempts, board_id)
