"""Ingestion checks for candidate boards.

A board must be between 1x1 and 100x100 and hold between 1 and 1000 live
cells. Dimensions are checked before any cell is counted.
"""

from typing import Optional
import logging

from .errors import InvalidBoardError, InvalidBoardReason
from .grid import Grid
from ..config import LifeConfig

logger = logging.getLogger(__name__)


class BoardValidator:
    """Guards the system against structurally or semantically invalid boards."""

    def __init__(self, config: Optional[LifeConfig] = None):
        self.config = config or LifeConfig()

    def validate(self, grid: Optional[Grid]) -> None:
        """Validate a candidate board.

        Args:
            grid: Board to check

        Raises:
            InvalidBoardError: With the reason of the first rule that failed
        """
        if grid is None:
            raise InvalidBoardError(InvalidBoardReason.NULL, "The board state cannot be null.")

        cfg = self.config
        if (grid.width == 0 or grid.height == 0 or
                grid.width > cfg.max_width or grid.height > cfg.max_height):
            raise InvalidBoardError(
                InvalidBoardReason.BAD_DIMENSIONS,
                f"The board size {grid.width}x{grid.height} is invalid. "
                f"Board must be between 1x1 and {cfg.max_width}x{cfg.max_height}."
            )

        live_cells = grid.count_alive()

        if live_cells < cfg.min_population:
            raise InvalidBoardError(
                InvalidBoardReason.UNDERPOPULATED,
                f"The board must have at least {cfg.min_population} live cell(s)."
            )

        if live_cells > cfg.max_population:
            raise InvalidBoardError(
                InvalidBoardReason.OVERPOPULATED,
                f"The board cannot have more than {cfg.max_population} live cells, got {live_cells}."
            )

        logger.debug(f"Board {grid.width}x{grid.height} with {live_cells} live cells accepted")


# Singleton instance for convenience
default_validator = BoardValidator()


def validate_board(grid: Optional[Grid]) -> None:
    """Validate a board against the default limits."""
    default_validator.validate(grid)
