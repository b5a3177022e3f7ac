"""Classic Game of Life seed patterns.

Patterns are small boolean arrays indexed [row, column] that can be placed
onto an empty board with place_pattern().
"""

import numpy as np
from typing import Dict

from .grid import Grid


def create_block_pattern() -> np.ndarray:
    """Create stable 2x2 block still life."""
    return np.array([
        [True, True],
        [True, True]
    ], dtype=bool)


def create_beehive_pattern() -> np.ndarray:
    """Create 6-cell beehive still life."""
    return np.array([
        [False, True, True, False],
        [True, False, False, True],
        [False, True, True, False]
    ], dtype=bool)


def create_blinker_pattern() -> np.ndarray:
    """Create vertical blinker pattern (period 2 oscillator)."""
    return np.array([[True], [True], [True]], dtype=bool)


def create_glider_pattern() -> np.ndarray:
    """Create classic glider heading down and to the right."""
    return np.array([
        [False, True, False],
        [False, False, True],
        [True, True, True]
    ], dtype=bool)


PATTERNS: Dict[str, np.ndarray] = {
    "block": create_block_pattern(),
    "beehive": create_beehive_pattern(),
    "blinker": create_blinker_pattern(),
    "glider": create_glider_pattern(),
}


def get_pattern(name: str) -> np.ndarray:
    """Look up a pattern by name.

    Raises:
        KeyError: If no pattern has that name
    """
    try:
        return PATTERNS[name].copy()
    except KeyError:
        raise KeyError(f"Unknown pattern {name!r}; choose from {sorted(PATTERNS)}") from None


def place_pattern(pattern: np.ndarray, width: int, height: int, x: int = 0, y: int = 0) -> Grid:
    """Place a pattern on an empty board.

    Args:
        pattern: 2D boolean array representing the pattern
        width: Board width
        height: Board height
        x: Column of the pattern's top-left cell
        y: Row of the pattern's top-left cell

    Returns:
        Grid: New board containing the pattern

    Raises:
        ValueError: If the pattern does not fit inside the board
    """
    if pattern.dtype != bool:
        pattern = pattern.astype(bool)

    pattern_height, pattern_width = pattern.shape
    if x < 0 or y < 0 or x + pattern_width > width or y + pattern_height > height:
        raise ValueError(
            f"Pattern {pattern_width}x{pattern_height} at ({x}, {y}) "
            f"does not fit on a {width}x{height} board"
        )

    grid = Grid(width, height)
    grid.state[y:y + pattern_height, x:x + pattern_width] = pattern
    return grid
