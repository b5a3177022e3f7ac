"""
Game of Life computational core.

Pure functions over Grid values: validation at ingestion, single-step
transitions, bounded iteration and runs to stability. No I/O happens here.
"""

from .engine import LifeEngine, StableResult, advance, advance_until_stable, default_engine, step
from .errors import (
    BoardNotFoundError, InvalidBoardError, InvalidBoardReason,
    LifeBoardError, MaxAttemptsExceededError, StabilityError, StorageError
)
from .grid import Grid
from .validator import BoardValidator, default_validator, validate_board

__all__ = [
    'Grid',
    'LifeEngine',
    'StableResult',
    'default_engine',
    'step',
    'advance',
    'advance_until_stable',
    'BoardValidator',
    'default_validator',
    'validate_board',
    'LifeBoardError',
    'InvalidBoardError',
    'InvalidBoardReason',
    'StabilityError',
    'MaxAttemptsExceededError',
    'BoardNotFoundError',
    'StorageError',
]
