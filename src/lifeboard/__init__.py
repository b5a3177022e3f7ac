"""
lifeboard: Conway's Game of Life board service

Validates uploaded boards, computes successor generations and runs boards
to a still life. The computational core lives in lifeboard.core; storage,
the service layer, the HTTP API and the CLI are built around it.
"""

from .config import LifeConfig
from .core import (
    BoardNotFoundError, BoardValidator, Grid, InvalidBoardError, InvalidBoardReason,
    LifeBoardError, LifeEngine, MaxAttemptsExceededError, StabilityError, StableResult, StorageError,
    advance, advance_until_stable, step, validate_board
)

__version__ = "0.1.0"

__all__ = [
    'LifeConfig',
    'Grid',
    'LifeEngine',
    'StableResult',
    'BoardValidator',
    'validate_board',
    'step',
    'advance',
    'advance_until_stable',
    'LifeBoardError',
    'InvalidBoardError',
    'InvalidBoardReason',
    'StabilityError',
    'MaxAttemptsExceededError',
    'BoardNotFoundError',
    'StorageError',
]
