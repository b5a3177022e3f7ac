"""Exception hierarchy for board validation, simulation and lookup failures."""

from enum import Enum
from typing import Optional


class InvalidBoardReason(Enum):
    """Why a candidate board was rejected at ingestion."""
    NULL = "null"
    BAD_DIMENSIONS = "bad_dimensions"
    UNDERPOPULATED = "underpopulated"
    OVERPOPULATED = "overpopulated"


class LifeBoardError(Exception):
    """Base class for all lifeboard errors."""


class InvalidBoardError(LifeBoardError, ValueError):
    """Board rejected by BoardValidator.

    Attributes:
        reason: Which validation rule failed
    """

    def __init__(self, reason: InvalidBoardReason, message: str):
        super().__init__(message)
        self.reason = reason


class StabilityError(LifeBoardError):
    """Search for a stable state did not succeed."""


class MaxAttemptsExceededError(StabilityError):
    """No still life was reached within the attempt budget.

    Attributes:
        board_id: Identifier supplied by the caller for context (may be None)
        max_attempts: Attempt budget that was exhausted
    """

    def __init__(self, board_id: Optional[str], max_attempts: int):
        if board_id is None:
            message = f"Unable to find a final state after {max_attempts} attempts."
        else:
            message = f"Unable to find a final state for board {board_id} after {max_attempts} attempts."
        super().__init__(message)
        self.board_id = board_id
        self.max_attempts = max_attempts


class BoardNotFoundError(LifeBoardError, LookupError):
    """No board is stored under the requested identifier."""

    def __init__(self, board_id: str):
        super().__init__(f"Board with ID {board_id} not found.")
        self.board_id = board_id


class StorageError(LifeBoardError):
    """A stored board could not be read back."""
