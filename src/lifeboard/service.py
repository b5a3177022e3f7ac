"""Board service: orchestrates storage and the Game of Life core.

Every public operation follows load -> validate/step -> save. Validation
happens once, at upload; stored boards are trusted afterwards.
"""

import threading
import uuid
from typing import Dict, Optional
import logging

from .config import LifeConfig
from .core.engine import LifeEngine
from .core.errors import BoardNotFoundError, InvalidBoardError, MaxAttemptsExceededError
from .core.grid import Grid
from .core.validator import BoardValidator
from .storage import BoardRecord, BoardStore, InMemoryBoardStore

logger = logging.getLogger(__name__)


class GameOfLifeService:
    """Upload boards and compute their next, nth and final states."""

    def __init__(self,
                 store: Optional[BoardStore] = None,
                 engine: Optional[LifeEngine] = None,
                 validator: Optional[BoardValidator] = None,
                 config: Optional[LifeConfig] = None):
        """Initialize the service.

        Args:
            store: Board storage (in-memory if None)
            engine: Rules engine (fresh LifeEngine if None)
            validator: Board validator (built from config if None)
            config: Limits and defaults (LifeConfig() if None)
        """
        self.config = config or LifeConfig()
        self.store = store if store is not None else InMemoryBoardStore()
        self.engine = engine or LifeEngine()
        self.validator = validator or BoardValidator(self.config)
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _board_lock(self, board_id: str) -> threading.Lock:
        """Lock serialising read-modify-write cycles on one board."""
        with self._locks_guard:
            return self._locks.setdefault(board_id, threading.Lock())

    def upload_board(self, grid: Optional[Grid]) -> str:
        """Validate and store a new board.

        Returns:
            Identifier of the new board

        Raises:
            InvalidBoardError: If the board fails validation
        """
        logger.info("Uploading a new board")

        try:
            self.validator.validate(grid)
        except InvalidBoardError as e:
            logger.warning(f"Invalid board state during upload ({e.reason.value}): {e}")
            raise

        board_id = str(uuid.uuid4())
        self.store.save(BoardRecord(board_id=board_id, grid=grid.copy(), generation=0))

        logger.info(f"Board {board_id} uploaded successfully")
        return board_id

    def get_board(self, board_id: str) -> BoardRecord:
        """Fetch a stored board.

        Raises:
            BoardNotFoundError: If no board has this id
        """
        record = self.store.load(board_id)
        if record is None:
            logger.warning(f"Board {board_id} not found")
            raise BoardNotFoundError(board_id)
        return record

    def next_state(self, board_id: str) -> BoardRecord:
        """Advance a stored board by one generation and persist it."""
        logger.info(f"Fetching next state for board {board_id}")

        with self._board_lock(board_id):
            record = self.get_board(board_id)
            record.grid = self.engine.step(record.grid)
            record.generation += 1
            self.store.save(record)

        logger.info(f"Board {board_id} advanced to generation {record.generation}")
        return record

    def state_after(self, board_id: str, generations: int) -> BoardRecord:
        """Project a stored board `generations` steps ahead.

        The returned record is not saved; the stored board is left unchanged.

        Raises:
            ValueError: If generations is negative
        """
        logger.info(f"Calculating state after {generations} generations for board {board_id}")

        record = self.get_board(board_id)
        record.grid = self.engine.advance(record.grid, generations)
        record.generation += generations

        logger.info(f"State after {generations} generations for board {board_id} calculated")
        return record

    def final_state(self, board_id: str, max_attempts: Optional[int] = None) -> BoardRecord:
        """Run a stored board to a still life and persist the result.

        The generation counter advances by the number of steps it took.

        Args:
            board_id: Board to run
            max_attempts: Step budget (config.default_max_attempts if None)

        Raises:
            MaxAttemptsExceededError: If no still life is reached within the budget
        """
        if max_attempts is None:
            max_attempts = self.config.default_max_attempts

        logger.info(f"Finding final state for board {board_id} with at most {max_attempts} attempts")

        with self._board_lock(board_id):
            record = self.get_board(board_id)
            try:
                result = self.engine.advance_until_stable(record.grid, max_attempts, board_id=board_id)
            except MaxAttemptsExceededError:
                logger.warning(f"Unable to find a final state for board {board_id} after {max_attempts} attempts")
                raise

            record.grid = result.grid
            record.generation += result.attempts
            self.store.save(record)

        logger.info(f"Final state for board {board_id} found after {result.attempts} attempts")
        return record
