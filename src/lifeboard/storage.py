"""Board persistence.

Stores each board together with its generation counter. The service layer
is the only caller; the computational core never touches storage.
"""

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from .core.errors import StorageError
from .core.grid import Grid

logger = logging.getLogger(__name__)


@dataclass
class BoardRecord:
    """A stored board: its identifier, current grid and generation counter."""
    board_id: str
    grid: Grid
    generation: int = 0  # Transitions applied since upload

    def copy(self) -> 'BoardRecord':
        return BoardRecord(self.board_id, self.grid.copy(), self.generation)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize record to a JSON-ready dictionary."""
        return {
            'board_id': self.board_id,
            'generation': self.generation,
            'state': self.grid.to_rows(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BoardRecord':
        """Rebuild a record from to_dict() output.

        Raises:
            ValueError: If required keys are missing or malformed
        """
        try:
            board_id = data['board_id']
            generation = data['generation']
            state = data['state']
        except (KeyError, TypeError) as e:
            raise ValueError(f"Board record is missing field {e}") from e

        if not isinstance(generation, int) or isinstance(generation, bool) or generation < 0:
            raise ValueError(f"Board record generation must be a non-negative integer, got {generation!r}")

        return cls(board_id=str(board_id), grid=Grid.from_rows(state), generation=generation)


class BoardStore(ABC):
    """Load-by-id / save-by-id storage for boards."""

    @abstractmethod
    def load(self, board_id: str) -> Optional[BoardRecord]:
        """Return the stored board, or None if the id is unknown."""

    @abstractmethod
    def save(self, record: BoardRecord) -> None:
        """Insert or replace the board stored under record.board_id."""


class InMemoryBoardStore(BoardStore):
    """Dictionary-backed store; records are copied in and out."""

    def __init__(self):
        self._boards: Dict[str, BoardRecord] = {}
        self._lock = threading.Lock()

    def load(self, board_id: str) -> Optional[BoardRecord]:
        with self._lock:
            record = self._boards.get(board_id)
        return record.copy() if record is not None else None

    def save(self, record: BoardRecord) -> None:
        with self._lock:
            self._boards[record.board_id] = record.copy()
        logger.debug(f"Saved board {record.board_id} at generation {record.generation}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._boards)


class FileBoardStore(BoardStore):
    """One JSON file per board inside a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, board_id: str) -> Path:
        # Ids become file names; nothing may escape the directory
        if not board_id or board_id in ('.', '..') or Path(board_id).name != board_id:
            raise ValueError(f"Invalid board id: {board_id!r}")
        return self.directory / f"{board_id}.json"

    def load(self, board_id: str) -> Optional[BoardRecord]:
        try:
            path = self._path(board_id)
        except ValueError:
            logger.debug(f"Rejected malformed board id {board_id!r}")
            return None

        if not path.exists():
            return None

        try:
            with open(path, 'r') as f:
                return BoardRecord.from_dict(json.load(f))
        except ValueError as e:
            raise StorageError(f"Stored board {board_id} at {path} is corrupt: {e}") from e

    def save(self, record: BoardRecord) -> None:
        path = self._path(record.board_id)
        # One temp file per write; concurrent saves must not share it
        with tempfile.NamedTemporaryFile('w', dir=self.directory, prefix=path.name + '.',
                                         suffix='.tmp', delete=False) as f:
            json.dump(record.to_dict(), f)
        try:
            os.replace(f.name, path)
        except OSError:
            os.unlink(f.name)
            raise

        logger.debug(f"Saved board {record.board_id} to {path}")
