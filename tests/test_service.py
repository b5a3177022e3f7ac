"""Tests for the board service (storage + core orchestration)."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from lifeboard.config import LifeConfig
from lifeboard.core.errors import (
    BoardNotFoundError, InvalidBoardError, InvalidBoardReason, MaxAttemptsExceededError
)
from lifeboard.core.grid import Grid
from lifeboard.core.engine import advance
from lifeboard.core.patterns import create_block_pattern, create_glider_pattern, place_pattern
from lifeboard.service import GameOfLifeService
from lifeboard.storage import FileBoardStore, InMemoryBoardStore

T, F = True, False

VERTICAL_BLINKER = [[F, T, F], [F, T, F], [F, T, F]]
HORIZONTAL_BLINKER = [[F, F, F], [T, T, T], [F, F, F]]
L_TROMINO = [[F, F, F, F], [F, T, T, F], [F, T, F, F], [F, F, F, F]]


class TestUpload:

    def setup_method(self):
        self.store = InMemoryBoardStore()
        self.service = GameOfLifeService(store=self.store)

    def test_upload_stores_generation_zero(self):
        board_id = self.service.upload_board(Grid.from_rows(VERTICAL_BLINKER))

        record = self.store.load(board_id)
        assert record.generation == 0
        assert record.grid == Grid.from_rows(VERTICAL_BLINKER)

    def test_upload_assigns_unique_ids(self):
        grid = Grid.from_rows([[T]])
        assert self.service.upload_board(grid) != self.service.upload_board(grid)

    def test_upload_rejects_invalid_board(self, caplog):
        with caplog.at_level(logging.WARNING):
            with pytest.raises(InvalidBoardError) as exc_info:
                self.service.upload_board(Grid(3, 3))

        assert exc_info.value.reason is InvalidBoardReason.UNDERPOPULATED
        assert len(self.store) == 0
        assert "Invalid board state during upload" in caplog.text

    def test_upload_rejects_none(self):
        with pytest.raises(InvalidBoardError) as exc_info:
            self.service.upload_board(None)
        assert exc_info.value.reason is InvalidBoardReason.NULL

    def test_uploaded_board_is_copied(self):
        grid = Grid.from_rows(VERTICAL_BLINKER)
        board_id = self.service.upload_board(grid)
        grid[0, 0] = True
        assert self.service.get_board(board_id).grid[0, 0] is False

    def test_config_limits_applied(self):
        service = GameOfLifeService(config=LifeConfig(max_width=2, max_height=2))
        with pytest.raises(InvalidBoardError) as exc_info:
            service.upload_board(Grid.from_rows(VERTICAL_BLINKER))
        assert exc_info.value.reason is InvalidBoardReason.BAD_DIMENSIONS


class TestTransitions:

    def setup_method(self):
        self.store = InMemoryBoardStore()
        self.service = GameOfLifeService(store=self.store)
        self.blinker_id = self.service.upload_board(Grid.from_rows(VERTICAL_BLINKER))

    def test_next_state_persists(self):
        record = self.service.next_state(self.blinker_id)

        assert record.generation == 1
        assert record.grid == Grid.from_rows(HORIZONTAL_BLINKER)

        stored = self.store.load(self.blinker_id)
        assert stored.generation == 1
        assert stored.grid == Grid.from_rows(HORIZONTAL_BLINKER)

    def test_next_state_twice(self):
        self.service.next_state(self.blinker_id)
        record = self.service.next_state(self.blinker_id)
        assert record.generation == 2
        assert record.grid == Grid.from_rows(VERTICAL_BLINKER)

    def test_state_after_does_not_persist(self):
        record = self.service.state_after(self.blinker_id, 3)

        assert record.grid == Grid.from_rows(HORIZONTAL_BLINKER)
        assert record.generation == 3

        stored = self.store.load(self.blinker_id)
        assert stored.generation == 0
        assert stored.grid == Grid.from_rows(VERTICAL_BLINKER)

    def test_state_after_zero(self):
        record = self.service.state_after(self.blinker_id, 0)
        assert record.grid == Grid.from_rows(VERTICAL_BLINKER)

    def test_state_after_negative(self):
        with pytest.raises(ValueError):
            self.service.state_after(self.blinker_id, -1)

    @pytest.mark.parametrize("operation,args", [
        ("get_board", ()),
        ("next_state", ()),
        ("state_after", (2,)),
        ("final_state", (10,)),
    ])
    def test_unknown_board(self, operation, args):
        with pytest.raises(BoardNotFoundError, match="missing-id") as exc_info:
            getattr(self.service, operation)("missing-id", *args)
        assert exc_info.value.board_id == "missing-id"


class TestFinalState:

    def setup_method(self):
        self.store = InMemoryBoardStore()
        self.service = GameOfLifeService(store=self.store, config=LifeConfig(default_max_attempts=20))

    def test_final_state_persists_stable_board(self):
        board_id = self.service.upload_board(Grid.from_rows(L_TROMINO))

        record = self.service.final_state(board_id, 10)

        block = place_pattern(create_block_pattern(), 4, 4, 1, 1)
        assert record.grid == block
        assert record.generation == 2

        stored = self.store.load(board_id)
        assert stored.grid == block
        assert stored.generation == 2

    def test_default_budget_from_config(self):
        board_id = self.service.upload_board(Grid.from_rows([[T, T], [T, T]]))
        assert self.service.final_state(board_id).generation == 1

    def test_oscillator_exhausts(self, caplog):
        board_id = self.service.upload_board(Grid.from_rows(VERTICAL_BLINKER))

        with caplog.at_level(logging.WARNING):
            with pytest.raises(MaxAttemptsExceededError) as exc_info:
                self.service.final_state(board_id, 5)

        assert exc_info.value.board_id == board_id
        assert exc_info.value.max_attempts == 5
        assert "Unable to find a final state" in caplog.text

        stored = self.store.load(board_id)
        assert stored.generation == 0
        assert stored.grid == Grid.from_rows(VERTICAL_BLINKER)

    def test_zero_attempts(self):
        board_id = self.service.upload_board(Grid.from_rows([[T, T], [T, T]]))
        with pytest.raises(MaxAttemptsExceededError):
            self.service.final_state(board_id, 0)


class TestFileBackedService:

    def test_state_survives_restart(self, tmp_path):
        service = GameOfLifeService(store=FileBoardStore(tmp_path))
        board_id = service.upload_board(Grid.from_rows(VERTICAL_BLINKER))
        service.next_state(board_id)

        restarted = GameOfLifeService(store=FileBoardStore(tmp_path))
        record = restarted.get_board(board_id)
        assert record.generation == 1
        assert record.grid == Grid.from_rows(HORIZONTAL_BLINKER)


class TestConcurrentRequests:
    """Parallel requests on one board must each apply their own transition."""

    WORKERS = 8
    CALLS_PER_WORKER = 5

    def _run_parallel(self, service, board_id, operation):
        def worker(_):
            for _ in range(self.CALLS_PER_WORKER):
                operation(board_id)

        with ThreadPoolExecutor(max_workers=self.WORKERS) as pool:
            list(pool.map(worker, range(self.WORKERS)))

    @pytest.mark.parametrize("file_backed", [False, True])
    def test_parallel_next_state_counts_every_step(self, tmp_path, file_backed):
        store = FileBoardStore(tmp_path) if file_backed else InMemoryBoardStore()
        service = GameOfLifeService(store=store)
        initial = place_pattern(create_glider_pattern(), 100, 100, 1, 1)
        board_id = service.upload_board(initial)

        self._run_parallel(service, board_id, service.next_state)

        total = self.WORKERS * self.CALLS_PER_WORKER
        record = service.get_board(board_id)
        assert record.generation == total
        assert record.grid == advance(initial, total)

    def test_parallel_final_state_counts_every_search(self):
        service = GameOfLifeService(store=InMemoryBoardStore())
        board_id = service.upload_board(Grid.from_rows(L_TROMINO))

        self._run_parallel(service, board_id, lambda board: service.final_state(board, 10))

        # First search takes 2 steps; every later one finds the block stable after 1
        total = 2 + (self.WORKERS * self.CALLS_PER_WORKER - 1)
        assert service.get_board(board_id).generation == total
