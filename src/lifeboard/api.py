"""HTTP API for uploading boards and querying their evolution.

Routes mirror the board service:
    POST /gameoflife                                   upload a board
    GET  /gameoflife/{board_id}                        current stored state
    GET  /gameoflife/next/{board_id}                   advance one generation (persisted)
    GET  /gameoflife/{board_id}/generations/{n}        state after n generations (not persisted)
    GET  /gameoflife/{board_id}/final/{max_attempts}   run to a still life (persisted)

Errors are returned as {"error": message}.
"""

from typing import List, Optional
import logging

from fastapi import APIRouter, FastAPI, Path, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictBool

from .config import LifeConfig
from .core.errors import BoardNotFoundError, InvalidBoardError, MaxAttemptsExceededError, StorageError
from .core.grid import Grid
from .service import GameOfLifeService
from .storage import BoardRecord, FileBoardStore, InMemoryBoardStore

logger = logging.getLogger(__name__)


class BoardUpload(BaseModel):
    """Request body for a new board: rows of booleans."""
    state: List[List[StrictBool]]


class BoardCreated(BaseModel):
    board_id: str


class BoardState(BaseModel):
    """A board's state at a given generation."""
    board_id: str
    generation: int
    state: List[List[bool]]


def _board_state(record: BoardRecord) -> BoardState:
    return BoardState(board_id=record.board_id, generation=record.generation, state=record.grid.to_rows())


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def build_router(service: GameOfLifeService) -> APIRouter:
    """Create the /gameoflife routes bound to a service instance."""
    router = APIRouter(prefix="/gameoflife")
    limit = service.config.max_generations

    @router.post("", response_model=BoardCreated, status_code=201)
    def upload_board(body: BoardUpload) -> BoardCreated:
        logger.info("Received request to upload new board")
        grid = Grid.from_rows(body.state)
        board_id = service.upload_board(grid)
        return BoardCreated(board_id=board_id)

    @router.get("/next/{board_id}", response_model=BoardState)
    def next_state(board_id: str) -> BoardState:
        logger.info(f"Received request for next state of board {board_id}")
        return _board_state(service.next_state(board_id))

    @router.get("/{board_id}", response_model=BoardState)
    def get_board(board_id: str) -> BoardState:
        return _board_state(service.get_board(board_id))

    @router.get("/{board_id}/generations/{generations}", response_model=BoardState)
    def state_after(board_id: str, generations: int = Path(..., ge=0, le=limit)) -> BoardState:
        logger.info(f"Received request for state after {generations} generations of board {board_id}")
        return _board_state(service.state_after(board_id, generations))

    @router.get("/{board_id}/final/{max_attempts}", response_model=BoardState)
    def final_state(board_id: str, max_attempts: int = Path(..., ge=0, le=limit)) -> BoardState:
        logger.info(f"Received request for final state of board {board_id} with max attempts {max_attempts}")
        return _board_state(service.final_state(board_id, max_attempts))

    return router


def create_app(service: Optional[GameOfLifeService] = None,
               config: Optional[LifeConfig] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        service: Board service to expose (built from config if None)
        config: Used only when service is None; file storage is used if
            config.storage_dir is set, memory otherwise
    """
    if service is None:
        config = config or LifeConfig.from_env()
        if config.storage_dir is not None:
            store = FileBoardStore(config.storage_dir)
        else:
            store = InMemoryBoardStore()
        service = GameOfLifeService(store=store, config=config)

    app = FastAPI(title="lifeboard", description="Conway's Game of Life board service")
    app.state.service = service
    app.include_router(build_router(service))

    @app.exception_handler(InvalidBoardError)
    async def invalid_board_handler(request: Request, exc: InvalidBoardError) -> JSONResponse:
        logger.warning(f"Rejected board on {request.url.path}: {exc}")
        return _error(400, str(exc))

    @app.exception_handler(BoardNotFoundError)
    async def not_found_handler(request: Request, exc: BoardNotFoundError) -> JSONResponse:
        logger.warning(f"Board {exc.board_id} not found")
        return _error(404, str(exc))

    @app.exception_handler(MaxAttemptsExceededError)
    async def max_attempts_handler(request: Request, exc: MaxAttemptsExceededError) -> JSONResponse:
        logger.warning(str(exc))
        return _error(422, str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error(f"Storage failure on {request.url.path}: {exc}")
        return _error(500, "An error occurred while processing your request.")

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning(f"Malformed request on {request.url.path}: {exc}")
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(f"Invalid request on {request.url.path}: {exc.errors()}")
        return _error(400, "Invalid request: " + "; ".join(err.get("msg", "") for err in exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unexpected error on {request.url.path}", exc_info=exc)
        return _error(500, "An error occurred while processing your request.")

    return app
