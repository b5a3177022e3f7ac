#!/usr/bin/env python3
"""
lifeboard command line

    lifeboard run BOARD.json --generations 10
    lifeboard run BOARD.json --until-stable --max-attempts 500
    lifeboard pattern glider --width 10 --height 10 --x 1 --y 1 --output board.json
    lifeboard serve --port 8000

Board files hold a JSON array of rows of booleans.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional
import logging

from .codec import grid_from_json, grid_to_json
from .config import LifeConfig
from .core.engine import LifeEngine
from .core.errors import LifeBoardError
from .core.patterns import PATTERNS, get_pattern, place_pattern
from .core.validator import BoardValidator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lifeboard", description="Conway's Game of Life board runner")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LIFEBOARD_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Advance a board stored in a JSON file")
    run.add_argument("board", type=Path, help="Path to board JSON file")
    mode = run.add_mutually_exclusive_group()
    mode.add_argument("--generations", type=int, default=1, help="Number of generations to advance")
    mode.add_argument("--until-stable", action="store_true", help="Run until the board stops changing")
    run.add_argument("--max-attempts", type=int, default=None, help="Step budget (only valid with --until-stable)")
    run.add_argument("--output", type=Path, default=None, help="Write resulting board JSON here")

    pattern = subparsers.add_parser("pattern", help="Write a seed board containing a classic pattern")
    pattern.add_argument("name", choices=sorted(PATTERNS), help="Pattern name")
    pattern.add_argument("--width", type=int, default=10, help="Board width")
    pattern.add_argument("--height", type=int, default=10, help="Board height")
    pattern.add_argument("--x", type=int, default=1, help="Pattern top-left column")
    pattern.add_argument("--y", type=int, default=1, help="Pattern top-left row")
    pattern.add_argument("--output", type=Path, default=None, help="Output file (stdout if omitted)")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")

    return parser


def run_board(args: argparse.Namespace, config: LifeConfig) -> int:
    """Load, validate and advance a board file."""
    if args.max_attempts is not None and not args.until_stable:
        raise ValueError("--max-attempts requires --until-stable")

    grid = grid_from_json(args.board.read_text())
    BoardValidator(config).validate(grid)

    engine = LifeEngine()
    if args.until_stable:
        max_attempts = args.max_attempts if args.max_attempts is not None else config.default_max_attempts
        result = engine.advance_until_stable(grid, max_attempts, board_id=str(args.board))
        final, generations = result.grid, result.attempts
        summary = f"Stable after {generations} generations"
    else:
        if args.generations < 0:
            raise ValueError(f"--generations must be non-negative, got {args.generations}")
        final, generations = engine.advance(grid, args.generations), args.generations
        summary = f"Advanced {generations} generations"

    logger.info(f"{summary}: {final.count_alive()} live cells on {final.width}x{final.height} board")

    if args.output is not None:
        args.output.write_text(grid_to_json(final))
        logger.info(f"Result saved to: {args.output}")

    print(final)
    print(f"{summary}, {final.count_alive()} live cells")
    return 0


def write_pattern(args: argparse.Namespace) -> int:
    grid = place_pattern(get_pattern(args.name), args.width, args.height, args.x, args.y)
    payload = grid_to_json(grid)

    if args.output is None:
        print(payload)
    else:
        args.output.write_text(payload)
        logger.info(f"Pattern {args.name} saved to: {args.output}")
    return 0


def serve(args: argparse.Namespace, config: LifeConfig) -> int:
    import uvicorn
    from .api import create_app

    uvicorn.run(create_app(config=config), host=args.host, port=args.port, log_level=config.log_level.lower())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = LifeConfig.from_env()
        if args.log_level:
            config.log_level = args.log_level.upper()

        logging.basicConfig(level=config.log_level, format='%(asctime)s - %(levelname)s - %(message)s')

        if args.command == "run":
            return run_board(args, config)
        if args.command == "pattern":
            return write_pattern(args)
        return serve(args, config)

    except (LifeBoardError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
