"""JSON encoding of boards.

On the wire a board is a nested array of booleans, one inner array per row:
[[false, true, false], [false, true, false], [false, true, false]]
"""

import json

from .core.grid import Grid


def grid_to_json(grid: Grid) -> str:
    """Serialize a grid to a JSON array of rows."""
    return json.dumps(grid.to_rows())


def grid_from_json(payload: str) -> Grid:
    """Deserialize a grid from a JSON array of rows.

    Raises:
        ValueError: If the payload is not valid JSON or not a rectangular boolean matrix
    """
    try:
        rows = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"Board payload is not valid JSON: {e}") from e
    return Grid.from_rows(rows)
