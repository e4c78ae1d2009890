"""
Grid model for textual mazes.

Purpose: Parse a fixed-size character maze into typed cells and locate
    the unique start and end cells.

Inputs:
    - Ordered sequence of equal-length strings
    - Symbol table (wall, open, start, end characters)

Outputs:
    - Immutable Grid of CellKind codes
    - (start, end) cells as (column, row) tuples

Params:
    symbols: Dict[str, str] - one character per cell kind
"""

import numpy as np
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple


Cell = Tuple[int, int]  # (column, row)

DEFAULT_SYMBOLS = {
    "wall": "x",
    "open": " ",
    "start": "s",
    "end": "e",
}


class GridError(ValueError):
    """Base class for maze construction errors."""


class MalformedGridError(GridError):
    """Raised when rows are missing, ragged, or contain unknown symbols."""


class MissingEndpointError(GridError):
    """Raised when the maze does not have exactly one start and one end."""


class CellKind(Enum):
    """Cell kinds; values are the codes stored in the grid array."""
    WALL = 0
    OPEN = 1
    START = 2
    END = 3


class Grid:
    """Immutable 2-D array of cell kinds."""

    def __init__(self, kinds: np.ndarray, rows: Sequence[str], symbols: Optional[Dict[str, str]] = None):
        """
        Initialize grid.

        Args:
            kinds: (height, width) integer array of CellKind values
            rows: Source rows, kept for frame rendering
            symbols: Symbol table the rows were written with
        """
        self.kinds = kinds.copy()
        self.kinds.setflags(write=False)
        self.rows = tuple(rows)
        self.symbols = dict(symbols or DEFAULT_SYMBOLS)
        self.height, self.width = self.kinds.shape

    @property
    def shape(self) -> Tuple[int, int]:
        return self.kinds.shape

    def in_bounds(self, cell: Cell) -> bool:
        """Check if (column, row) lies inside the grid."""
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def kind_at(self, cell: Cell) -> CellKind:
        """Cell kind at (column, row). Caller checks bounds."""
        x, y = cell
        return CellKind(int(self.kinds[y, x]))

    def is_wall(self, cell: Cell) -> bool:
        x, y = cell
        return self.kinds[y, x] == CellKind.WALL.value

    def cells_of(self, kind: CellKind):
        """All cells of a kind, in row-major order."""
        ys, xs = np.nonzero(self.kinds == kind.value)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def __eq__(self, other):
        return isinstance(other, Grid) and self.rows == other.rows and self.symbols == other.symbols

    def __hash__(self):
        return hash(self.rows)

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"


def parse(raw_rows: Sequence[str], symbols: Optional[Dict[str, str]] = None) -> Grid:
    """
    Parse maze rows into a Grid.

    Args:
        raw_rows: Ordered sequence of equal-length strings
        symbols: Optional symbol table overriding DEFAULT_SYMBOLS

    Returns:
        Grid with exactly one start and one end

    Raises:
        MalformedGridError: No rows, ragged rows, or unknown symbols
        MissingEndpointError: Not exactly one start and one end
    """
    table = dict(DEFAULT_SYMBOLS)
    if symbols:
        table.update(symbols)

    for name, char in table.items():
        if len(char) != 1:
            raise MalformedGridError(f"Symbol for {name} must be a single character, got {char!r}")
    if len(set(table.values())) != len(table):
        raise MalformedGridError(f"Symbols must be distinct: {table}")

    rows = list(raw_rows)
    if not rows:
        raise MalformedGridError("Maze has no rows")

    width = len(rows[0])
    if width == 0:
        raise MalformedGridError("Maze rows are empty")

    code_of = {
        table["wall"]: CellKind.WALL.value,
        table["open"]: CellKind.OPEN.value,
        table["start"]: CellKind.START.value,
        table["end"]: CellKind.END.value,
    }

    kinds = np.empty((len(rows), width), dtype=np.int8)
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MalformedGridError(
                f"Row {y} has length {len(row)}, expected {width}"
            )
        for x, char in enumerate(row):
            if char not in code_of:
                raise MalformedGridError(f"Unknown symbol {char!r} at ({x}, {y})")
            kinds[y, x] = code_of[char]

    grid = Grid(kinds, rows, table)
    locate_endpoints(grid)  # fail before any search
    return grid


def locate_endpoints(grid: Grid) -> Tuple[Cell, Cell]:
    """
    Find the start and end cells with a full scan.

    Args:
        grid: Parsed grid

    Returns:
        (start, end) as (column, row) tuples

    Raises:
        MissingEndpointError: Not exactly one start and one end
    """
    starts = grid.cells_of(CellKind.START)
    ends = grid.cells_of(CellKind.END)

    if len(starts) != 1:
        raise MissingEndpointError(
            f"Maze must have exactly one start ({grid.symbols['start']!r}), found {len(starts)}"
        )
    if len(ends) != 1:
        raise MissingEndpointError(
            f"Maze must have exactly one end ({grid.symbols['end']!r}), found {len(ends)}"
        )

    return starts[0], ends[0]
