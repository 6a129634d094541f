"""
Immutable board value shared by both games.

Cells live in a read-only numpy int8 array:
    0  = empty
    1  = Side.A (rendered 'X')
    -1 = Side.B (rendered 'O')

A board also carries its win length and whether pieces fall under gravity
(drop game) or are placed freely (connection game). Every move produces a new
Board; nothing ever writes into an existing one, so a search can explore
siblings from the same parent safely.
"""

from enum import IntEnum
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from grid_duel.exceptions import InvalidBoard


EMPTY = 0

# Connection game size limits
MIN_CONNECTION_SIZE = 3
MAX_CONNECTION_SIZE = 7

# Drop game (fixed)
DROP_ROWS = 6
DROP_COLS = 7
DROP_WIN_LENGTH = 4

Cell = Tuple[int, int]
Move = Union[Cell, int]


class Side(IntEnum):
    """One of the two players. Values double as cell values."""
    A = 1
    B = -1

    @property
    def opponent(self) -> "Side":
        return Side(-self.value)

    @property
    def symbol(self) -> str:
        return 'X' if self is Side.A else 'O'

    @classmethod
    def parse(cls, value) -> "Side":
        """Accept a Side, 1/-1, or one of 'A', 'B', 'X', 'O'."""
        if isinstance(value, Side):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in ('A', 'X'):
                return cls.A
            if key in ('B', 'O'):
                return cls.B
        elif isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            if int(value) in (1, -1):
                return cls(int(value))
        raise ValueError(f"Unknown side: {value!r}")


_CHAR_TO_VALUE = {'.': 0, '-': 0, ' ': 0, '0': 0, 'X': 1, 'O': -1}
_VALUE_TO_CHAR = {0: '.', 1: 'X', -1: 'O'}


def win_length_for(size: int) -> int:
    """Run length needed to win an N x N connection game."""
    if size <= 5:
        return 3
    if size == 6:
        return 4
    return 5


def _parse_cell(value) -> int:
    if isinstance(value, str):
        try:
            return _CHAR_TO_VALUE[value.upper()]
        except KeyError:
            raise InvalidBoard(f"Unknown cell symbol: {value!r}") from None
    if value is None:
        return EMPTY
    return int(value)


class Board:
    """
    Grid of cells plus the metadata needed to judge it.

    Attributes:
        cells: read-only (rows, cols) int8 array
        win_length: K, the number of aligned pieces that wins
        gravity: True for the drop game (moves are columns)
    """

    __slots__ = ("cells", "win_length", "gravity", "_signature")

    def __init__(self, cells, win_length: Optional[int] = None, gravity: bool = False):
        grid = np.array(cells, dtype=np.int8)
        if grid.ndim != 2:
            raise InvalidBoard(f"Board must be two-dimensional, got shape {grid.shape}")
        if not np.isin(grid, (-1, 0, 1)).all():
            raise InvalidBoard("Cell values must be 0, 1 or -1")

        rows, cols = grid.shape
        if gravity:
            if (rows, cols) != (DROP_ROWS, DROP_COLS):
                raise InvalidBoard(f"Drop board must be {DROP_ROWS}x{DROP_COLS}, got {rows}x{cols}")
            expected = DROP_WIN_LENGTH
        else:
            if rows != cols:
                raise InvalidBoard(f"Connection board must be square, got {rows}x{cols}")
            if not MIN_CONNECTION_SIZE <= rows <= MAX_CONNECTION_SIZE:
                raise InvalidBoard(
                    f"Connection board size must be {MIN_CONNECTION_SIZE}..{MAX_CONNECTION_SIZE}, got {rows}"
                )
            expected = win_length_for(rows)

        if win_length is not None and win_length != expected:
            raise InvalidBoard(f"Win length for this board is {expected}, got {win_length}")

        grid.setflags(write=False)
        self.cells = grid
        self.win_length = expected
        self.gravity = gravity
        self._signature = None

    @classmethod
    def _trusted(cls, cells: np.ndarray, win_length: int, gravity: bool) -> "Board":
        # Skips validation; only used for boards derived from a valid board.
        board = object.__new__(cls)
        cells.setflags(write=False)
        board.cells = cells
        board.win_length = win_length
        board.gravity = gravity
        board._signature = None
        return board

    @classmethod
    def empty_connection(cls, size: int) -> "Board":
        return cls(np.zeros((size, size), dtype=np.int8))

    @classmethod
    def empty_drop(cls) -> "Board":
        return cls(np.zeros((DROP_ROWS, DROP_COLS), dtype=np.int8), gravity=True)

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Union[str, Sequence]],
        win_length: Optional[int] = None,
        gravity: bool = False,
    ) -> "Board":
        """
        Build a board from rows of ints or symbols.

        Each row may be a string such as "X.O" or a sequence of 0/1/-1,
        None, or single-character symbols.
        """
        grid = [[_parse_cell(value) for value in row] for row in rows]
        return cls(grid, win_length=win_length, gravity=gravity)

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self.cells.shape[0]

    @property
    def cols(self) -> int:
        return self.cells.shape[1]

    @property
    def size(self) -> int:
        """Side length N of a connection board (row count for the drop game)."""
        return self.rows

    @property
    def center(self) -> Optional[Cell]:
        """Exact center cell, or None when a dimension is even."""
        if self.rows % 2 == 1 and self.cols % 2 == 1:
            return (self.rows // 2, self.cols // 2)
        return None

    @property
    def center_column(self) -> int:
        return self.cols // 2

    @property
    def corners(self) -> Tuple[Cell, Cell, Cell, Cell]:
        last_row, last_col = self.rows - 1, self.cols - 1
        return ((0, 0), (0, last_col), (last_row, 0), (last_row, last_col))

    def empty_count(self) -> int:
        return int(np.count_nonzero(self.cells == EMPTY))

    def piece_count(self) -> int:
        return self.rows * self.cols - self.empty_count()

    def at(self, row: int, col: int) -> int:
        return int(self.cells[row, col])

    def signature(self) -> str:
        """
        Canonical string encoding of the position.

        Dimensions, win length and game kind prefix the row-major cell
        string, so boards of different games never collide.
        """
        if self._signature is None:
            kind = 'g' if self.gravity else 'f'
            body = ''.join(_VALUE_TO_CHAR[int(v)] for v in self.cells.ravel())
            self._signature = f"{self.rows}x{self.cols}k{self.win_length}{kind}:{body}"
        return self._signature

    def with_cell(self, row: int, col: int, side: Side) -> "Board":
        """New board with one extra piece. Callers validate the target first."""
        grid = self.cells.copy()
        grid[row, col] = int(side)
        return Board._trusted(grid, self.win_length, self.gravity)

    def render(self) -> str:
        return '\n'.join(
            ''.join(_VALUE_TO_CHAR[int(v)] for v in row) for row in self.cells
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.signature() == other.signature()

    def __hash__(self) -> int:
        return hash(self.signature())

    def __repr__(self) -> str:
        kind = "drop" if self.gravity else "connection"
        return f"Board({kind} {self.rows}x{self.cols}, k={self.win_length}, pieces={self.piece_count()})"
