from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import numpy as np

from grid_duel.exceptions import InvalidBoard
from grid_duel.game.board import EMPTY, Board, Cell, Move, Side


# Scan order used by winner() and winning_line(): rows, columns,
# down-right diagonals, down-left diagonals.
DIRECTIONS = (
    (0, 1),
    (1, 0),
    (1, 1),
    (1, -1),
)


def line_window(cells: np.ndarray, dr: int, dc: int, offset: int, k: int) -> np.ndarray:
    """
    View of the offset-th cell of every length-k run in direction (dr, dc).

    Element [i, j] of each view belongs to the run starting at
    (i, j + c_min), where c_min is k-1 for down-left runs and 0 otherwise.
    """
    rows, cols = cells.shape
    n_rows = rows - dr * (k - 1)
    n_cols = cols - abs(dc) * (k - 1)
    c_min = (k - 1) if dc < 0 else 0
    r = dr * offset
    c = c_min + dc * offset
    return cells[r:r + n_rows, c:c + n_cols]


class Game(ABC):
    """
    Abstract rules of a K-in-a-row game played on a Board.

    Every method is a pure function of its arguments; boards are never
    mutated.
    """

    gravity = False

    def __init__(self, row_count: int, column_count: int, win_length: int):
        self.row_count = row_count
        self.column_count = column_count
        self.win_length = win_length

    @abstractmethod
    def initial_board(self) -> Board:
        """Returns the empty starting board."""

    @abstractmethod
    def legal_moves(self, board: Board) -> List[Move]:
        """Returns every legal move in a stable order."""

    @abstractmethod
    def landing_cell(self, board: Board, move: Move) -> Cell:
        """
        Returns the (row, col) the move would occupy.

        Raises IllegalMove if the move is malformed, off the board, or
        targets an occupied cell / full column.
        """

    @abstractmethod
    def move_for_cell(self, cell: Cell) -> Move:
        """Inverse of landing_cell for a legal move."""

    def apply(self, board: Board, move: Move, side: Side) -> Board:
        """Returns a new board with `move` played by `side`."""
        self.check_board(board)
        row, col = self.landing_cell(board, move)
        return board.with_cell(row, col, side)

    def winner(self, board: Board) -> Optional[Side]:
        line = self.winning_line(board)
        return line[0] if line is not None else None

    def winning_line(self, board: Board) -> Optional[Tuple[Side, List[Cell]]]:
        """
        First completed run of K same-side cells, with its cells.

        Direction order is rows, columns, down-right, down-left; within a
        direction, the run whose start cell comes first in row-major order.
        """
        cells = board.cells
        k = self.win_length
        for dr, dc in DIRECTIONS:
            if self.row_count - dr * (k - 1) <= 0 or self.column_count - abs(dc) * (k - 1) <= 0:
                continue
            first = line_window(cells, dr, dc, 0, k)
            run = first != EMPTY
            for offset in range(1, k):
                run &= line_window(cells, dr, dc, offset, k) == first
            hits = np.argwhere(run)
            if len(hits):
                i, j = (int(v) for v in hits[0])
                side = Side(int(first[i, j]))
                start_col = j + ((k - 1) if dc < 0 else 0)
                line = [(i + dr * step, start_col + dc * step) for step in range(k)]
                return side, line
        return None

    def is_full(self, board: Board) -> bool:
        return not np.any(board.cells == EMPTY)

    def is_terminal(self, board: Board) -> bool:
        return self.winner(board) is not None or self.is_full(board)

    def check_win(self, board: Board, row: int, col: int) -> bool:
        """
        Cheap test: does the piece at (row, col) sit on a winning run?

        Only the four lines through that cell are inspected.
        """
        cells = board.cells
        player = cells[row, col]
        if player == EMPTY:
            return False

        for dr, dc in DIRECTIONS:
            count = 1
            # Positive direction
            for i in range(1, self.win_length):
                r, c = row + dr * i, col + dc * i
                if 0 <= r < self.row_count and 0 <= c < self.column_count and cells[r, c] == player:
                    count += 1
                else:
                    break
            # Negative direction
            for i in range(1, self.win_length):
                r, c = row - dr * i, col - dc * i
                if 0 <= r < self.row_count and 0 <= c < self.column_count and cells[r, c] == player:
                    count += 1
                else:
                    break

            if count >= self.win_length:
                return True

        return False

    def is_winning_move(self, board: Board, move: Move, side: Side) -> bool:
        """Would `side` complete a run by playing `move`? Board is not modified."""
        row, col = self.landing_cell(board, move)
        return self.check_win(board.with_cell(row, col, side), row, col)

    def check_board(self, board: Board):
        if board.gravity != self.gravity or board.cells.shape != (self.row_count, self.column_count):
            raise InvalidBoard(f"{board!r} does not belong to {self!r}")
