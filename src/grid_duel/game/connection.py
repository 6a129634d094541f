import numpy as np

from grid_duel.exceptions import IllegalMove, InvalidBoard
from grid_duel.game.board import (
    EMPTY,
    MAX_CONNECTION_SIZE,
    MIN_CONNECTION_SIZE,
    Board,
    win_length_for,
)
from grid_duel.game.game import Game


class ConnectionGame(Game):
    """
    N x N board, pieces placed on any empty cell, K in a row wins.

    K is derived from N: 3 for N <= 5, 4 for N = 6, 5 for N = 7.
    Moves are (row, col) tuples.
    """

    gravity = False

    def __init__(self, size: int = 3):
        if not MIN_CONNECTION_SIZE <= size <= MAX_CONNECTION_SIZE:
            raise InvalidBoard(
                f"Connection board size must be {MIN_CONNECTION_SIZE}..{MAX_CONNECTION_SIZE}, got {size}"
            )
        super().__init__(size, size, win_length_for(size))
        self.size = size

    def __repr__(self):
        return f"ConnectionGame({self.size}x{self.size}, win={self.win_length})"

    def initial_board(self):
        return Board.empty_connection(self.size)

    def legal_moves(self, board):
        self.check_board(board)
        return [(int(r), int(c)) for r, c in np.argwhere(board.cells == EMPTY)]

    def landing_cell(self, board, move):
        if (
            not isinstance(move, (tuple, list))
            or len(move) != 2
            or not all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in move)
        ):
            raise IllegalMove(f"Connection game moves are (row, col) pairs, got {move!r}")

        row, col = int(move[0]), int(move[1])
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IllegalMove(f"Cell ({row}, {col}) is off the {self.size}x{self.size} board")
        if board.cells[row, col] != EMPTY:
            raise IllegalMove(f"Cell ({row}, {col}) is already occupied")
        return row, col

    def move_for_cell(self, cell):
        return (int(cell[0]), int(cell[1]))
