import numpy as np

from grid_duel.exceptions import IllegalMove
from grid_duel.game.board import DROP_COLS, DROP_ROWS, DROP_WIN_LENGTH, EMPTY, Board
from grid_duel.game.game import Game


class DropGame(Game):
    """
    Connect Four (four in a row) with gravity.

    Board: 6 rows x 7 columns, row 0 is the TOP and row 5 the BOTTOM.
    Win condition: 4 in a row (horizontal, vertical, or diagonal)
    Moves: column index (0-6) - the piece drops to the lowest empty row
    """

    gravity = True

    def __init__(self):
        super().__init__(DROP_ROWS, DROP_COLS, DROP_WIN_LENGTH)

    def __repr__(self):
        return f"DropGame({self.row_count}x{self.column_count}, win={self.win_length})"

    def initial_board(self):
        return Board.empty_drop()

    def legal_moves(self, board):
        """Columns whose top cell is empty, left to right."""
        self.check_board(board)
        return [col for col in range(self.column_count) if board.cells[0, col] == EMPTY]

    def landing_cell(self, board, move):
        """
        Lowest empty row of the column.

        Raises IllegalMove for a non-integer move, a column off the board,
        or a full column.
        """
        if not isinstance(move, (int, np.integer)) or isinstance(move, bool):
            raise IllegalMove(f"Drop game moves are column indices, got {move!r}")

        column = int(move)
        if not 0 <= column < self.column_count:
            raise IllegalMove(f"Column {column} is off the board")

        for row in range(self.row_count - 1, -1, -1):
            if board.cells[row, column] == EMPTY:
                return row, column

        raise IllegalMove(f"Column {column} is full")

    def move_for_cell(self, cell):
        return int(cell[1])
