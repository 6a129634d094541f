"""
Precomputed first replies for the 3x3 connection game.

Keys are occupancy patterns ('#' occupied, '.' empty, row-major) so the
same entry serves whichever side the engine plays.
"""

from typing import Dict, Optional

from grid_duel.config import OPENING_BOOK_CONFIG
from grid_duel.game.board import EMPTY, Board, Cell
from grid_duel.game.game import Game


def occupancy_pattern(board: Board) -> str:
    return ''.join('.' if value == EMPTY else '#' for value in board.cells.ravel())


def _single_piece(size: int, row: int, col: int) -> str:
    cells = ['.'] * (size * size)
    cells[row * size + col] = '#'
    return ''.join(cells)


class OpeningBook:
    """
    Read-only table of known-good early replies, filled at construction.

    Args:
        board_size: the only connection-board size the book covers
        min_legal_moves: consult the book only while at least this many
            moves remain
    """

    def __init__(
        self,
        board_size: int = OPENING_BOOK_CONFIG['board_size'],
        min_legal_moves: int = OPENING_BOOK_CONFIG['min_legal_moves'],
    ):
        self.board_size = board_size
        self.min_legal_moves = min_legal_moves
        self._entries: Dict[str, Cell] = self._build(board_size)

    @staticmethod
    def _build(size: int) -> Dict[str, Cell]:
        center = (size // 2, size // 2)
        last = size - 1

        entries = {'.' * (size * size): center}
        for row in range(size):
            for col in range(size):
                if (row, col) == center:
                    # Center taken: answer in a corner
                    entries[_single_piece(size, row, col)] = (0, 0)
                elif row in (0, last) or col in (0, last):
                    entries[_single_piece(size, row, col)] = center
        return entries

    def __len__(self):
        return len(self._entries)

    def lookup(self, game: Game, board: Board) -> Optional[Cell]:
        """
        Book reply for `board`, or None when the book does not apply.

        The book is skipped for other boards, once too few moves remain, or
        if the stored reply cell is already taken.
        """
        if board.gravity or board.size != self.board_size:
            return None
        if len(game.legal_moves(board)) < self.min_legal_moves:
            return None

        move = self._entries.get(occupancy_pattern(board))
        if move is None or board.at(*move) != EMPTY:
            return None
        return move
