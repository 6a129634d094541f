"""
Move ordering heuristics for alpha-beta search.

Good move ordering is critical for alpha-beta pruning efficiency. The goal is to
search the best moves first to maximize cutoffs.

Ordering priority (high to low):
1. Winning moves (immediate K-in-a-row for the side to move)
2. Connection game: the center cell, then corners
   Drop game: columns closest to the center (3, 2, 4, 1, 5, 0, 6)
3. Remaining moves in legal_moves order

The sort is stable, so equal-priority moves keep their row-major /
left-to-right order and the search stays reproducible.
"""

from typing import List, Sequence

from grid_duel.game.board import Board, Move, Side
from grid_duel.game.game import Game


WIN_PRIORITY = 1000
CENTER_PRIORITY = 10
CORNER_PRIORITY = 5


def move_priority(game: Game, board: Board, move: Move, side: Side) -> int:
    score = 0
    if game.is_winning_move(board, move, side):
        score += WIN_PRIORITY

    if board.gravity:
        # Center columns better in Connect Four
        score += board.center_column - abs(move - board.center_column)
    else:
        if move == board.center:
            score += CENTER_PRIORITY
        if move in board.corners:
            score += CORNER_PRIORITY
    return score


def order_moves(game: Game, board: Board, moves: Sequence[Move], side: Side) -> List[Move]:
    """
    Sort moves best-first for `side` to move.

    Args:
        game: rules for the board
        board: current position
        moves: legal moves in legal_moves order
        side: side to move

    Returns:
        New list, highest priority first
    """
    return sorted(moves, key=lambda move: -move_priority(game, board, move, side))
