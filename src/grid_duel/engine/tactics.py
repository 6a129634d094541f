"""
One- and two-ply tactical shortcuts.

Strategy used by the decision engine before any search:
1. If I can win right now, do it
2. If the opponent could win next turn, take that cell/column first
3. Look for forks: a move after which two different follow-ups each win
"""

from typing import Optional, Sequence

from grid_duel.game.board import Board, Move, Side
from grid_duel.game.game import Game


def find_immediate_win(game: Game, board: Board, side: Side) -> Optional[Move]:
    """
    First legal move (in legal_moves order) after which `side` has won.

    Returns None when no move wins immediately.
    """
    for move in game.legal_moves(board):
        next_board = game.apply(board, move, side)
        if game.winner(next_board) == side:
            return move
    return None


def find_immediate_block(game: Game, board: Board, side_to_protect: Side) -> Optional[Move]:
    """
    Move that `side_to_protect` must play to stop the opponent winning next turn.

    In both games the blocking move is the very move the opponent would win
    with: the same cell, or the same column (the piece lands on the same row).
    """
    return find_immediate_win(game, board, side_to_protect.opponent)


def count_winning_moves(game: Game, board: Board, side: Side) -> int:
    """Number of distinct legal moves that would each win for `side`."""
    return sum(
        1 for move in game.legal_moves(board)
        if game.winner(game.apply(board, move, side)) == side
    )


def find_fork(
    game: Game,
    board: Board,
    side: Side,
    moves: Optional[Sequence[Move]] = None,
) -> Optional[Move]:
    """
    First candidate after which `side` threatens two or more distinct wins.

    Args:
        game: rules for the board
        board: current position
        side: side the fork is built for
        moves: candidates in scan order (defaults to every legal move)

    Returns:
        The first forking move found, or None. Multiple forks are not ranked.
    """
    candidates = game.legal_moves(board) if moves is None else moves
    for move in candidates:
        next_board = game.apply(board, move, side)
        if game.winner(next_board) is not None:
            continue
        if count_winning_moves(game, next_board, side) >= 2:
            return move
    return None
