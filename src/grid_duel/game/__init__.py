"""
Board model for the connection game and the drop game.
"""

from grid_duel.game.board import EMPTY, Board, Side, win_length_for
from grid_duel.game.game import Game
from grid_duel.game.connection import ConnectionGame
from grid_duel.game.connect_four import DropGame


def game_for(board: Board) -> Game:
    """Rules object matching a board's kind and size."""
    if board.gravity:
        return DropGame()
    return ConnectionGame(board.size)


__all__ = [
    'EMPTY',
    'Board',
    'Side',
    'win_length_for',
    'Game',
    'ConnectionGame',
    'DropGame',
    'game_for',
]
