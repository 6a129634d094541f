"""
Unit tests for the static evaluator and move ordering.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from grid_duel.engine.decision import Personality
from grid_duel.engine.evaluator import evaluate
from grid_duel.engine.move_ordering import order_moves
from grid_duel.game import Board, ConnectionGame, DropGame, Side


class TestConnectionEvaluation:

    def test_empty_board_is_neutral(self):
        assert evaluate(Board.empty_connection(3), Side.A) == 0

    def test_center_bonus_by_personality(self):
        board = Board.from_rows(["...", ".X.", "..."])
        assert evaluate(board, Side.A, Personality.BALANCED) == 3
        assert evaluate(board, Side.A, Personality.AGGRESSIVE) == 5
        assert evaluate(board, Side.A, Personality.DEFENSIVE) == 3

    def test_opponent_center_penalty_by_personality(self):
        board = Board.from_rows(["...", ".X.", "..."])
        assert evaluate(board, Side.B, Personality.BALANCED) == -3
        assert evaluate(board, Side.B, Personality.AGGRESSIVE) == -3
        assert evaluate(board, Side.B, Personality.DEFENSIVE) == -5

    def test_corners(self):
        board = Board.from_rows(["X.O", "...", "X.."])
        assert evaluate(board, Side.A) == 2
        assert evaluate(board, Side.B) == -2

    def test_even_board_has_no_center_term(self):
        board = Board.from_rows(["....", ".X..", "..O.", "...."])
        assert evaluate(board, Side.A) == 0


class TestDropEvaluation:

    def test_empty_board_is_neutral(self):
        assert evaluate(Board.empty_drop(), Side.A) == 0

    def test_single_center_piece(self):
        game = DropGame()
        board = game.apply(game.initial_board(), 3, Side.A)
        # Center column +3, plus +1 for each of the 7 windows through (5, 3)
        assert evaluate(board, Side.A) == 10
        # Opponent view: -5 for each of those windows
        assert evaluate(board, Side.B) == -35

    def test_open_three_outweighs_center(self):
        game = DropGame()
        board = game.initial_board()
        for column in (0, 1, 2):
            board = game.apply(board, column, Side.B)
        assert evaluate(board, Side.A) < -200


class TestMoveOrdering:

    def test_winning_move_first(self):
        game = DropGame()
        board = game.initial_board()
        for column in (0, 1, 2):
            board = game.apply(board, column, Side.A)
        ordered = order_moves(game, board, game.legal_moves(board), Side.A)
        assert ordered[0] == 3

    def test_center_columns_first(self):
        game = DropGame()
        board = game.initial_board()
        ordered = order_moves(game, board, game.legal_moves(board), Side.A)
        assert ordered == [3, 2, 4, 1, 5, 0, 6]

    def test_center_then_corners(self):
        game = ConnectionGame(3)
        board = game.initial_board()
        ordered = order_moves(game, board, game.legal_moves(board), Side.A)
        assert ordered[0] == (1, 1)
        assert ordered[1:5] == [(0, 0), (0, 2), (2, 0), (2, 2)]
        assert ordered[5:] == [(0, 1), (1, 0), (1, 2), (2, 1)]
