"""
Unit tests for the board model.

Tests verify:
1. Win detection in rows, columns and both diagonals
2. Illegal moves raise IllegalMove and never change the board
3. Drop-game gravity (pieces land on the lowest empty row)
4. Board validation and signatures
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from grid_duel.exceptions import IllegalMove, InvalidBoard
from grid_duel.game import Board, ConnectionGame, DropGame, Side, game_for, win_length_for


class TestSide:

    def test_opponent(self):
        assert Side.A.opponent is Side.B
        assert Side.B.opponent is Side.A

    def test_parse(self):
        assert Side.parse('x') is Side.A
        assert Side.parse('O') is Side.B
        assert Side.parse(-1) is Side.B
        with pytest.raises(ValueError):
            Side.parse('Z')
        with pytest.raises(ValueError):
            Side.parse(True)


class TestBoard:

    def test_win_length_for_size(self):
        assert [win_length_for(n) for n in range(3, 8)] == [3, 3, 3, 4, 5]

    def test_from_rows(self):
        board = Board.from_rows(["X.O", "...", "..X"])
        assert board.at(0, 0) == Side.A
        assert board.at(0, 2) == Side.B
        assert board.piece_count() == 3
        assert board.empty_count() == 6
        assert board.render() == "X.O\n...\n..X"

    def test_cells_are_read_only(self):
        board = Board.empty_connection(3)
        with pytest.raises(ValueError):
            board.cells[0, 0] = 1

    def test_rejects_bad_shapes(self):
        with pytest.raises(InvalidBoard):
            Board(np.zeros((3, 4)))
        with pytest.raises(InvalidBoard):
            Board(np.zeros((8, 8)))
        with pytest.raises(InvalidBoard):
            Board(np.zeros((5, 7)), gravity=True)
        with pytest.raises(InvalidBoard):
            Board(np.full((3, 3), 2))
        with pytest.raises(InvalidBoard):
            Board(np.zeros((6, 6)), win_length=3)

    def test_signature_distinguishes_game_kinds(self):
        connection = Board.empty_connection(6)
        drop = Board.empty_drop()
        assert connection.signature() != drop.signature()
        assert Board.empty_connection(3).signature() == "3x3k3f:........."

    def test_equality_follows_cells(self):
        game = ConnectionGame(3)
        a = game.apply(game.initial_board(), (1, 1), Side.A)
        b = Board.from_rows(["...", ".X.", "..."])
        assert a == b
        assert hash(a) == hash(b)

    def test_center_and_corners(self):
        assert Board.empty_connection(5).center == (2, 2)
        assert Board.empty_connection(4).center is None
        assert Board.empty_drop().center is None
        assert Board.empty_drop().center_column == 3
        assert Board.empty_connection(4).corners == ((0, 0), (0, 3), (3, 0), (3, 3))


class TestConnectionGame:

    def test_legal_moves_row_major(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["X..", ".O.", "..."])
        assert game.legal_moves(board) == [(0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2)]

    def test_apply_returns_new_board(self):
        game = ConnectionGame(3)
        board = game.initial_board()
        after = game.apply(board, (0, 1), Side.A)

        assert board.piece_count() == 0
        assert after.piece_count() == 1
        assert after.at(0, 1) == Side.A

    def test_apply_occupied_cell_raises(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["X..", "...", "..."])
        with pytest.raises(IllegalMove):
            game.apply(board, (0, 0), Side.B)
        assert board.at(0, 0) == Side.A

    def test_apply_malformed_move_raises(self):
        game = ConnectionGame(3)
        board = game.initial_board()
        with pytest.raises(IllegalMove):
            game.apply(board, (3, 0), Side.A)
        with pytest.raises(IllegalMove):
            game.apply(board, 4, Side.A)
        with pytest.raises(IllegalMove):
            game.apply(board, (0, 1, 2), Side.A)

    def test_apply_rejects_board_of_other_game(self):
        game = ConnectionGame(3)
        with pytest.raises(InvalidBoard):
            game.apply(Board.empty_connection(4), (0, 0), Side.A)

    @pytest.mark.parametrize("rows, side", [
        (["XXX", "O.O", "..."], Side.A),
        (["O.X", "O.X", "O.."], Side.B),
        (["X.O", "OX.", "..X"], Side.A),
        (["X.O", ".O.", "O.X"], Side.B),
    ])
    def test_winner_all_directions(self, rows, side):
        game = ConnectionGame(3)
        assert game.winner(Board.from_rows(rows)) is side

    def test_no_winner(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["XOX", "XOO", "OXX"])
        assert game.winner(board) is None
        assert game.is_full(board)
        assert game.is_terminal(board)

    def test_win_length_three_on_five_by_five(self):
        game = ConnectionGame(5)
        board = Board.from_rows([".....", ".X...", "..X..", "...X.", "....."])
        assert game.winner(board) is Side.A

    def test_win_length_five_on_seven_by_seven(self):
        game = ConnectionGame(7)
        four = Board.from_rows(["XXXX...", *(["......."] * 6)])
        five = Board.from_rows(["XXXXX..", *(["......."] * 6)])
        assert game.winner(four) is None
        assert game.winner(five) is Side.A

    def test_winning_line_prefers_rows(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["XXX", "X..", "X.."])
        side, line = game.winning_line(board)
        assert side is Side.A
        assert line == [(0, 0), (0, 1), (0, 2)]

    def test_winning_line_anti_diagonal(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["..O", ".O.", "O.."])
        assert game.winning_line(board) == (Side.B, [(0, 2), (1, 1), (2, 0)])

    def test_check_win_through_cell(self):
        game = ConnectionGame(4)
        board = Board.from_rows(["....", ".O..", "..O.", "...O"])
        assert game.check_win(board, 2, 2)
        assert not game.check_win(board, 0, 0)
        assert game.is_winning_move(Board.from_rows(["....", ".O..", "..O.", "...."]), (3, 3), Side.B)


class TestDropGame:

    def test_gravity_stacks_from_bottom(self):
        game = DropGame()
        board = game.initial_board()

        board = game.apply(board, 3, Side.A)
        assert board.at(5, 3) == Side.A

        board = game.apply(board, 3, Side.B)
        assert board.at(4, 3) == Side.B

    def test_full_column_raises(self):
        game = DropGame()
        board = game.initial_board()
        side = Side.A
        for _ in range(6):
            board = game.apply(board, 3, side)
            side = side.opponent

        assert 3 not in game.legal_moves(board)
        with pytest.raises(IllegalMove):
            game.apply(board, 3, side)

    def test_bad_column_raises(self):
        game = DropGame()
        board = game.initial_board()
        with pytest.raises(IllegalMove):
            game.apply(board, 7, Side.A)
        with pytest.raises(IllegalMove):
            game.apply(board, (5, 3), Side.A)

    def test_vertical_win(self):
        game = DropGame()
        board = game.initial_board()
        for column in [1, 0, 1, 0, 1, 0]:
            side = Side.B if column == 1 else Side.A
            board = game.apply(board, column, side)
        assert game.winner(board) is None

        board = game.apply(board, 1, Side.B)
        assert game.winner(board) is Side.B
        assert game.winning_line(board) == (Side.B, [(2, 1), (3, 1), (4, 1), (5, 1)])

    def test_diagonal_win(self):
        board = Board.from_rows([
            ".......",
            ".......",
            "...X...",
            "..XO...",
            ".XOO...",
            "XOOX...",
        ], gravity=True)
        assert DropGame().winner(board) is Side.A

    def test_landing_cell_and_move_for_cell(self):
        game = DropGame()
        board = game.apply(game.initial_board(), 2, Side.A)
        assert game.landing_cell(board, 2) == (4, 2)
        assert game.move_for_cell((4, 2)) == 2

    def test_game_for(self):
        assert isinstance(game_for(Board.empty_drop()), DropGame)
        game = game_for(Board.empty_connection(6))
        assert isinstance(game, ConnectionGame)
        assert game.win_length == 4
