"""
Tests for UCB1 Monte Carlo Tree Search with random rollouts.
"""

import math
import numpy as np
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from grid_duel.exceptions import NoLegalMoves
from grid_duel.game import Board, ConnectionGame, DropGame, Side
from grid_duel.mcts.mcts import DRAW, LOSS, WIN, MonteCarloTreeSearch, Node


class TestNode:

    def test_unvisited_child_is_infinite(self):
        game = ConnectionGame(3)
        root = Node(game, game.initial_board(), Side.A, Side.A)
        child = root.expand(np.random.default_rng(0))
        root.visit_count = 1

        assert root.get_ucb(child, math.sqrt(2)) == np.inf

    def test_ucb_uses_chooser_perspective(self):
        game = ConnectionGame(3)
        root = Node(game, game.initial_board(), Side.A, Side.A)
        child = root.expand(np.random.default_rng(0))
        grandchild = child.expand(np.random.default_rng(0))

        grandchild.backpropagate(WIN)
        grandchild.backpropagate(WIN)
        grandchild.backpropagate(LOSS)

        # AI chooses at root: 2/3 exploitation; opponent chooses at child: 1/3
        assert root.visit_count == 3
        assert child.get_ucb(grandchild, 0.0) == pytest.approx(1 / 3)
        assert root.get_ucb(child, 0.0) == pytest.approx(2 / 3)

    def test_terminal_child(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["XX.", "OO.", "..."])
        root = Node(game, board, Side.A, Side.A)
        root.untried_moves = [(0, 2)]
        child = root.expand(np.random.default_rng(0))

        assert child.is_terminal()
        assert child.outcome == WIN
        assert child.untried_moves == []


class TestMonteCarloTreeSearch:

    def test_takes_immediate_win(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["XX.", "OO.", "..."])
        mcts = MonteCarloTreeSearch(iterations=500, rng=np.random.default_rng(0))

        result = mcts.search(game, board, Side.A)

        assert result.best_move == (0, 2)
        assert result.win_rate > 0.9

    def test_blocks_threat(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["X..", "XO.", "..."])
        mcts = MonteCarloTreeSearch(iterations=1000, rng=np.random.default_rng(0))

        result = mcts.search(game, board, Side.B)

        assert result.best_move == (2, 0)

    def test_drop_game_win(self):
        game = DropGame()
        board = game.initial_board()
        for column in (0, 6, 1, 6, 2, 5):
            side = Side.A if column in (0, 1, 2) else Side.B
            board = game.apply(board, column, side)
        mcts = MonteCarloTreeSearch(iterations=400, rng=np.random.default_rng(0))

        assert mcts.search(game, board, Side.A).best_move == 3

    def test_visits_sum_to_iterations(self):
        game = ConnectionGame(5)
        mcts = MonteCarloTreeSearch(iterations=120, rng=np.random.default_rng(3))

        result = mcts.search(game, game.initial_board(), Side.A)

        assert sum(result.visits.values()) == 120
        assert result.iterations == 120
        assert result.best_move in game.legal_moves(game.initial_board())

    def test_same_seed_same_result(self):
        game = ConnectionGame(5)
        board = Board.from_rows(["X....", ".....", "..O..", ".....", "....."])
        results = [
            MonteCarloTreeSearch(iterations=100, rng=np.random.default_rng(11)).search(game, board, Side.A)
            for _ in range(2)
        ]
        assert results[0].best_move == results[1].best_move
        assert results[0].visits == results[1].visits

    def test_rollout_outcomes(self):
        game = ConnectionGame(3)
        mcts = MonteCarloTreeSearch(iterations=1, rng=np.random.default_rng(0))
        for _ in range(20):
            value = mcts.rollout(game, game.initial_board(), Side.A, Side.B)
            assert value in (WIN, DRAW, LOSS)

    def test_full_board_raises(self):
        game = ConnectionGame(3)
        board = Board.from_rows(["XOX", "XOO", "OXX"])
        with pytest.raises(NoLegalMoves):
            MonteCarloTreeSearch(iterations=10).search(game, board, Side.A)

    def test_needs_iterations(self):
        with pytest.raises(ValueError):
            MonteCarloTreeSearch(iterations=0)
