import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from grid_duel.exceptions import NoLegalMoves
from grid_duel.game.board import Board, Move, Side
from grid_duel.game.game import Game

logger = logging.getLogger(__name__)


# Rollout outcomes, from the AI's point of view
WIN = 1.0
DRAW = 0.5
LOSS = 0.0


class Node:
    """
    One position in the search tree.

    `wins` accumulates rollout outcomes from the AI's point of view;
    `side_to_move` is the side that chooses among this node's children.
    """

    def __init__(self, game, board, side_to_move, ai_side, parent=None, move_taken=None, outcome=None):
        self.game = game
        self.board = board
        self.side_to_move = side_to_move
        self.ai_side = ai_side
        self.parent = parent
        self.move_taken = move_taken
        # Set when the move that created this node ended the game
        self.outcome = outcome

        self.children: List["Node"] = []
        self.untried_moves = [] if outcome is not None else list(game.legal_moves(board))

        self.visit_count = 0
        self.wins = 0.0

    def is_terminal(self):
        return self.outcome is not None

    def is_fully_expanded(self):
        return not self.untried_moves and len(self.children) > 0

    def select(self, exploration):
        best_child = None
        best_ucb = -np.inf

        for child in self.children:
            ucb = self.get_ucb(child, exploration)
            if ucb > best_ucb:
                best_child = child
                best_ucb = ucb

        return best_child

    def get_ucb(self, child, exploration):
        if child.visit_count == 0:
            return np.inf
        win_rate = child.wins / child.visit_count
        # The side choosing here wants its own outcome maximized
        if self.side_to_move != self.ai_side:
            win_rate = 1.0 - win_rate
        return win_rate + exploration * math.sqrt(math.log(self.visit_count) / child.visit_count)

    def expand(self, rng):
        index = int(rng.integers(len(self.untried_moves)))
        move = self.untried_moves.pop(index)

        row, col = self.game.landing_cell(self.board, move)
        child_board = self.board.with_cell(row, col, self.side_to_move)
        outcome = _outcome_after(self.game, child_board, row, col, self.side_to_move, self.ai_side)

        child = Node(
            self.game, child_board, self.side_to_move.opponent, self.ai_side,
            parent=self, move_taken=move, outcome=outcome,
        )
        self.children.append(child)
        return child

    def backpropagate(self, value):
        self.wins += value
        self.visit_count += 1

        if self.parent is not None:
            self.parent.backpropagate(value)


def _outcome_after(game: Game, board: Board, row: int, col: int, mover: Side, ai_side: Side) -> Optional[float]:
    """Outcome if placing at (row, col) ended the game, else None."""
    if game.check_win(board, row, col):
        return WIN if mover == ai_side else LOSS
    if game.is_full(board):
        return DRAW
    return None


@dataclass
class MCTSResult:
    best_move: Move
    visits: Dict = field(default_factory=dict)
    win_rate: float = 0.0
    iterations: int = 0


class MonteCarloTreeSearch:
    """
    UCB1 tree search with uniform random rollouts.

    Args:
        iterations: number of select/expand/simulate/backpropagate cycles
        exploration: UCB1 exploration constant
        rng: numpy Generator driving expansion and rollouts
    """

    def __init__(self, iterations: int = 1000, exploration: float = math.sqrt(2), rng: Optional[np.random.Generator] = None):
        if iterations < 1:
            raise ValueError(f"MCTS needs at least one iteration, got {iterations}")
        self.iterations = iterations
        self.exploration = exploration
        self.rng = rng if rng is not None else np.random.default_rng()

    def search(self, game: Game, board: Board, ai_side: Side) -> MCTSResult:
        """
        Run the configured number of iterations with `ai_side` to move.

        Returns the root child with the highest visit count.
        """
        if not game.legal_moves(board):
            raise NoLegalMoves("Cannot search a full board")

        root = Node(game, board, ai_side, ai_side)

        for _ in range(self.iterations):
            node = root

            # 1. Selection
            while node.is_fully_expanded():
                node = node.select(self.exploration)

            # 2. Expansion
            if not node.is_terminal() and node.untried_moves:
                node = node.expand(self.rng)

            # 3. Simulation
            value = node.outcome if node.is_terminal() else self.rollout(game, node.board, node.side_to_move, ai_side)

            # 4. Backpropagation
            node.backpropagate(value)

        best_child = max(root.children, key=lambda child: child.visit_count)
        visits = {child.move_taken: child.visit_count for child in root.children}
        win_rate = best_child.wins / best_child.visit_count if best_child.visit_count else 0.0

        logger.debug(
            "mcts iterations=%d best=%s visits=%d win_rate=%.3f",
            self.iterations, best_child.move_taken, best_child.visit_count, win_rate,
        )
        return MCTSResult(
            best_move=best_child.move_taken,
            visits=visits,
            win_rate=win_rate,
            iterations=self.iterations,
        )

    def rollout(self, game: Game, board: Board, side_to_move: Side, ai_side: Side) -> float:
        """Play uniformly random moves until the game ends; returns the AI's outcome."""
        side = side_to_move
        while True:
            moves = game.legal_moves(board)
            if not moves:
                return DRAW
            move = moves[int(self.rng.integers(len(moves)))]
            row, col = game.landing_cell(board, move)
            board = board.with_cell(row, col, side)
            outcome = _outcome_after(game, board, row, col, side, ai_side)
            if outcome is not None:
                return outcome
            side = side.opponent
