"""
grid_duel: move selection for computer opponents in two grid games.

- Connection game: N x N board (3..7), K in a row wins
- Drop game: 6 x 7 board with gravity, four in a row wins

Typical use:

    from grid_duel import Board, DecisionEngine, Difficulty, Side

    engine = DecisionEngine(seed=0)
    decision = engine.choose_move(Board.empty_connection(3), Side.B, Difficulty.MASTER)
"""

from grid_duel.engine import (
    DecisionEngine,
    Difficulty,
    EngineDecision,
    Personality,
    Rationale,
    SearchCache,
    describe,
)
from grid_duel.exceptions import IllegalMove, InvalidBoard, NoLegalMoves
from grid_duel.game import Board, ConnectionGame, DropGame, Side, game_for

__version__ = '0.1.0'

__all__ = [
    'DecisionEngine',
    'Difficulty',
    'EngineDecision',
    'Personality',
    'Rationale',
    'SearchCache',
    'describe',
    'IllegalMove',
    'InvalidBoard',
    'NoLegalMoves',
    'Board',
    'ConnectionGame',
    'DropGame',
    'Side',
    'game_for',
]
