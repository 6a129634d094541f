"""
Difficulty / personality orchestration.

Every call runs the same pipeline:

    1. Immediate win for the engine's side (every tier, Novice included)
    2. Tier-specific rules:
         Novice        probabilistic block, then mostly random moves
         Intermediate  block, forks (by personality), center / corner
         Advanced      block, minimax
         Master        block, opening book, MCTS on large boards or minimax
    3. Uniform random legal move if a rule unexpectedly produced nothing
"""

import logging
from typing import Optional

import numpy as np

from grid_duel.config import EngineConfig
from grid_duel.engine.decision import Difficulty, EngineDecision, Personality, Rationale
from grid_duel.engine.minimax import MinimaxSearch
from grid_duel.engine.opening_book import OpeningBook
from grid_duel.engine.search_cache import SearchCache
from grid_duel.engine.tactics import find_fork, find_immediate_block, find_immediate_win
from grid_duel.exceptions import InvalidBoard, NoLegalMoves
from grid_duel.game import game_for
from grid_duel.game.board import EMPTY, Board, Move, Side
from grid_duel.game.game import Game
from grid_duel.mcts.mcts import MonteCarloTreeSearch

logger = logging.getLogger(__name__)


class DecisionEngine:
    """
    Chooses moves for a computer-controlled side.

    The search cache, opening book and random generator are owned by the
    instance (or injected), so independent engines never share state.

    Args:
        config: tuning tables, defaults to EngineConfig()
        cache: minimax position cache, shared across calls of this engine
        opening_book: 3x3 opening replies
        rng: numpy Generator for Novice randomness, random tie-breaks and MCTS
        seed: seed for a fresh Generator when `rng` is not given
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        cache: Optional[SearchCache] = None,
        opening_book: Optional[OpeningBook] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.config = config if config is not None else EngineConfig()
        self.cache = cache if cache is not None else SearchCache(self.config.cache['max_entries'])
        if opening_book is None:
            opening_book = OpeningBook(
                board_size=self.config.opening_book['board_size'],
                min_legal_moves=self.config.opening_book['min_legal_moves'],
            )
        self.opening_book = opening_book
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.minimax = MinimaxSearch(self.cache)

        self._tiers = {
            Difficulty.NOVICE: self._novice_move,
            Difficulty.INTERMEDIATE: self._intermediate_move,
            Difficulty.ADVANCED: self._advanced_move,
            Difficulty.MASTER: self._master_move,
        }

    def clear_cache(self):
        """Drop every cached search score, e.g. between unrelated games."""
        self.cache.clear()

    def choose_move(
        self,
        board: Board,
        side,
        difficulty,
        personality=Personality.BALANCED,
        board_size: Optional[int] = None,
    ) -> EngineDecision:
        """
        Pick a move for `side` on `board`.

        Args:
            board: current position (connection or drop game)
            side: side the engine plays (Side, 1/-1, 'X'/'O')
            difficulty: Difficulty or tier name
            personality: Personality or its name
            board_size: connection game only; must equal the board's size

        Raises:
            NoLegalMoves: the board is full
            InvalidBoard: `board_size` disagrees with the board
            ValueError: unknown side, difficulty or personality
        """
        side = Side.parse(side)
        difficulty = Difficulty.parse(difficulty)
        personality = Personality.parse(personality)
        if board_size is not None and not board.gravity and board_size != board.size:
            raise InvalidBoard(f"board_size {board_size} does not match a {board.size}x{board.size} board")

        game = game_for(board)
        if not game.legal_moves(board):
            raise NoLegalMoves("Board is full")

        win = find_immediate_win(game, board, side)
        if win is not None:
            key = 'novice_win' if difficulty is Difficulty.NOVICE else 'immediate_win'
            decision = self._decision(game, board, win, key, Rationale.IMMEDIATE_WIN)
        else:
            decision = self._tiers[difficulty](game, board, side, personality)

        if decision is None:
            logger.warning(
                "No %s move produced for %r, falling back to a random legal move",
                difficulty.value, board,
            )
            decision = self._decision(game, board, self._random_move(game, board), 'fallback', Rationale.FALLBACK)

        logger.debug(
            "%s/%s %s -> %s (%s, %.2f)",
            difficulty.value, personality.value, side.symbol,
            decision.move, decision.rationale.value, decision.confidence,
        )
        return decision

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------

    def _novice_move(self, game: Game, board: Board, side: Side, personality: Personality) -> Optional[EngineDecision]:
        params = self.config.novice['drop' if board.gravity else 'connection']

        if self.rng.random() < params['block_probability']:
            block = find_immediate_block(game, board, side)
            if block is not None:
                return self._decision(game, board, block, 'novice_block', Rationale.BLOCK)

        if self.rng.random() < params['random_probability']:
            return self._decision(game, board, self._random_move(game, board), 'novice_random', Rationale.RANDOM)

        if board.gravity:
            if self.rng.random() < params['center_probability'] and board.center_column in game.legal_moves(board):
                return self._decision(game, board, board.center_column, 'center', Rationale.CENTER)
            return self._decision(game, board, self._random_move(game, board), 'novice_random', Rationale.RANDOM)

        # Connection game: a weak strategic move, reported apart from the deliberate random roll
        return self._decision(game, board, self._random_move(game, board), 'strategic_random', Rationale.RANDOM)

    def _intermediate_move(self, game: Game, board: Board, side: Side, personality: Personality) -> Optional[EngineDecision]:
        block = self._block(game, board, side)
        if block is not None:
            return block

        if personality is Personality.AGGRESSIVE:
            fork = find_fork(game, board, side)
            if fork is not None:
                return self._decision(game, board, fork, 'fork', Rationale.FORK)
        elif personality is Personality.DEFENSIVE:
            # Occupy the cell the opponent would fork from
            fork = find_fork(game, board, side.opponent)
            if fork is not None:
                return self._decision(game, board, fork, 'fork_block', Rationale.FORK_BLOCK)

        return self._strategic_move(game, board)

    def _advanced_move(self, game: Game, board: Board, side: Side, personality: Personality) -> Optional[EngineDecision]:
        block = self._block(game, board, side)
        if block is not None:
            return block
        return self._search_move(game, board, side, personality, 'advanced')

    def _master_move(self, game: Game, board: Board, side: Side, personality: Personality) -> Optional[EngineDecision]:
        block = self._block(game, board, side)
        if block is not None:
            return block

        opening = self.opening_book.lookup(game, board)
        if opening is not None:
            return self._decision(game, board, opening, 'opening', Rationale.OPENING, detail="opening book")

        if self._use_mcts(game, board):
            iterations = self.config.mcts_iterations(board.size)
            mcts = MonteCarloTreeSearch(iterations, self.config.mcts['exploration'], self.rng)
            result = mcts.search(game, board, side)
            return self._decision(
                game, board, result.best_move, 'mcts', Rationale.MCTS,
                detail=f"MCTS {result.iterations} iterations, win rate {result.win_rate:.2f}",
            )

        return self._search_move(game, board, side, personality, 'master')

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _block(self, game: Game, board: Board, side: Side) -> Optional[EngineDecision]:
        block = find_immediate_block(game, board, side)
        if block is None:
            return None
        return self._decision(game, board, block, 'block', Rationale.BLOCK)

    def _use_mcts(self, game: Game, board: Board) -> bool:
        if board.gravity or board.size < self.config.mcts['min_board_size']:
            return False
        return len(game.legal_moves(board)) >= self.config.mcts['min_legal_moves']

    def _search_move(
        self, game: Game, board: Board, side: Side, personality: Personality, tier: str
    ) -> Optional[EngineDecision]:
        if board.gravity:
            depth = self.config.drop_depth(tier)
        else:
            depth = self.config.connection_depth(tier, board.size)

        result = self.minimax.search(game, board, side, depth, personality)
        if result.best_move is None:
            return None
        return self._decision(
            game, board, result.best_move, f'{tier}_search', Rationale.SEARCH,
            detail=f"minimax depth {depth}, score {result.score}",
        )

    def _strategic_move(self, game: Game, board: Board) -> EngineDecision:
        if board.gravity:
            center = board.center_column
            moves = game.legal_moves(board)
            if center in moves:
                return self._decision(game, board, center, 'center', Rationale.CENTER)
            # Center-weighted random column
            weights = np.array([1.0 / (1.0 + abs(col - center)) for col in moves])
            weights /= weights.sum()
            column = moves[int(self.rng.choice(len(moves), p=weights))]
            return self._decision(game, board, column, 'strategic_random', Rationale.RANDOM)

        center = board.center or (board.size // 2, board.size // 2)
        if board.at(*center) == EMPTY:
            return self._decision(game, board, center, 'center', Rationale.CENTER)

        free_corners = [corner for corner in board.corners if board.at(*corner) == EMPTY]
        if free_corners:
            corner = free_corners[int(self.rng.integers(len(free_corners)))]
            return self._decision(game, board, corner, 'corner', Rationale.CORNER)

        return self._decision(game, board, self._random_move(game, board), 'strategic_random', Rationale.RANDOM)

    def _random_move(self, game: Game, board: Board) -> Move:
        moves = game.legal_moves(board)
        return moves[int(self.rng.integers(len(moves)))]

    def _decision(
        self, game: Game, board: Board, move: Move, confidence_key: str, rationale: Rationale, detail: str = ''
    ) -> EngineDecision:
        return EngineDecision(
            move=move,
            confidence=self.config.confidence[confidence_key],
            rationale=rationale,
            cell=game.landing_cell(board, move),
            detail=detail,
        )
