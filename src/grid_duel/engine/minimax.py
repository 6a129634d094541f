"""
Alpha-beta minimax search for both games.

Scores are always from the AI's point of view: the AI maximizes, the
opponent minimizes.

Algorithm overview:

    def minimax(board, depth, maximizing, ...):
        # Cache lookup (position signature + depth + maximizing flag)
        if cached := cache.probe(key, alpha, beta):
            return cached

        # Terminal or depth limit
        AI won        -> 100 + depth   (faster wins score higher; 1000 + depth for the drop game)
        opponent won  -> -100 - depth  (-1000 - depth)
        board full    -> 0
        depth == 0    -> evaluate(board, ai_side, personality)

        # Search ordered moves, flipping side and maximizing flag
        for move in ordered_moves:
            score = minimax(apply(board, move), depth - 1, not maximizing, ...)
            update best, alpha / beta
            if beta <= alpha:
                break  # cutoff

        cache.store(key, best, bound_type)
        return best
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from grid_duel.engine.decision import Personality
from grid_duel.engine.evaluator import evaluate
from grid_duel.engine.move_ordering import order_moves
from grid_duel.engine.search_cache import BoundType, SearchCache
from grid_duel.exceptions import NoLegalMoves
from grid_duel.game.board import Board, Move, Side
from grid_duel.game.game import Game

logger = logging.getLogger(__name__)


SCORE_WIN = 100
SCORE_LOSS = -100
# Drop-game leaves carry open-line scores in the hundreds
DROP_SCORE_WIN = 1000
DROP_SCORE_LOSS = -1000
SCORE_DRAW = 0
SCORE_INF = math.inf


@dataclass
class SearchResult:
    best_move: Move
    score: float
    depth: int
    nodes_searched: int
    cache_stats: dict = field(default_factory=dict)


class MinimaxSearch:
    """
    Depth-limited minimax with alpha-beta pruning and a position cache.

    The cache is injected so that the caller decides its lifetime; a search
    result never depends on what the cache already holds.
    """

    def __init__(self, cache: Optional[SearchCache] = None):
        self.cache = cache if cache is not None else SearchCache()
        self.nodes_searched = 0

    def search(
        self,
        game: Game,
        board: Board,
        ai_side: Side,
        depth: int,
        personality: Personality = Personality.BALANCED,
    ) -> SearchResult:
        """
        Root search: returns the move with the best minimax score for `ai_side`.

        The root iterates its own moves (and is never served from the cache),
        so it always yields a move. Ties keep the earlier move in ordering
        order.

        Raises:
            NoLegalMoves: the board is full
            ValueError: depth < 1
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        moves = game.legal_moves(board)
        if not moves:
            raise NoLegalMoves("Cannot search a full board")

        self.nodes_searched = 0
        ordered_moves = order_moves(game, board, moves, ai_side)

        best_move = ordered_moves[0]
        best_score = -SCORE_INF
        alpha = -SCORE_INF
        beta = SCORE_INF

        for move in ordered_moves:
            next_board = game.apply(board, move, ai_side)
            score, _ = self.minimax(
                game, next_board, depth - 1, False,
                ai_side, ai_side.opponent, alpha, beta, personality,
            )
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, score)

        logger.debug(
            "minimax depth=%d best=%s score=%s nodes=%d cache=%s",
            depth, best_move, best_score, self.nodes_searched, self.cache.stats(),
        )
        return SearchResult(
            best_move=best_move,
            score=best_score,
            depth=depth,
            nodes_searched=self.nodes_searched,
            cache_stats=self.cache.stats(),
        )

    def minimax(
        self,
        game: Game,
        board: Board,
        depth: int,
        maximizing: bool,
        ai_side: Side,
        current_side: Side,
        alpha: float,
        beta: float,
        personality: Personality = Personality.BALANCED,
    ) -> Tuple[float, Optional[Move]]:
        """
        Recursive alpha-beta minimax.

        Args:
            game: rules for the board
            board: position to score
            depth: remaining depth
            maximizing: True when `current_side` is the AI
            ai_side: side whose score is maximized
            current_side: side to move in `board`
            alpha: best score the maximizer can already force
            beta: best score the minimizer can already force
            personality: leaf evaluation flavour

        Returns:
            (score, best_move); best_move is None for cached, terminal and
            leaf positions
        """
        self.nodes_searched += 1

        key = (board.signature(), depth, maximizing, ai_side, personality)
        cached = self.cache.probe(key, alpha, beta)
        if cached is not None:
            return cached, None

        winner = game.winner(board)
        if winner is not None:
            if board.gravity:
                score = DROP_SCORE_WIN + depth if winner == ai_side else DROP_SCORE_LOSS - depth
            else:
                score = SCORE_WIN + depth if winner == ai_side else SCORE_LOSS - depth
            self.cache.store(key, score, BoundType.EXACT)
            return score, None

        if game.is_full(board):
            self.cache.store(key, SCORE_DRAW, BoundType.EXACT)
            return SCORE_DRAW, None

        if depth == 0:
            score = evaluate(board, ai_side, personality)
            self.cache.store(key, score, BoundType.EXACT)
            return score, None

        ordered_moves = order_moves(game, board, game.legal_moves(board), current_side)
        original_alpha, original_beta = alpha, beta
        best_move = None

        if maximizing:
            best_score = -SCORE_INF
            for move in ordered_moves:
                next_board = game.apply(board, move, current_side)
                score, _ = self.minimax(
                    game, next_board, depth - 1, False,
                    ai_side, current_side.opponent, alpha, beta, personality,
                )
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
        else:
            best_score = SCORE_INF
            for move in ordered_moves:
                next_board = game.apply(board, move, current_side)
                score, _ = self.minimax(
                    game, next_board, depth - 1, True,
                    ai_side, current_side.opponent, alpha, beta, personality,
                )
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)
                if beta <= alpha:
                    break

        # Determine bound type for the cache
        if best_score <= original_alpha:
            bound = BoundType.UPPER
        elif best_score >= original_beta:
            bound = BoundType.LOWER
        else:
            bound = BoundType.EXACT

        self.cache.store(key, best_score, bound)
        return best_score, best_move
