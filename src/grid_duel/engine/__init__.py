from grid_duel.engine.decision import Difficulty, EngineDecision, Personality, Rationale, describe
from grid_duel.engine.evaluator import evaluate
from grid_duel.engine.minimax import MinimaxSearch, SearchResult
from grid_duel.engine.opening_book import OpeningBook
from grid_duel.engine.policy import DecisionEngine
from grid_duel.engine.search_cache import BoundType, SearchCache
from grid_duel.engine.tactics import find_fork, find_immediate_block, find_immediate_win

__all__ = [
    'Difficulty',
    'EngineDecision',
    'Personality',
    'Rationale',
    'describe',
    'evaluate',
    'MinimaxSearch',
    'SearchResult',
    'OpeningBook',
    'DecisionEngine',
    'BoundType',
    'SearchCache',
    'find_fork',
    'find_immediate_block',
    'find_immediate_win',
]
