"""
Value types exchanged at the engine boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from grid_duel.game.board import Cell, Move


class Difficulty(Enum):
    NOVICE = 'novice'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'
    MASTER = 'master'

    @classmethod
    def parse(cls, value) -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        key = str(value).strip().lower()
        try:
            return _DIFFICULTY_ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {value!r}") from None


# Tier names used by older callers
_DIFFICULTY_ALIASES = {
    'novice': Difficulty.NOVICE,
    'easy': Difficulty.NOVICE,
    'facile': Difficulty.NOVICE,
    'intermediate': Difficulty.INTERMEDIATE,
    'medium': Difficulty.INTERMEDIATE,
    'moyen': Difficulty.INTERMEDIATE,
    'advanced': Difficulty.ADVANCED,
    'hard': Difficulty.ADVANCED,
    'difficile': Difficulty.ADVANCED,
    'master': Difficulty.MASTER,
    'expert': Difficulty.MASTER,
}


class Personality(Enum):
    AGGRESSIVE = 'aggressive'
    DEFENSIVE = 'defensive'
    BALANCED = 'balanced'

    @classmethod
    def parse(cls, value) -> "Personality":
        if isinstance(value, Personality):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown personality: {value!r}") from None


class Rationale(Enum):
    """Which rule produced the move."""
    IMMEDIATE_WIN = 'immediate win'
    BLOCK = 'block'
    FORK = 'fork'
    FORK_BLOCK = 'fork block'
    CENTER = 'center'
    CORNER = 'corner'
    OPENING = 'opening'
    SEARCH = 'search'
    MCTS = 'mcts'
    RANDOM = 'random'
    FALLBACK = 'fallback'


@dataclass(frozen=True)
class EngineDecision:
    """
    Chosen move plus why and how sure.

    Attributes:
        move: (row, col) for the connection game, column for the drop game
        confidence: in [0, 1]
        rationale: rule that fired
        cell: (row, col) the piece lands on
        detail: free-form note, e.g. "minimax depth 8"
    """
    move: Move
    confidence: float
    rationale: Rationale
    cell: Optional[Cell] = None
    detail: str = ''

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be in [0, 1], got {self.confidence}")


_DIFFICULTY_TEXT = {
    Difficulty.NOVICE: "Makes deliberate mistakes, good for beginners",
    Difficulty.INTERMEDIATE: "Solid play that spots threats and forks",
    Difficulty.ADVANCED: "Plans several moves ahead",
    Difficulty.MASTER: "Near-perfect play, extremely hard to beat",
}

_PERSONALITY_TEXT = {
    Personality.AGGRESSIVE: "Favours attacks and quick wins",
    Personality.DEFENSIVE: "Focuses on blocking and careful positioning",
    Personality.BALANCED: "Adapts its strategy to the position",
}


def describe(difficulty, personality=Personality.BALANCED) -> str:
    """Short human-readable summary of an engine configuration."""
    difficulty = Difficulty.parse(difficulty)
    personality = Personality.parse(personality)
    return f"{_DIFFICULTY_TEXT[difficulty]}. {_PERSONALITY_TEXT[personality]}."
