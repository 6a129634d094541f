"""
Default tuning for the decision engine.

Plain dictionaries grouped into an EngineConfig dataclass. Override any part
with EngineConfig.from_dict({...}); nested dictionaries are merged key by key.
"""

import copy
import math
from dataclasses import dataclass, field, fields


# Minimax depth per tier. Connection-game entries are keyed by board size;
# sizes above the largest key reuse the deepest-listed size's value.
MINIMAX_DEPTH = {
    'connection': {
        'advanced': {3: 8, 4: 6, 5: 4},
        'master': {3: 10, 4: 6, 5: 6},
    },
    'drop': {
        'advanced': 4,
        'master': 6,
    },
}

# Monte Carlo Tree Search (Master tier, large connection boards only)
MCTS_CONFIG = {
    'min_board_size': 5,                # MCTS only from 5x5 up
    'min_legal_moves': 16,              # ... and while more than 15 cells are empty
    'iterations': {5: 1000, 6: 800, 7: 600},
    'exploration': math.sqrt(2),        # UCB1 constant
}

# Novice tier: intentionally beatable
NOVICE_CONFIG = {
    'connection': {
        'block_probability': 0.30,
        'random_probability': 0.50,
    },
    'drop': {
        'block_probability': 0.40,
        'random_probability': 0.30,
        'center_probability': 0.50,
    },
}

# Confidence reported with each rationale
CONFIDENCE = {
    'immediate_win': 1.0,
    'novice_win': 0.9,
    'block': 0.9,
    'novice_block': 0.6,
    'fork': 0.85,
    'fork_block': 0.8,
    'center': 0.8,
    'corner': 0.7,
    'strategic_random': 0.5,
    'novice_random': 0.3,
    'advanced_search': 0.95,
    'master_search': 1.0,
    'mcts': 0.95,
    'opening': 1.0,
    'fallback': 0.5,
}

CACHE_CONFIG = {
    'max_entries': 10_000,              # cleared wholesale once exceeded
}

OPENING_BOOK_CONFIG = {
    'board_size': 3,                    # book only covers the 3x3 board
    'min_legal_moves': 7,               # consulted while more than 6 cells are empty
}


def _merge(base: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass
class EngineConfig:
    minimax_depth: dict = field(default_factory=lambda: copy.deepcopy(MINIMAX_DEPTH))
    mcts: dict = field(default_factory=lambda: copy.deepcopy(MCTS_CONFIG))
    novice: dict = field(default_factory=lambda: copy.deepcopy(NOVICE_CONFIG))
    confidence: dict = field(default_factory=lambda: copy.deepcopy(CONFIDENCE))
    cache: dict = field(default_factory=lambda: copy.deepcopy(CACHE_CONFIG))
    opening_book: dict = field(default_factory=lambda: copy.deepcopy(OPENING_BOOK_CONFIG))

    @classmethod
    def from_dict(cls, overrides: dict) -> "EngineConfig":
        """
        Build a config from partial overrides.

        Args:
            overrides: e.g. {'mcts': {'iterations': {5: 200}}}

        Raises:
            ValueError: for an unknown top-level section
        """
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config sections: {sorted(unknown)}")

        config = cls()
        for name, value in overrides.items():
            setattr(config, name, _merge(getattr(config, name), value))
        return config

    def connection_depth(self, tier: str, size: int) -> int:
        table = self.minimax_depth['connection'][tier]
        eligible = [s for s in table if s <= size]
        key = max(eligible) if eligible else min(table)
        return table[key]

    def drop_depth(self, tier: str) -> int:
        return self.minimax_depth['drop'][tier]

    def mcts_iterations(self, size: int) -> int:
        table = self.mcts['iterations']
        eligible = [s for s in table if s <= size]
        key = max(eligible) if eligible else min(table)
        return table[key]
