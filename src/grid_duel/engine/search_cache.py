"""
Position cache for minimax search.

The cache stores previously evaluated positions so that transpositions (the
same position reached through different move orders) are scored once.

Key concepts:
- Key: (board signature, remaining depth, maximizing flag, AI side, personality).
  The signature encodes every cell, so entries never need to be tied to a
  particular board instance.
- Bound types: EXACT (searched with a full window), LOWER (cutoff, true
  value >= score), UPPER (all moves failed low, true value <= score). A bound
  is only returned when it decides the querying window, so a warm cache never
  changes a search result.
- Memory: once more than max_entries are held, the whole cache is cleared.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)


class BoundType(Enum):
    """Type of bound stored in a cache entry."""
    EXACT = 0
    LOWER = 1
    UPPER = 2


@dataclass
class CacheEntry:
    score: float
    bound: BoundType


CacheKey = Tuple[str, int, bool, Hashable, Hashable]


class SearchCache:
    """
    Bounded mapping from a search key to a score.

    Not thread-safe: give each concurrently running game its own instance or
    serialize engine calls.
    """

    def __init__(self, max_entries: int = 10_000):
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self.table: Dict[CacheKey, CacheEntry] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.stores = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self.table)

    def probe(self, key: CacheKey, alpha: float, beta: float) -> Optional[float]:
        """
        Cached score if it is usable for the window (alpha, beta).

        EXACT entries are always usable; LOWER entries only when they fail
        high (score >= beta); UPPER entries only when they fail low
        (score <= alpha).
        """
        entry = self.table.get(key)
        if entry is None:
            self.misses += 1
            return None

        if (
            entry.bound is BoundType.EXACT
            or (entry.bound is BoundType.LOWER and entry.score >= beta)
            or (entry.bound is BoundType.UPPER and entry.score <= alpha)
        ):
            self.hits += 1
            return entry.score

        self.misses += 1
        return None

    def store(self, key: CacheKey, score: float, bound: BoundType = BoundType.EXACT):
        """Store a result, clearing everything first if the ceiling is reached."""
        if key not in self.table and len(self.table) >= self.max_entries:
            logger.debug("Search cache reached %d entries, clearing", len(self.table))
            self.table.clear()
            self.evictions += 1

        existing = self.table.get(key)
        if existing is not None and existing.bound is BoundType.EXACT and bound is not BoundType.EXACT:
            return  # Don't replace EXACT with a bound
        self.table[key] = CacheEntry(score=score, bound=bound)
        self.stores += 1

    def clear(self):
        """Drop all entries and statistics (call between unrelated games)."""
        self.table.clear()
        self._reset_stats()

    def _reset_stats(self):
        self.hits = 0
        self.misses = 0
        self.stores = 0
        self.evictions = 0

    def stats(self) -> dict:
        total_queries = self.hits + self.misses
        hit_rate = self.hits / total_queries if total_queries > 0 else 0.0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'stores': self.stores,
            'evictions': self.evictions,
            'size': len(self.table),
            'max_entries': self.max_entries,
        }
