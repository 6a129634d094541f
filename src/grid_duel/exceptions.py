"""
Errors raised by the board model and the decision engine.

All of them derive from ValueError: each one signals that the caller handed
the engine a value it cannot work with.
"""


class IllegalMove(ValueError):
    """Move targets an occupied cell, a full column, or lies off the board."""


class NoLegalMoves(ValueError):
    """A decision was requested on a board with no empty cell left."""


class InvalidBoard(ValueError):
    """Board dimensions, cell values or metadata are not supported."""
