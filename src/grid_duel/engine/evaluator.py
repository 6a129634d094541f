"""
Static evaluation of non-terminal positions.

Used only at minimax leaves. Terminal positions (win, loss, draw) are scored
by the search itself, so this module never looks at search depth.

Terms, all from `side`'s point of view:
- Center cell (boards with an exact center): +5 own if aggressive else +3;
  -5 opponent if defensive else -3.
- Corners (connection game): +2 per own corner, -2 per opponent corner.
- Drop game: +3 per own piece in the center column, plus open-line potential
  over every length-K window.
"""

from grid_duel.engine.decision import Personality
from grid_duel.game.board import EMPTY, Board, Side
from grid_duel.game.game import DIRECTIONS, line_window


CENTER_BONUS = 3
AGGRESSIVE_CENTER_BONUS = 5
DEFENSIVE_CENTER_PENALTY = 5
CORNER_BONUS = 2
CENTER_COLUMN_BONUS = 3

# (own pieces, empty cells) -> score; opponent patterns subtract
OWN_WINDOW_SCORES = {(3, 1): 100, (2, 2): 10, (1, 3): 1}
OPPONENT_WINDOW_SCORES = {(3, 1): 200, (2, 2): 50, (1, 3): 5}
MIXED_WINDOW_PENALTY = 5


def evaluate(board: Board, side: Side, personality: Personality = Personality.BALANCED) -> int:
    """Integer score of `board` for `side`; positive is good for `side`."""
    score = _center_score(board, side, personality)

    if board.gravity:
        score += _center_column_score(board, side)
        score += _window_score(board, side)
    else:
        score += _corner_score(board, side)

    return score


def _center_score(board: Board, side: Side, personality: Personality) -> int:
    center = board.center
    if center is None:
        return 0

    occupant = board.at(*center)
    if occupant == side:
        return AGGRESSIVE_CENTER_BONUS if personality is Personality.AGGRESSIVE else CENTER_BONUS
    if occupant == side.opponent:
        return -(DEFENSIVE_CENTER_PENALTY if personality is Personality.DEFENSIVE else CENTER_BONUS)
    return 0


def _corner_score(board: Board, side: Side) -> int:
    score = 0
    for row, col in board.corners:
        occupant = board.at(row, col)
        if occupant == side:
            score += CORNER_BONUS
        elif occupant == side.opponent:
            score -= CORNER_BONUS
    return score


def _center_column_score(board: Board, side: Side) -> int:
    column = board.cells[:, board.center_column]
    return CENTER_COLUMN_BONUS * int((column == int(side)).sum())


def _window_score(board: Board, side: Side) -> int:
    """
    Open-line potential: score every length-K window in all four directions.

    Counts for all windows of one direction are computed at once by stacking
    the K shifted views of the grid.
    """
    k = board.win_length
    cells = board.cells
    own_value, opp_value = int(side), int(side.opponent)
    score = 0

    for dr, dc in DIRECTIONS:
        if board.rows - dr * (k - 1) <= 0 or board.cols - abs(dc) * (k - 1) <= 0:
            continue
        views = [line_window(cells, dr, dc, offset, k) for offset in range(k)]
        own = sum((view == own_value).astype(int) for view in views)
        opp = sum((view == opp_value).astype(int) for view in views)
        empty = sum((view == EMPTY).astype(int) for view in views)

        for (count, blanks), value in OWN_WINDOW_SCORES.items():
            score += value * int(((own == count) & (empty == blanks)).sum())
        for (count, blanks), value in OPPONENT_WINDOW_SCORES.items():
            score -= value * int(((opp == count) & (empty == blanks)).sum())
        score -= MIXED_WINDOW_PENALTY * int(((own > 0) & (opp > 0)).sum())

    return score
