"""
Win Evaluator
----

Derives the terminal outcome of a board. The outcome is never stored: it is recomputed from the cells whenever it is needed.
"""

from typing import Optional, Sequence

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Mark, Outcome
from src.tictactoe.board import BOARD_SIZE

Line = tuple[int, int, int]

# Scan order matters for which winner is reported: rows, columns, diagonal, anti-diagonal.
WIN_LINES: tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

WINNING_OUTCOME: dict[Mark, Outcome] = {
    Mark.X: Outcome.X_WINS,
    Mark.O: Outcome.O_WINS,
}


def winning_line(cells: Sequence[Mark]) -> Optional[Line]:
    """First line (in scan order) holding three equal, non-empty marks."""
    if len(cells) != BOARD_SIZE:
        raise InvalidBoardError(
            f"A board has exactly {BOARD_SIZE} cells, got {len(cells)}."
        )
    for a, b, c in WIN_LINES:
        if cells[a] != Mark.EMPTY and cells[a] == cells[b] == cells[c]:
            return (a, b, c)
    return None


def evaluate(cells: Sequence[Mark]) -> Optional[Outcome]:
    """
    Outcome of the board, or None while the game can still be played.

    A complete line wins. With no complete line, a full board is a draw.
    """
    line = winning_line(cells)
    if line is not None:
        return WINNING_OUTCOME[cells[line[0]]]
    if any(cell == Mark.EMPTY for cell in cells):
        return None
    return Outcome.DRAW
