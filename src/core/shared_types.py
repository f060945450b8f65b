"""
Type definitions used across layers
"""

from enum import StrEnum


class Mark(StrEnum):
    """Content of a single cell. Also used to say whose turn it is (X or O only)."""

    EMPTY = "-"
    X = "x"
    O = "o"


class Outcome(StrEnum):
    """Terminal outcome of a round. A game still in progress has no outcome (None)."""

    X_WINS = "x wins"
    O_WINS = "o wins"
    DRAW = "draw"


PLAYER_MARKS: tuple[Mark, Mark] = (Mark.X, Mark.O)


def opponent(mark: Mark) -> Mark:
    return Mark.O if mark == Mark.X else Mark.X
