"""The 3x3 board: nine cells in row-major order (index 0 is top-left, 8 is bottom-right)."""

from dataclasses import dataclass
from typing import Iterable, Self

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Mark

BOARD_DIMENSIONS = (3, 3)
BOARD_SIZE = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]


def is_within_bounds(index: int) -> bool:
    return 0 <= index < BOARD_SIZE


@dataclass
class Board:
    cells: list[Mark]

    def __post_init__(self) -> None:
        if len(self.cells) != BOARD_SIZE:
            raise InvalidBoardError(
                f"A board has exactly {BOARD_SIZE} cells, got {len(self.cells)}."
            )

    @classmethod
    def empty(cls) -> Self:
        return cls([Mark.EMPTY] * BOARD_SIZE)

    @classmethod
    def from_values(cls, values: Iterable[str]) -> Self:
        """Construct a board from stored mark values, e.g. ["x", "-", "o", ...]"""
        try:
            cells = [Mark(value) for value in values]
        except ValueError as exc:
            raise InvalidBoardError(f"Invalid cell value on board: {exc}") from exc
        return cls(cells)

    def to_values(self) -> list[str]:
        return [cell.value for cell in self.cells]

    def mark(self, index: int) -> Mark:
        return self.cells[index]

    def is_occupied(self, index: int) -> bool:
        return self.cells[index] != Mark.EMPTY

    def place(self, mark: Mark, index: int) -> None:
        self.cells[index] = mark

    def clear(self) -> None:
        self.cells = [Mark.EMPTY] * BOARD_SIZE

    def rows(self) -> list[list[Mark]]:
        width = BOARD_DIMENSIONS[0]
        return [self.cells[i : i + width] for i in range(0, BOARD_SIZE, width)]

    def __str__(self) -> str:
        return "\n".join(" ".join(cell.value for cell in row) for row in self.rows())
