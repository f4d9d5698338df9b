"""Shared constants and enumerations for the word search engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Difficulty(str, Enum):
    """Word search difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class Direction(str, Enum):
    """Placement directions. Words are always written along the vector."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL = "diagonal"
    DIAGONAL_REVERSE = "diagonalReverse"

    @property
    def vector(self) -> Tuple[int, int]:
        return DIRECTION_VECTORS[self]

    @classmethod
    def from_delta(cls, d_row: int, d_col: int) -> Optional["Direction"]:
        """Infer the direction of a straight run from its start/end delta.

        A run read backwards maps to the same direction as the forward run.
        """

        if d_row < 0 or (d_row == 0 and d_col < 0):
            d_row, d_col = -d_row, -d_col
        if d_row == 0 and d_col > 0:
            return cls.HORIZONTAL
        if d_col == 0 and d_row > 0:
            return cls.VERTICAL
        if d_row == d_col and d_row > 0:
            return cls.DIAGONAL
        if d_row == -d_col and d_row > 0:
            return cls.DIAGONAL_REVERSE
        return None


class FillStrategy(str, Enum):
    """How empty cells are backfilled after placement."""

    RANDOM = "random"
    THEMATIC = "thematic"


DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL: (1, 1),
    Direction.DIAGONAL_REVERSE: (1, -1),
}

# Every reading direction, used when scanning a grid for arbitrary words.
ALL_STEPS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 0), (1, 1), (1, -1),
    (0, -1), (-1, 0), (-1, -1), (-1, 1),
)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
