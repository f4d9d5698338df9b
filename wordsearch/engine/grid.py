"""Mutable letter matrix used while a grid is being generated."""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.constants import Bounds, Direction, FillStrategy
from ..core.exceptions import PlacementError
from ..core.models import Cell, Grid, Position, Word
from ..core.rules import random_filler_letter
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Placement = Tuple[Position, Direction]


class LetterGrid:
    """Square letter matrix with placement helpers.

    Empty cells hold ``""`` until :meth:`fill_empty` runs. Crossing words are
    allowed as long as they agree on every shared letter.
    """

    def __init__(self, size: int, rng: Optional[random.Random] = None) -> None:
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)
        self.rng = rng or random.Random()
        self.letters: List[List[str]] = [["" for _ in range(size)] for _ in range(size)]

    # ------------------------------------------------------------------
    # Placement checks
    # ------------------------------------------------------------------
    def path(self, start: Position, direction: Direction, length: int) -> List[Position]:
        d_row, d_col = direction.vector
        return [Position(start.row + d_row * i, start.col + d_col * i) for i in range(length)]

    def can_place(self, word: str, start: Position, direction: Direction) -> bool:
        for index, pos in enumerate(self.path(start, direction, len(word))):
            if not self.bounds.contains(pos.row, pos.col):
                return False
            existing = self.letters[pos.row][pos.col]
            if existing and existing != word[index]:
                return False
        return True

    def has_overlap(self, word: str, start: Position, direction: Direction) -> bool:
        for index, pos in enumerate(self.path(start, direction, len(word))):
            if not self.bounds.contains(pos.row, pos.col):
                continue
            if self.letters[pos.row][pos.col] == word[index]:
                return True
        return False

    def overlap_candidates(self, word: str, directions: Sequence[Direction]) -> List[Placement]:
        """All placements of ``word`` that cross at least one existing letter."""

        candidates: List[Placement] = []
        seen = set()
        for row in range(self.size):
            for col in range(self.size):
                existing = self.letters[row][col]
                if not existing:
                    continue
                for index, letter in enumerate(word):
                    if letter != existing:
                        continue
                    for direction in directions:
                        d_row, d_col = direction.vector
                        start = Position(row - d_row * index, col - d_col * index)
                        key = (start, direction)
                        if key in seen:
                            continue
                        seen.add(key)
                        if self.can_place(word, start, direction) and self.has_overlap(word, start, direction):
                            candidates.append(key)
        return candidates

    def random_start(self, length: int, direction: Direction) -> Optional[Position]:
        """Random start whose run of ``length`` cells stays inside the grid."""

        d_row, d_col = direction.vector
        if length > self.size:
            return None
        row_range = self._axis_range(d_row, length)
        col_range = self._axis_range(d_col, length)
        return Position(self.rng.randint(*row_range), self.rng.randint(*col_range))

    def _axis_range(self, step: int, length: int) -> Tuple[int, int]:
        if step > 0:
            return 0, self.size - length
        if step < 0:
            return length - 1, self.size - 1
        return 0, self.size - 1

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place(self, word: str, start: Position, direction: Direction) -> Position:
        """Write ``word`` and return its end position."""

        if not self.can_place(word, start, direction):
            raise PlacementError(f"Cannot place {word} at {start} going {direction.value}")
        cells = self.path(start, direction, len(word))
        for index, pos in enumerate(cells):
            self.letters[pos.row][pos.col] = word[index]
        return cells[-1]

    def fill_empty(self, strategy: FillStrategy = FillStrategy.RANDOM) -> int:
        filled = 0
        for row in range(self.size):
            for col in range(self.size):
                if not self.letters[row][col]:
                    self.letters[row][col] = random_filler_letter(self.rng, strategy)
                    filled += 1
        LOGGER.debug("Filled %s empty cells (%s)", filled, strategy.value)
        return filled

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def empty_count(self) -> int:
        return sum(1 for row in self.letters for letter in row if not letter)

    def to_grid(self, words: Iterable[Word], bonus_words: Iterable[str] = ()) -> Grid:
        cells = [
            [Cell(row=r, col=c, letter=self.letters[r][c]) for c in range(self.size)]
            for r in range(self.size)
        ]
        return Grid(cells=cells, size=self.size, words=list(words), bonus_words=list(bonus_words))
