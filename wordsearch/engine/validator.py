"""Deterministic integrity checks for generated grids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..core.constants import Direction
from ..core.exceptions import GridValidationError
from ..core.models import Grid, Word
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str] = field(default_factory=list)


class GridValidator:
    """Runs deterministic validation over a finished grid."""

    def validate(self, grid: Grid) -> ValidationResult:
        try:
            self._check_shape(grid)
            self._check_letters(grid)
            for word in grid.words:
                self._check_word(grid, word)
        except GridValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True)

    def _check_shape(self, grid: Grid) -> None:
        if len(grid.cells) != grid.size:
            raise GridValidationError(f"Expected {grid.size} rows, found {len(grid.cells)}")
        for index, row in enumerate(grid.cells):
            if len(row) != grid.size:
                raise GridValidationError(f"Row {index} has {len(row)} cells, expected {grid.size}")

    def _check_letters(self, grid: Grid) -> None:
        for r, row in enumerate(grid.cells):
            for c, cell in enumerate(row):
                if (cell.row, cell.col) != (r, c):
                    raise GridValidationError(
                        f"Cell at ({r},{c}) reports coordinates ({cell.row},{cell.col})"
                    )
                letter = cell.letter
                if len(letter) != 1 or not letter.isalpha() or not letter.isupper():
                    raise GridValidationError(f"Invalid letter '{letter}' at ({r},{c})")

    def _check_word(self, grid: Grid, word: Word) -> None:
        if not word.is_placed:
            raise GridValidationError(f"Word {word.id} has no coordinates")
        for pos in (word.start_pos, word.end_pos):
            if not grid.bounds.contains(pos.row, pos.col):
                raise GridValidationError(f"Word {word.id} extends outside grid at {pos}")
        delta = (word.end_pos.row - word.start_pos.row, word.end_pos.col - word.start_pos.col)
        if Direction.from_delta(*delta) != word.direction and len(word.text) > 1:
            raise GridValidationError(
                f"Word {word.id} direction {word.direction.value} does not match delta {delta}"
            )
        spelled = "".join(cell.letter for cell in grid.cells_along(word))
        if spelled != word.text:
            raise GridValidationError(
                f"Word {word.id} expected '{word.text}' but grid spells '{spelled}'"
            )
