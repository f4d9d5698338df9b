"""Word search grid generation.

Each regular word gets a bounded placement budget:
  1. Crossing pass: positions where the word shares letters with words
     already on the grid (skipped for the first word).
  2. Random pass: random start and direction, up to ``placement_attempts``.
Words that never fit are skipped and logged; the rest of the grid is still
produced. Empty cells are backfilled last.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

from ..core.constants import Direction
from ..core.exceptions import GridValidationError
from ..core.models import Cell, DifficultyConfig, Grid, Position, Word
from ..core.rules import get_word_color
from ..data.normalization import clean_word
from ..utils.logger import get_logger
from .grid import LetterGrid
from .validator import GridValidator


LOGGER = get_logger(__name__)

DEFAULT_PLACEMENT_ATTEMPTS = 200


class WordSearchGenerator:
    """Builds populated grids from word lists and difficulty configs."""

    def __init__(
        self,
        grid_size: Optional[int] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS,
    ) -> None:
        self.grid_size = grid_size
        self.rng = rng or random.Random(seed)
        self.placement_attempts = placement_attempts
        self.validator = GridValidator()
        self.skipped_words: List[str] = []

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate_grid(
        self,
        words: Iterable[str],
        config: DifficultyConfig,
        bonus_words: Iterable[str] = (),
    ) -> Grid:
        size = self.grid_size or config.grid_size
        letters = LetterGrid(size, rng=self.rng)
        directions = tuple(config.directions) or tuple(Direction)
        self.skipped_words = []

        placed: List[Word] = []
        for text in self._prepare_words(words, size):
            word = self._place_word(letters, text, directions, len(placed))
            if word is None:
                LOGGER.warning("Skipping '%s': no valid placement in %sx%s grid", text, size, size)
                self.skipped_words.append(text)
                continue
            placed.append(word)

        letters.fill_empty(config.fill_strategy)
        bonus = self._dedupe(clean_word(w) for w in bonus_words)
        grid = letters.to_grid(placed, bonus)

        validation = self.validator.validate(grid)
        if not validation.ok:
            raise GridValidationError(f"Generated grid failed validation: {validation.messages}")
        LOGGER.info(
            "Generated %sx%s grid with %s/%s words placed (%s bonus words tracked)",
            size, size, len(placed), len(placed) + len(self.skipped_words), len(bonus),
        )
        return grid

    def select_words(self, words: Iterable[str], config: DifficultyConfig) -> List[str]:
        """Pick ``config.word_count`` random words that fit the length range."""

        size = self.grid_size or config.grid_size
        min_len, max_len = config.word_length_range
        valid = [
            word for word in self._dedupe(clean_word(w) for w in words)
            if min_len <= len(word) <= max_len and len(word) <= size
        ]
        self.rng.shuffle(valid)
        return valid[: config.word_count]

    # ------------------------------------------------------------------
    # Selection helpers
    # ------------------------------------------------------------------
    @staticmethod
    def validate_selection(selected_cells: Sequence[Cell], words: Sequence[Word]) -> Optional[Word]:
        """Return the word whose cell path is exactly the selection.

        The selection may be read from either end. Found words still match;
        deciding what a repeat find means is up to the caller.
        """

        if not selected_cells:
            return None
        selection = [(cell.row, cell.col) for cell in selected_cells]
        reversed_selection = selection[::-1]
        for word in words:
            if len(word.text) != len(selection):
                continue
            path = [(pos.row, pos.col) for pos in word.positions()]
            if path == selection or path == reversed_selection:
                return word
        return None

    @staticmethod
    def are_adjacent(first: Cell, second: Cell) -> bool:
        d_row = abs(first.row - second.row)
        d_col = abs(first.col - second.col)
        return d_row <= 1 and d_col <= 1 and (d_row + d_col) > 0

    @staticmethod
    def direction_between(start: Cell, end: Cell) -> Optional[Direction]:
        return Direction.from_delta(end.row - start.row, end.col - start.col)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def _place_word(
        self,
        letters: LetterGrid,
        text: str,
        directions: Sequence[Direction],
        index: int,
    ) -> Optional[Word]:
        if index > 0:
            candidates = letters.overlap_candidates(text, directions)
            if candidates:
                start, direction = self.rng.choice(candidates)
                LOGGER.debug("Crossing placement for %s at %s (%s)", text, start, direction.value)
                return self._commit(letters, text, start, direction, index)

        for attempt in range(self.placement_attempts):
            direction = self.rng.choice(list(directions))
            start = letters.random_start(len(text), direction)
            if start is None:
                return None
            if letters.can_place(text, start, direction):
                LOGGER.debug("Placed %s after %s random attempts", text, attempt + 1)
                return self._commit(letters, text, start, direction, index)
        return None

    def _commit(
        self,
        letters: LetterGrid,
        text: str,
        start: Position,
        direction: Direction,
        index: int,
    ) -> Word:
        end = letters.place(text, start, direction)
        return Word(
            id=f"word-{index}",
            text=text,
            start_pos=start,
            end_pos=end,
            direction=direction,
            color=get_word_color(index),
        )

    def _prepare_words(self, words: Iterable[str], size: int) -> List[str]:
        prepared: List[str] = []
        for text in self._dedupe(clean_word(w) for w in words):
            if len(text) > size:
                LOGGER.warning("Skipping '%s': longer than grid size %s", text, size)
                self.skipped_words.append(text)
                continue
            prepared.append(text)
        return prepared

    @staticmethod
    def _dedupe(words: Iterable[str]) -> List[str]:
        seen = set()
        ordered: List[str] = []
        for word in words:
            if word and word not in seen:
                seen.add(word)
                ordered.append(word)
        return ordered
