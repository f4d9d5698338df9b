"""Data models shared by the generator and the game session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .constants import ALL_STEPS, Bounds, Difficulty, Direction, FillStrategy


@dataclass(frozen=True)
class Position:
    row: int
    col: int


@dataclass
class Cell:
    """A single grid letter with its found/ownership metadata."""

    row: int
    col: int
    letter: str
    is_found: bool = False
    word_id: Optional[str] = None

    @property
    def position(self) -> Position:
        return Position(self.row, self.col)


@dataclass
class Word:
    """A word placed by the generator or synthesized for a bonus find.

    Bonus words still in play but not spelled anywhere on the grid carry no
    coordinates (``start_pos`` and ``end_pos`` are ``None``).
    """

    id: str
    text: str
    start_pos: Optional[Position]
    end_pos: Optional[Position]
    direction: Direction
    found: bool = False
    color: Optional[str] = None
    is_bonus: bool = False

    @property
    def is_placed(self) -> bool:
        return self.start_pos is not None and self.end_pos is not None

    def positions(self) -> List[Position]:
        """Every coordinate on the path from ``start_pos`` to ``end_pos``."""

        if not self.is_placed:
            return []
        d_row = _sign(self.end_pos.row - self.start_pos.row)
        d_col = _sign(self.end_pos.col - self.start_pos.col)
        steps = max(
            abs(self.end_pos.row - self.start_pos.row),
            abs(self.end_pos.col - self.start_pos.col),
        )
        return [
            Position(self.start_pos.row + d_row * i, self.start_pos.col + d_col * i)
            for i in range(steps + 1)
        ]


@dataclass
class Grid:
    """Square letter matrix plus placed-word metadata for one session."""

    cells: List[List[Cell]]
    size: int
    words: List[Word] = field(default_factory=list)
    bonus_words: List[str] = field(default_factory=list)

    @property
    def bounds(self) -> Bounds:
        return Bounds(rows=self.size, cols=self.size)

    def is_empty(self) -> bool:
        return self.size <= 0 or not self.cells

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def cell_at(self, row: int, col: int) -> Optional[Cell]:
        if not self.bounds.contains(row, col):
            return None
        return self.cells[row][col]

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def cells_along(self, word: Word) -> List[Cell]:
        return [self.cells[pos.row][pos.col] for pos in word.positions()]

    def cells_between(self, start: Position, end: Position) -> List[Cell]:
        """Cells on the straight line from ``start`` to ``end`` inclusive.

        Returns an empty list when the two positions are not aligned
        horizontally, vertically or diagonally, or fall outside the grid.
        """

        if not self.bounds.contains(start.row, start.col):
            return []
        if not self.bounds.contains(end.row, end.col):
            return []
        d_row = end.row - start.row
        d_col = end.col - start.col
        if d_row != 0 and d_col != 0 and abs(d_row) != abs(d_col):
            return []
        steps = max(abs(d_row), abs(d_col))
        step_row, step_col = _sign(d_row), _sign(d_col)
        return [
            self.cells[start.row + step_row * i][start.col + step_col * i]
            for i in range(steps + 1)
        ]

    def locate(self, text: str) -> Optional[Tuple[Position, Position]]:
        """Find ``text`` in any of the eight reading directions.

        Returns the start and end positions of the first occurrence in
        row-major order, or ``None`` when the letters are not on the grid.
        """

        if not text or self.is_empty():
            return None
        length = len(text)
        for row in range(self.size):
            for col in range(self.size):
                if self.cells[row][col].letter != text[0]:
                    continue
                for d_row, d_col in ALL_STEPS:
                    end_row = row + d_row * (length - 1)
                    end_col = col + d_col * (length - 1)
                    if not self.bounds.contains(end_row, end_col):
                        continue
                    if all(
                        self.cells[row + d_row * i][col + d_col * i].letter == text[i]
                        for i in range(length)
                    ):
                        return Position(row, col), Position(end_row, end_col)
        return None

    def regular_words(self) -> List[Word]:
        return [word for word in self.words if not word.is_bonus]

    def to_jsonable(self) -> Dict[str, object]:
        return {
            "size": self.size,
            "rows": ["".join(cell.letter for cell in row) for row in self.cells],
            "words": [
                {
                    "id": word.id,
                    "text": word.text,
                    "start": [word.start_pos.row, word.start_pos.col],
                    "end": [word.end_pos.row, word.end_pos.col],
                    "direction": word.direction.value,
                    "color": word.color,
                    "found": word.found,
                    "is_bonus": word.is_bonus,
                }
                for word in self.words
            ],
            "bonus_words": list(self.bonus_words),
        }


@dataclass(frozen=True)
class DifficultyConfig:
    """Per-difficulty tuning. Read-only, looked up by difficulty key."""

    grid_size: int
    word_count: int
    word_length_range: Tuple[int, int]
    time_limit: int
    coin_reward: int
    xp_reward: int
    directions: Tuple[Direction, ...] = tuple(Direction)
    fill_strategy: FillStrategy = FillStrategy.RANDOM


@dataclass
class GameState:
    """Authoritative mutable play state owned by a session."""

    grid: Grid
    time_limit: int
    selected_cells: List[Cell] = field(default_factory=list)
    found_words: List[Word] = field(default_factory=list)
    score: int = 0
    time_elapsed: int = 0
    is_game_over: bool = False
    is_paused: bool = False

    def regular_found(self) -> List[Word]:
        return [word for word in self.found_words if not word.is_bonus]

    def bonus_found(self) -> List[Word]:
        return [word for word in self.found_words if word.is_bonus]

    @property
    def time_remaining(self) -> int:
        return max(0, self.time_limit - self.time_elapsed)


@dataclass(frozen=True)
class BonusReward:
    coins: int
    xp: int
    label: str = ""


@dataclass
class GameResult:
    """Summary emitted when a session ends. Persisting it is the caller's job."""

    score: int
    time_elapsed: int
    words_found: int
    total_words: int
    bonus_words_found: int
    coins_earned: int
    xp_earned: int
    difficulty: Difficulty
    theme: str
    is_perfect: bool = False
    leveled_up: bool = False
    new_level: Optional[int] = None


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def letters_of(cells: Sequence[Cell]) -> str:
    return "".join(cell.letter for cell in cells)
