"""Game session controller.

A session owns the authoritative :class:`GameState` for one game. It consumes
three kinds of events (completed selections, timer ticks and power-ups),
scores finds and emits the final :class:`GameResult`. Callbacks run
synchronously inside the call that triggered them.

Usage:
    session = GameSession(words, Difficulty.EASY, theme="animals",
                          on_game_complete=save_result)
    session.start()                      # once-per-second timer
    session.handle_selection_complete(cells)
    ...
    session.close()
"""

from __future__ import annotations

import math
import random
import threading
import time
from enum import Enum
from typing import Callable, Iterable, List, Optional, Protocol, Sequence, Union

from ..core.constants import ALL_STEPS, Difficulty, Direction
from ..core.exceptions import WordSearchError
from ..core.models import (Cell, DifficultyConfig, GameResult, GameState, Grid,
                           Position, Word, letters_of)
from ..core.progression import level_from_xp
from ..core.rules import (BASE_POINTS, BONUS_COLOR, BONUS_SCORE_MULTIPLIER,
                          COIN_PERFECT_BONUS, COIN_TIME_BONUS, COMBO_BONUS,
                          COMBO_WINDOW_SECONDS, HIGHLIGHT_FIRST_SECONDS,
                          MIN_BONUS_SELECTION, POINTS_PER_LETTER,
                          REVEAL_LETTER_SECONDS, TIME_FREEZE_TICKS,
                          XP_PER_WORD, XP_PERFECT_BONUS, XP_TIME_BONUS,
                          get_bonus_reward, get_difficulty_config,
                          parse_difficulty)
from ..data.bonus_words import BonusDictionary
from ..data.normalization import clean_word
from ..utils.logger import get_logger
from .generator import WordSearchGenerator
from .timer import GameTimer


LOGGER = get_logger(__name__)

TICK_SECONDS = 1.0


class SessionState(Enum):
    """Lifecycle of a session."""
    ACTIVE = "active"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Ticker(Protocol):
    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...

    def join(self, timeout: Optional[float] = None) -> None:
        ...


TimerFactory = Callable[[float, Callable[[], None]], Ticker]


class GameSession:
    """Owns play state for one word search game."""

    def __init__(
        self,
        words: Iterable[str],
        difficulty: Union[Difficulty, str] = Difficulty.EASY,
        *,
        theme: str = "",
        bonus_words: Iterable[str] = (),
        config: Optional[DifficultyConfig] = None,
        bonus_dictionary: Optional[BonusDictionary] = None,
        generator: Optional[WordSearchGenerator] = None,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: TimerFactory = GameTimer,
        rng: Optional[random.Random] = None,
        select_words: bool = True,
        player_xp: Optional[int] = None,
        on_game_complete: Optional[Callable[[GameResult], None]] = None,
        on_word_found: Optional[Callable[[Word], None]] = None,
        on_all_regular_words_found: Optional[Callable[[List[Word]], None]] = None,
    ) -> None:
        self.difficulty = parse_difficulty(difficulty)
        self.config = config or get_difficulty_config(self.difficulty)
        self.theme = theme
        self.words = list(words)
        self.bonus_words = self._dedupe(clean_word(w) for w in bonus_words)
        extra = list(bonus_dictionary) if bonus_dictionary is not None else None
        self.bonus_dictionary = (
            BonusDictionary(extra + self.bonus_words)
            if extra is not None
            else BonusDictionary.default(self.bonus_words)
        )
        self.rng = rng or random.Random()
        self.generator = generator or WordSearchGenerator(rng=self.rng)
        self.clock = clock
        self.timer_factory = timer_factory
        self.select_words = select_words
        self.player_xp = player_xp

        self.on_game_complete = on_game_complete
        self.on_word_found = on_word_found
        self.on_all_regular_words_found = on_all_regular_words_found

        self._lock = threading.RLock()
        self._timer: Optional[Ticker] = None
        self._stopped_timer: Optional[Ticker] = None
        self._timer_enabled = False
        self.last_result: Optional[GameResult] = None
        self._reset(self._build_grid())

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def status(self) -> SessionState:
        if self.state.is_game_over:
            return SessionState.GAME_OVER
        if self.state.is_paused:
            return SessionState.PAUSED
        return SessionState.ACTIVE

    @property
    def is_ready(self) -> bool:
        return not self.state.grid.is_empty()

    @property
    def highlighted_cells(self) -> List[Position]:
        with self._lock:
            if self._highlight_expires_at is not None and self.clock() >= self._highlight_expires_at:
                self._highlighted = []
                self._highlight_expires_at = None
            return list(self._highlighted)

    @property
    def time_freeze_remaining(self) -> int:
        return self._freeze_remaining

    def remaining_bonus_words(self) -> List[Word]:
        """Configured bonus words the player has not found yet.

        Bonus words are never placed, so a word stays in play even when its
        letters do not line up anywhere on this grid. Words that do line up
        carry the span where they can be read; the others have no coordinates.
        """

        grid = self.state.grid
        found = {word.text for word in self.state.found_words}
        remaining: List[Word] = []
        for index, text in enumerate(self.bonus_words):
            if text in found:
                continue
            start: Optional[Position] = None
            end: Optional[Position] = None
            direction = Direction.HORIZONTAL
            span = grid.locate(text)
            if span is not None:
                start, end = span
                direction = Direction.from_delta(end.row - start.row, end.col - start.col) or direction
            remaining.append(
                Word(
                    id=f"hidden-bonus-{index}",
                    text=text,
                    start_pos=start,
                    end_pos=end,
                    direction=direction,
                    color=BONUS_COLOR,
                    is_bonus=True,
                )
            )
        return remaining

    # ------------------------------------------------------------------
    # Selection events
    # ------------------------------------------------------------------
    def update_selection(self, start: Position, end: Position) -> List[Cell]:
        """Track the cells under an in-progress drag from ``start`` to ``end``."""

        with self._lock:
            if not self._accepts_events():
                return []
            self.state.selected_cells = self.state.grid.cells_between(start, end)
            return list(self.state.selected_cells)

    def complete_selection(self) -> Optional[Word]:
        with self._lock:
            cells = list(self.state.selected_cells)
            self.state.selected_cells = []
            return self.handle_selection_complete(cells)

    def handle_selection_complete(self, selected_cells: Sequence[Union[Cell, Position]]) -> Optional[Word]:
        """Score a finished selection.

        Returns the regular or bonus word credited, or ``None`` when the
        selection matches nothing (or the session is not accepting events).
        """

        with self._lock:
            if not self._accepts_events():
                return None
            cells = self._resolve(selected_cells)
            if not cells:
                return None

            match = WordSearchGenerator.validate_selection(cells, self.state.grid.words)
            if match is not None:
                if match.found or match.is_bonus:
                    return None
                return self._record_regular(match, cells)
            return self._record_bonus(cells)

    def _resolve(self, selected: Sequence[Union[Cell, Position]]) -> List[Cell]:
        grid = self.state.grid
        cells: List[Cell] = []
        for item in selected:
            cell = grid.cell_at(item.row, item.col)
            if cell is None:
                LOGGER.debug("Selection outside grid at (%s,%s) ignored", item.row, item.col)
                return []
            cells.append(cell)
        return cells

    def _record_regular(self, word: Word, cells: List[Cell]) -> Word:
        word.found = True
        self._mark_cells(cells, word.id)

        now = self.clock()
        combo = 0
        if self._last_find_at is not None and now - self._last_find_at < COMBO_WINDOW_SECONDS:
            combo = COMBO_BONUS
        self._last_find_at = now

        points = BASE_POINTS + len(word.text) * POINTS_PER_LETTER + combo
        self.state.score += points
        self.state.found_words.append(word)
        LOGGER.info("Found %s (+%s%s)", word.text, points, " combo" if combo else "")

        if self.on_word_found is not None:
            self.on_word_found(word)
        self._check_completion(after_bonus=False)
        return word

    def _record_bonus(self, cells: List[Cell]) -> Optional[Word]:
        if len(cells) < MIN_BONUS_SELECTION or not self._is_straight_line(cells):
            return None
        text = letters_of(cells)
        if not self.bonus_dictionary.contains(text):
            return None
        if any(found.text == text for found in self.state.found_words):
            return None
        reward = get_bonus_reward(len(text))
        if reward is None:
            return None

        self._bonus_counter += 1
        first, last = cells[0], cells[-1]
        word = Word(
            id=f"bonus-{self._bonus_counter}",
            text=text,
            start_pos=first.position,
            end_pos=last.position,
            direction=Direction.from_delta(last.row - first.row, last.col - first.col)
            or Direction.HORIZONTAL,
            found=True,
            color=BONUS_COLOR,
            is_bonus=True,
        )
        self.state.grid.words.append(word)
        self._mark_cells(cells, word.id)
        self.state.found_words.append(word)
        self.state.score += reward.coins * BONUS_SCORE_MULTIPLIER
        self._last_find_at = self.clock()
        LOGGER.info("Bonus word %s (%s)", text, reward.label)

        if self.on_word_found is not None:
            self.on_word_found(word)
        self._check_completion(after_bonus=True)
        return word

    @staticmethod
    def _mark_cells(cells: Iterable[Cell], word_id: str) -> None:
        for cell in cells:
            cell.is_found = True
            cell.word_id = word_id

    @staticmethod
    def _is_straight_line(cells: Sequence[Cell]) -> bool:
        if len(cells) < 2:
            return True
        step = (cells[1].row - cells[0].row, cells[1].col - cells[0].col)
        if step not in ALL_STEPS:
            return False
        return all(
            (cells[i + 1].row - cells[i].row, cells[i + 1].col - cells[i].col) == step
            for i in range(len(cells) - 1)
        )

    def _check_completion(self, after_bonus: bool) -> None:
        regular = self.state.grid.regular_words()
        if not regular or any(not word.found for word in regular):
            return
        remaining = self.remaining_bonus_words()
        if remaining and self.on_all_regular_words_found is not None:
            if not after_bonus:
                LOGGER.info("All regular words found, %s bonus words remain", len(remaining))
                self.on_all_regular_words_found(remaining)
            return
        self.end_game()

    # ------------------------------------------------------------------
    # Game end
    # ------------------------------------------------------------------
    def end_game(self) -> Optional[GameResult]:
        """Finish the session and emit its result.

        A no-op without a grid. Calling it again after the game is over
        returns the stored result without emitting it a second time.
        """

        with self._lock:
            if self.state.grid.is_empty():
                return None
            if self.state.is_game_over and self.last_result is not None:
                return self.last_result

            self.state.is_game_over = True
            self._stop_timer()
            result = self._compute_result()
            self.last_result = result
            LOGGER.info(
                "Game over: %s/%s words, score %s, +%s coins, +%s xp%s",
                result.words_found, result.total_words, result.score,
                result.coins_earned, result.xp_earned, " (perfect)" if result.is_perfect else "",
            )
            if self.on_game_complete is not None:
                self.on_game_complete(result)
            return result

    def _compute_result(self) -> GameResult:
        regular_found = self.state.regular_found()
        bonus_found = self.state.bonus_found()
        total_words = len(self.state.grid.regular_words())
        words_found = len(regular_found)
        is_perfect = words_found == total_words

        coins = self.config.coin_reward
        xp = self.config.xp_reward

        time_remaining = self.state.time_remaining
        if is_perfect and time_remaining > 0:
            coins += math.floor(time_remaining * COIN_TIME_BONUS)
            xp += math.floor(time_remaining * XP_TIME_BONUS)
        if is_perfect:
            coins += COIN_PERFECT_BONUS
            xp += XP_PERFECT_BONUS

        xp += words_found * XP_PER_WORD

        for word in bonus_found:
            reward = get_bonus_reward(len(word.text))
            if reward:
                coins += reward.coins
                xp += reward.xp

        leveled_up = False
        new_level = None
        if self.player_xp is not None:
            before = level_from_xp(self.player_xp)
            after = level_from_xp(self.player_xp + xp)
            if after > before:
                leveled_up, new_level = True, after

        return GameResult(
            score=self.state.score,
            time_elapsed=self.state.time_elapsed,
            words_found=words_found,
            total_words=total_words,
            bonus_words_found=len(bonus_found),
            coins_earned=coins,
            xp_earned=xp,
            difficulty=self.difficulty,
            theme=self.theme,
            is_perfect=is_perfect,
            leveled_up=leveled_up,
            new_level=new_level,
        )

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Start the once-per-second timer."""

        with self._lock:
            self._timer_enabled = True
            self._start_timer()

    def tick(self) -> None:
        """Advance the session clock by one tick."""

        with self._lock:
            if not self._accepts_events():
                return
            if self._freeze_remaining > 0:
                self._freeze_remaining -= 1
                return
            self.state.time_elapsed += 1
            limit = self.state.time_limit
            if limit and self.state.time_elapsed >= limit:
                LOGGER.info("Time limit of %ss reached", limit)
                self.end_game()

    def pause_game(self) -> None:
        with self._lock:
            if self.state.is_game_over or self.state.is_paused:
                return
            self.state.is_paused = True
            self._stop_timer()

    def resume_game(self) -> None:
        with self._lock:
            if self.state.is_game_over or not self.state.is_paused:
                return
            self.state.is_paused = False
            if self._timer_enabled:
                self._start_timer()

    def restart_game(self) -> Grid:
        """Regenerate the grid and reset every counter."""

        with self._lock:
            self._stop_timer()
            self.last_result = None
            self._reset(self._build_grid())
            if self._timer_enabled:
                self._start_timer()
            return self.state.grid

    def close(self, timeout: Optional[float] = TICK_SECONDS * 2) -> None:
        """Stop the timer and wait for an in-flight tick to finish.

        The wait happens outside the session lock so a tick blocked on it
        can drain.
        """

        with self._lock:
            self._timer_enabled = False
            timer = self._timer or self._stopped_timer
            self._timer = self._stopped_timer = None
        if timer is not None:
            timer.cancel()
            timer.join(timeout)

    def __enter__(self) -> "GameSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _start_timer(self) -> None:
        if self._timer is not None or self.status is not SessionState.ACTIVE or not self.is_ready:
            return
        self._timer = self.timer_factory(TICK_SECONDS, self.tick)
        self._timer.start()

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._stopped_timer, self._timer = self._timer, None

    # ------------------------------------------------------------------
    # Power-ups
    # ------------------------------------------------------------------
    def reveal_letter(self) -> Optional[Position]:
        """Highlight one random cell of a random unfound word."""

        with self._lock:
            unfound = self._unfound_regular()
            if not self._accepts_events() or not unfound:
                return None
            word = self.rng.choice(unfound)
            position = self.rng.choice(word.positions())
            self._set_highlight([position], REVEAL_LETTER_SECONDS)
            return position

    def reveal_word(self) -> Optional[Word]:
        """Find a random unfound word as if the player had selected it."""

        with self._lock:
            unfound = self._unfound_regular()
            if not self._accepts_events() or not unfound:
                return None
            word = self.rng.choice(unfound)
            return self.handle_selection_complete(self.state.grid.cells_along(word))

    def time_freeze(self) -> int:
        with self._lock:
            if not self._accepts_events():
                return self._freeze_remaining
            self._freeze_remaining = TIME_FREEZE_TICKS
            LOGGER.info("Time frozen for %s ticks", TIME_FREEZE_TICKS)
            return self._freeze_remaining

    def highlight_first_letters(self) -> List[Position]:
        with self._lock:
            if not self._accepts_events():
                return []
            starts = [word.start_pos for word in self._unfound_regular()]
            if starts:
                self._set_highlight(starts, HIGHLIGHT_FIRST_SECONDS)
            return starts

    def _unfound_regular(self) -> List[Word]:
        return [word for word in self.state.grid.regular_words() if not word.found]

    def _set_highlight(self, positions: List[Position], seconds: float) -> None:
        self._highlighted = list(positions)
        self._highlight_expires_at = self.clock() + seconds

    # ------------------------------------------------------------------
    # Setup helpers
    # ------------------------------------------------------------------
    def _accepts_events(self) -> bool:
        return self.status is SessionState.ACTIVE and self.is_ready

    def _build_grid(self) -> Grid:
        words = (
            self.generator.select_words(self.words, self.config)
            if self.select_words
            else list(self.words)
        )
        try:
            grid = self.generator.generate_grid(words, self.config, self.bonus_words)
        except WordSearchError:
            LOGGER.exception("Grid generation failed; session will ignore events")
            return Grid(cells=[], size=0)
        if grid.is_empty():
            LOGGER.error("Generator returned an empty grid; session will ignore events")
        return grid

    def _reset(self, grid: Grid) -> None:
        self.state = GameState(grid=grid, time_limit=self.config.time_limit)
        self._last_find_at: Optional[float] = None
        self._bonus_counter = 0
        self._freeze_remaining = 0
        self._highlighted: List[Position] = []
        self._highlight_expires_at: Optional[float] = None

    @staticmethod
    def _dedupe(words: Iterable[str]) -> List[str]:
        ordered: List[str] = []
        for word in words:
            if word and word not in ordered:
                ordered.append(word)
        return ordered
