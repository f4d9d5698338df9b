"""Pretty-print helpers for word search grids and results."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Iterable, Optional, Set

if TYPE_CHECKING:
    from ..core.models import GameResult, Grid, Position


def cell_symbol(cell, highlighted: Set[tuple] | None = None) -> str:
    if cell.is_found:
        return cell.letter.lower()
    if highlighted and (cell.row, cell.col) in highlighted:
        return "*"
    return cell.letter


def format_grid(grid: Grid, highlighted: Optional[Iterable[Position]] = None) -> str:
    """Render the grid with row/column headers.

    Found letters are shown in lowercase and highlighted cells as ``*``.
    """

    marks = {(pos.row, pos.col) for pos in highlighted or ()}
    width = grid.size
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(width):
        row_cells = [cell_symbol(grid.cell(r, c), marks) for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_word_list(grid: Grid) -> str:
    lines = []
    for word in grid.words:
        status = "x" if word.found else " "
        tag = " (bonus)" if word.is_bonus else ""
        lines.append(f"  [{status}] {word.text}{tag}")
    return "\n".join(lines)


def pretty_print_grid(
    grid: Grid,
    *,
    label: str | None = None,
    highlighted: Optional[Iterable[Position]] = None,
    show_words: bool = True,
    stream=None,
) -> None:
    """Print the word search grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid, highlighted), file=stream)
    if show_words and grid.words:
        print(file=stream)
        print(format_word_list(grid), file=stream)


def print_game_result(result: GameResult, *, stream=None) -> None:
    stream = stream or sys.stdout
    print(file=stream)
    print("--- Result ---", file=stream)
    print(f"  Difficulty:    {result.difficulty.value}", file=stream)
    if result.theme:
        print(f"  Theme:         {result.theme}", file=stream)
    print(f"  Words:         {result.words_found}/{result.total_words}", file=stream)
    print(f"  Bonus words:   {result.bonus_words_found}", file=stream)
    print(f"  Score:         {result.score}", file=stream)
    print(f"  Time:          {result.time_elapsed}s", file=stream)
    print(f"  Coins:         +{result.coins_earned}", file=stream)
    print(f"  XP:            +{result.xp_earned}", file=stream)
    if result.is_perfect:
        print("  Perfect game!", file=stream)
    if result.leveled_up:
        print(f"  Level up: now level {result.new_level}", file=stream)
