"""CLI entrypoint for the word search generator and terminal game."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from wordsearch.core.constants import Difficulty
from wordsearch.core.exceptions import UnknownLevelError
from wordsearch.core.levels import generate_level
from wordsearch.core.models import DifficultyConfig, Position
from wordsearch.core.progression import level_from_xp
from wordsearch.core.rules import get_difficulty_config
from wordsearch.data.bonus_words import BonusDictionary, level_bonus_words
from wordsearch.data.theme import (
    BuiltinThemeWordGenerator,
    GeminiThemeWordGenerator,
    ThemeWordGenerator,
    UserWordListGenerator,
    merge_theme_generators,
)
from wordsearch.engine.generator import WordSearchGenerator
from wordsearch.engine.session import GameSession, SessionState
from wordsearch.utils.logger import configure_logging
from wordsearch.utils.pretty import pretty_print_grid, print_game_result


PLAY_HELP = (
    "Enter a selection as 'row,col row,col' (start and end cell).\n"
    "Commands: hint, reveal, freeze, first, pause, resume, quit"
)


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def parse_position(token: str) -> Position:
    row, col = token.split(",", 1)
    return Position(int(row), int(col))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate word search grids and play them in the terminal",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=None,
        help="Difficulty level (grid size, word count, time limit), easy by default",
    )
    parser.add_argument("--theme", type=str, default="", help="Theme keyword (builtin bucket or LLM prompt)")
    parser.add_argument("--words", nargs="+", metavar="WORD", help="Explicit regular words")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument("--bonus", nargs="+", metavar="WORD", help="Bonus words to track")
    parser.add_argument(
        "--bonus-file",
        type=Path,
        metavar="FILE",
        help="Bonus dictionary file, one word per line",
    )
    parser.add_argument(
        "--level",
        type=int,
        help="Campaign level: sets tuning, theme and hand-picked bonus words",
    )
    parser.add_argument(
        "--llm",
        action="store_true",
        help="Fetch theme words from Gemini (requires GEMINI_API_KEY and --theme)",
    )
    parser.add_argument(
        "--language",
        type=str,
        default="French",
        help="Target language for LLM theme words",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--player-xp", type=int, default=None, help="Current player XP, used to report level ups")
    parser.add_argument("--play", action="store_true", help="Play the grid interactively")
    parser.add_argument("--json", action="store_true", help="Print the grid as JSON instead of text")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def collect_words(args: argparse.Namespace, target: int) -> List[str]:
    user_words: List[str] = []
    if args.words:
        user_words.extend(args.words)
    if args.words_file:
        user_words.extend(parse_words_file(args.words_file))

    primary: Optional[ThemeWordGenerator] = UserWordListGenerator(user_words) if user_words else None
    fallbacks: List[ThemeWordGenerator] = []
    if args.llm:
        fallbacks.append(GeminiThemeWordGenerator())
    if args.theme:
        fallbacks.append(BuiltinThemeWordGenerator(seed=args.seed))

    output = merge_theme_generators(
        primary,
        fallbacks,
        theme=args.theme,
        target=target,
        difficulty=args.difficulty,
        language=args.language,
    )
    return output.texts()


def collect_bonus_words(args: argparse.Namespace) -> List[str]:
    bonus: List[str] = []
    if args.bonus:
        bonus.extend(args.bonus)
    if args.level is not None:
        bonus.extend(level_bonus_words(args.level))
    return bonus


def resolve_config(args: argparse.Namespace) -> DifficultyConfig:
    """Return the tuning to play with; a campaign level also fills difficulty and theme."""
    if args.level is None:
        args.difficulty = args.difficulty or Difficulty.EASY.value
        return get_difficulty_config(args.difficulty)
    level = generate_level(args.level)
    args.difficulty = level.difficulty.value
    args.theme = args.theme or level.theme
    return level.config


def play(session: GameSession) -> None:
    """Drive a session from stdin until the game ends or the player quits."""

    session.on_word_found = lambda word: print(f"  + {word.text}{' (bonus)' if word.is_bonus else ''}")
    session.on_all_regular_words_found = lambda remaining: print(
        f"  All words found! {len(remaining)} bonus words are still hidden."
    )
    session.on_game_complete = print_game_result
    print(PLAY_HELP)
    with session:
        session.start()
        while session.status is not SessionState.GAME_OVER:
            pretty_print_grid(session.grid, highlighted=session.highlighted_cells)
            print(f"Score {session.state.score} | time {session.state.time_elapsed}/{session.state.time_limit}s")
            try:
                line = input("> ").strip().lower()
            except EOFError:
                line = "quit"
            if line == "quit":
                session.end_game()
            elif line == "hint":
                print(f"  Look at {session.reveal_letter()}")
            elif line == "reveal":
                session.reveal_word()
            elif line == "freeze":
                session.time_freeze()
            elif line == "first":
                session.highlight_first_letters()
            elif line == "pause":
                session.pause_game()
            elif line == "resume":
                session.resume_game()
            else:
                tokens = line.split()
                try:
                    start, end = (parse_position(token) for token in tokens)
                except ValueError:
                    print(PLAY_HELP)
                    continue
                session.update_selection(start, end)
                if session.complete_selection() is None:
                    print("  No word there.")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.level is not None and args.difficulty:
        parser.error("--level sets the difficulty, drop --difficulty")
    try:
        config = resolve_config(args)
    except UnknownLevelError as exc:
        parser.error(str(exc))
    if args.llm and not args.theme:
        parser.error("--llm requires --theme or --level")
    if not (args.words or args.words_file or args.theme):
        parser.error("provide at least --theme, --level or --words / --words-file")

    words = collect_words(args, target=config.word_count * 4)
    if not words:
        parser.error(f"no words available for theme '{args.theme}'")

    bonus_words = collect_bonus_words(args)
    dictionary = BonusDictionary.from_file(args.bonus_file) if args.bonus_file else None
    generator = WordSearchGenerator(seed=args.seed)

    session = GameSession(
        words,
        args.difficulty,
        config=config,
        theme=args.theme,
        bonus_words=bonus_words,
        bonus_dictionary=dictionary,
        generator=generator,
        rng=generator.rng,
        player_xp=args.player_xp,
    )
    if not session.is_ready:
        parser.error("grid generation failed, see log for details")

    if args.play:
        if args.player_xp is not None:
            print(f"Player level {level_from_xp(args.player_xp)}")
        play(session)
        return

    payload: Dict[str, Any] = {
        "difficulty": args.difficulty,
        "level": args.level,
        "theme": args.theme,
        "seed": args.seed,
        "grid": session.grid.to_jsonable(),
        "skipped_words": list(generator.skipped_words),
    }
    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    if args.json:
        print(output_text)
    elif not args.output:
        pretty_print_grid(session.grid, label=f"{args.difficulty} / {args.theme or 'custom'}")


if __name__ == "__main__":  # pragma: no cover
    main()
