"""Word search puzzle generation and scoring engine.

This package exposes the public API surface via:

- ``wordsearch.engine.generator.WordSearchGenerator``: builds letter grids.
- ``wordsearch.engine.session.GameSession``: owns play state and rewards.
- ``wordsearch.core.rules`` tables: difficulty tuning and reward values.
- ``wordsearch.core.levels.level_config``: campaign level tuning.
"""

from .core.constants import Difficulty, Direction, FillStrategy
from .core.levels import level_config, level_theme
from .core.models import DifficultyConfig, GameResult, Grid, Position, Word
from .core.rules import get_difficulty_config
from .engine.generator import WordSearchGenerator
from .engine.session import GameSession, SessionState

__all__ = [
    "Difficulty",
    "DifficultyConfig",
    "Direction",
    "FillStrategy",
    "GameResult",
    "GameSession",
    "Grid",
    "Position",
    "SessionState",
    "Word",
    "WordSearchGenerator",
    "get_difficulty_config",
    "level_config",
    "level_theme",
]

__version__ = "0.1.0"
