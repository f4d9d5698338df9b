"""Static game rules: difficulty tuning, scoring and reward tables."""

from __future__ import annotations

import random
from typing import Dict, Optional, Union

from .constants import ALPHABET, Difficulty, FillStrategy
from .exceptions import UnknownDifficultyError
from .models import BonusReward, DifficultyConfig


DIFFICULTY_CONFIGS: Dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(
        grid_size=8,
        word_count=5,
        word_length_range=(4, 6),
        time_limit=300,
        coin_reward=10,
        xp_reward=50,
    ),
    Difficulty.MEDIUM: DifficultyConfig(
        grid_size=10,
        word_count=7,
        word_length_range=(5, 8),
        time_limit=420,
        coin_reward=25,
        xp_reward=100,
    ),
    Difficulty.HARD: DifficultyConfig(
        grid_size=12,
        word_count=10,
        word_length_range=(6, 10),
        time_limit=600,
        coin_reward=50,
        xp_reward=200,
    ),
    Difficulty.EXPERT: DifficultyConfig(
        grid_size=15,
        word_count=15,
        word_length_range=(7, 12),
        time_limit=900,
        coin_reward=100,
        xp_reward=400,
        fill_strategy=FillStrategy.THEMATIC,
    ),
}


def parse_difficulty(difficulty: Union[Difficulty, str]) -> Difficulty:
    if isinstance(difficulty, Difficulty):
        return difficulty
    try:
        return Difficulty(str(difficulty).strip().lower())
    except ValueError as exc:
        raise UnknownDifficultyError(f"Unknown difficulty: {difficulty!r}") from exc


def get_difficulty_config(difficulty: Union[Difficulty, str]) -> DifficultyConfig:
    return DIFFICULTY_CONFIGS[parse_difficulty(difficulty)]


# Score per regular word: BASE + letters * PER_LETTER (+ COMBO inside the window).
BASE_POINTS = 100
POINTS_PER_LETTER = 10
COMBO_BONUS = 50
COMBO_WINDOW_SECONDS = 5.0

# Bonus-word score is the coin reward scaled by this factor.
BONUS_SCORE_MULTIPLIER = 10

MIN_BONUS_SELECTION = 3

COIN_TIME_BONUS = 0.5
COIN_PERFECT_BONUS = 20

XP_PER_WORD = 10
XP_TIME_BONUS = 1
XP_PERFECT_BONUS = 100

TIME_FREEZE_TICKS = 30
REVEAL_LETTER_SECONDS = 3.0
HIGHLIGHT_FIRST_SECONDS = 5.0


BONUS_WORD_REWARDS: Dict[int, BonusReward] = {
    3: BonusReward(coins=10, xp=15, label="Small bonus!"),
    4: BonusReward(coins=15, xp=25, label="Nice bonus!"),
    5: BonusReward(coins=20, xp=35, label="Super bonus!"),
    6: BonusReward(coins=30, xp=60, label="Excellent bonus!"),
    7: BonusReward(coins=50, xp=100, label="Incredible bonus!"),
    8: BonusReward(coins=75, xp=150, label="Extraordinary!"),
    9: BonusReward(coins=100, xp=200, label="Legendary!"),
    10: BonusReward(coins=150, xp=300, label="Mythic!"),
}


def get_bonus_reward(word_length: int) -> Optional[BonusReward]:
    if word_length <= 2:
        return None
    if word_length >= 10:
        return BONUS_WORD_REWARDS[10]
    return BONUS_WORD_REWARDS.get(word_length)


WORD_COLORS = (
    "#FF6B9D",
    "#4DD0E1",
    "#FFD54F",
    "#9C27B0",
    "#FF9800",
    "#4CAF50",
    "#2196F3",
    "#E91E63",
)
BONUS_COLOR = "#FFD700"


def get_word_color(index: int) -> str:
    return WORD_COLORS[index % len(WORD_COLORS)]


# Letter-frequency buckets used by the thematic fill strategy.
FILLER_COMMON = "EARIOTNSLC"
FILLER_MEDIUM = "UDPMHGBFYW"
FILLER_RARE = "KVXZJQ"
FILLER_WEIGHTS = (0.7, 0.25, 0.05)


def random_filler_letter(rng: random.Random, strategy: FillStrategy = FillStrategy.RANDOM) -> str:
    if strategy == FillStrategy.THEMATIC:
        roll = rng.random()
        if roll < FILLER_WEIGHTS[0]:
            return rng.choice(FILLER_COMMON)
        if roll < FILLER_WEIGHTS[0] + FILLER_WEIGHTS[1]:
            return rng.choice(FILLER_MEDIUM)
        return rng.choice(FILLER_RARE)
    return rng.choice(ALPHABET)
