"""Campaign levels: per-level tuning, themes and world unlocks.

Levels 61 to 300 are generated from a tier table. Each tier starts from a
base configuration and grows with the level offset inside the tier, capped at
``MAX_GRID_SIZE``, ``MAX_WORD_COUNT`` and ``MAX_TIME_LIMIT``. Levels below 61
use the first tier's base values.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from .constants import Difficulty
from .exceptions import UnknownLevelError
from .models import DifficultyConfig
from .rules import DIFFICULTY_CONFIGS


FIRST_GENERATED_LEVEL = 61
LAST_LEVEL = 300
LEVELS_PER_WORLD = 30
LEVELS_PER_THEME_WORLD = 60

MAX_GRID_SIZE = 20
MAX_WORD_COUNT = 25
MAX_TIME_LIMIT = 1800

UNLOCK_COINS_PER_WORLD = 100


@dataclass(frozen=True)
class LevelTier:
    """Growth rules for a contiguous block of levels.

    ``grid`` and ``words`` are ``(base, levels per +1)``; ``time``, ``coins`` and
    ``xp`` are ``(base, increase per level)``.
    """

    first_level: int
    last_level: int
    difficulty: Difficulty
    grid: Tuple[int, int]
    words: Tuple[int, int]
    time: Tuple[int, int]
    coins: Tuple[int, int]
    xp: Tuple[int, int]


LEVEL_TIERS: Tuple[LevelTier, ...] = (
    LevelTier(61, 90, Difficulty.EASY, grid=(8, 6), words=(5, 5), time=(300, 10), coins=(15, 2), xp=(70, 5)),
    LevelTier(91, 150, Difficulty.MEDIUM, grid=(10, 6), words=(7, 5), time=(400, 10), coins=(30, 2), xp=(120, 6)),
    LevelTier(151, 240, Difficulty.HARD, grid=(12, 6), words=(9, 5), time=(600, 10), coins=(50, 3), xp=(200, 7)),
    LevelTier(241, LAST_LEVEL, Difficulty.EXPERT, grid=(15, 6), words=(13, 4), time=(900, 15), coins=(100, 4), xp=(400, 10)),
)

WORLD_THEMES: Tuple[Tuple[str, ...], ...] = (
    ("animals", "food", "sports", "colors", "nature"),
    ("travel", "music", "technology", "professions", "weather"),
    ("science", "space", "history", "geography", "art"),
    ("literature", "philosophy", "medicine", "architecture", "mixed"),
)

LEVEL_NAME_PATTERNS: Dict[str, Tuple[str, ...]] = {
    "animals": ("Safari", "Zoo", "Faune", "Bestiaire", "Ménagerie", "Animalerie"),
    "food": ("Cuisine", "Festin", "Menu", "Dégustation", "Saveurs", "Recettes"),
    "sports": ("Championnat", "Tournoi", "Olympiade", "Compétition", "Défi Sportif"),
    "colors": ("Palette", "Nuancier", "Spectre", "Teintes", "Couleurs"),
    "nature": ("Jardin", "Forêt", "Écosystème", "Botanique", "Biome"),
    "travel": ("Voyage", "Destination", "Exploration", "Circuit", "Périple"),
    "music": ("Concert", "Symphonie", "Festival", "Mélodie", "Harmonie"),
    "technology": ("Innovation", "Numérique", "Tech", "Digital", "Cyber"),
    "professions": ("Métiers", "Carrières", "Professions", "Vocations", "Emplois"),
    "weather": ("Climat", "Météo", "Saisons", "Éléments", "Atmosphère"),
    "science": ("Laboratoire", "Découverte", "Expérience", "Recherche", "Science"),
    "space": ("Cosmos", "Galaxie", "Univers", "Astronomie", "Espace"),
    "history": ("Époque", "Histoire", "Chronique", "Passé", "Ère"),
    "geography": ("Atlas", "Cartographie", "Territoires", "Monde", "Géo"),
    "art": ("Galerie", "Musée", "Création", "Œuvre", "Artistique"),
    "literature": ("Bibliothèque", "Littérature", "Récits", "Écrits", "Textes"),
    "philosophy": ("Pensée", "Philosophie", "Sagesse", "Réflexion", "Idées"),
    "medicine": ("Médecine", "Santé", "Clinique", "Soins", "Thérapie"),
    "architecture": ("Architecture", "Édifices", "Bâtiments", "Structures", "Monuments"),
    "mixed": ("Omniscience", "Universel", "Complet", "Total", "Absolu"),
}

QUALIFIERS: Tuple[str, ...] = (
    "Mystérieux", "Magique", "Épique", "Légendaire", "Grandiose",
    "Sublime", "Exquis", "Parfait", "Ultime", "Suprême",
    "Royal", "Impérial", "Divin", "Céleste", "Extraordinaire",
    "Fantastique", "Merveilleux", "Prodigieux", "Fascinant", "Spectaculaire",
)


@dataclass(frozen=True)
class World:
    id: int
    name: str
    start_level: int
    end_level: int
    difficulty: Difficulty
    unlock_level: Optional[int] = None
    unlock_coins: int = 0

    def contains(self, level_id: int) -> bool:
        return self.start_level <= level_id <= self.end_level


WORLDS: Tuple[World, ...] = (
    World(1, "Découverte", 1, 30, Difficulty.EASY),
    World(2, "Exploration", 31, 60, Difficulty.EASY),
    World(3, "Aventure", 61, 90, Difficulty.MEDIUM, unlock_level=60, unlock_coins=200),
    World(4, "Voyageur", 91, 120, Difficulty.MEDIUM, unlock_level=90, unlock_coins=300),
    World(5, "Explorateur", 121, 150, Difficulty.MEDIUM, unlock_level=120, unlock_coins=400),
    World(6, "Savant", 151, 180, Difficulty.HARD, unlock_level=150, unlock_coins=500),
    World(7, "Expert", 181, 210, Difficulty.HARD, unlock_level=180, unlock_coins=700),
    World(8, "Maître", 211, 240, Difficulty.HARD, unlock_level=210, unlock_coins=1000),
    World(9, "Légende", 241, 270, Difficulty.EXPERT, unlock_level=240, unlock_coins=1500),
    World(10, "Absolu", 271, 300, Difficulty.EXPERT, unlock_level=270, unlock_coins=2000),
)


@dataclass(frozen=True)
class LevelDefinition:
    """Everything needed to build a campaign level."""

    id: int
    name: str
    theme: str
    difficulty: Difficulty
    config: DifficultyConfig
    unlock_level: Optional[int] = None
    unlock_coins: int = 0


def _check_level(level_id: int) -> None:
    if level_id < 1:
        raise UnknownLevelError(f"Level ids start at 1, got {level_id}")


def _tier_for(level_id: int) -> LevelTier:
    for tier in LEVEL_TIERS:
        if level_id <= tier.last_level:
            return tier
    return LEVEL_TIERS[-1]


def level_config(level_id: int) -> DifficultyConfig:
    """Return the tuned configuration of a level.

    Word length range, directions and fill strategy come from the tier's
    difficulty; size, word count, time and rewards grow with the level.
    """
    _check_level(level_id)
    tier = _tier_for(level_id)
    offset = max(level_id - tier.first_level, 0)
    return replace(
        DIFFICULTY_CONFIGS[tier.difficulty],
        grid_size=min(tier.grid[0] + offset // tier.grid[1], MAX_GRID_SIZE),
        word_count=min(tier.words[0] + offset // tier.words[1], MAX_WORD_COUNT),
        time_limit=min(tier.time[0] + offset * tier.time[1], MAX_TIME_LIMIT),
        coin_reward=tier.coins[0] + offset * tier.coins[1],
        xp_reward=tier.xp[0] + offset * tier.xp[1],
    )


def level_difficulty(level_id: int) -> Difficulty:
    _check_level(level_id)
    return _tier_for(level_id).difficulty


def level_theme(level_id: int) -> str:
    """Theme rotates every level inside a block of themes that changes every 60 levels."""
    _check_level(level_id)
    offset = max(level_id - FIRST_GENERATED_LEVEL, 0)
    themes = WORLD_THEMES[min(offset // LEVELS_PER_THEME_WORLD, len(WORLD_THEMES) - 1)]
    return themes[offset % len(themes)]


def level_name(level_id: int) -> str:
    offset = max(level_id - FIRST_GENERATED_LEVEL, 0)
    patterns = LEVEL_NAME_PATTERNS[level_theme(level_id)]
    return f"{patterns[(offset // 10) % len(patterns)]} {QUALIFIERS[offset % len(QUALIFIERS)]}"


def unlock_requirement(level_id: int) -> Optional[Tuple[int, int]]:
    """``(level to complete, coins)`` for the first level of a world, else ``None``."""
    if level_id > FIRST_GENERATED_LEVEL and level_id % LEVELS_PER_WORLD == 1:
        return level_id - 1, UNLOCK_COINS_PER_WORLD * (level_id // LEVELS_PER_WORLD)
    return None


def generate_level(level_id: int) -> LevelDefinition:
    requirement = unlock_requirement(level_id)
    return LevelDefinition(
        id=level_id,
        name=level_name(level_id),
        theme=level_theme(level_id),
        difficulty=level_difficulty(level_id),
        config=level_config(level_id),
        unlock_level=requirement[0] if requirement else None,
        unlock_coins=requirement[1] if requirement else 0,
    )


def generate_all_levels(
    first: int = FIRST_GENERATED_LEVEL, last: int = LAST_LEVEL
) -> List[LevelDefinition]:
    return [generate_level(level_id) for level_id in range(first, last + 1)]


# ------------------------------------------------------------------
# Worlds
# ------------------------------------------------------------------

def world_for_level(level_id: int) -> Optional[World]:
    for world in WORLDS:
        if world.contains(level_id):
            return world
    return None


def world_by_id(world_id: int) -> Optional[World]:
    for world in WORLDS:
        if world.id == world_id:
            return world
    return None


def is_world_unlocked(world_id: int, completed_levels: Iterable[int], coins: int) -> bool:
    """World 1 is always open; others need their gate level done and enough coins."""
    if world_id == 1:
        return True
    world = world_by_id(world_id)
    if world is None:
        return False
    if world.unlock_level is not None and world.unlock_level not in set(completed_levels):
        return False
    return coins >= world.unlock_coins
