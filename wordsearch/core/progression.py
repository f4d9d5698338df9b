"""Player level curve used to report level-ups in game results."""

from __future__ import annotations

import math
from typing import Dict

MAX_LEVEL = 100


def xp_for_level(level: int) -> int:
    """XP needed to go from ``level`` to ``level + 1``."""

    return math.floor(100 * math.pow(1.15, level - 1))


def total_xp_for_level(level: int) -> int:
    return sum(xp_for_level(i) for i in range(1, level))


def level_from_xp(total_xp: int) -> int:
    level = 1
    needed = 0
    while level < MAX_LEVEL:
        needed += xp_for_level(level)
        if total_xp < needed:
            break
        level += 1
    return level


def xp_progress(total_xp: int) -> Dict[str, int]:
    level = level_from_xp(total_xp)
    current_floor = total_xp_for_level(level)
    next_floor = total_xp_for_level(level + 1)
    return {
        "current": total_xp - current_floor,
        "required": next_floor - current_floor,
        "level": level,
    }
